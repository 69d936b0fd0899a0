import argparse
import os
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

DEFAULT_BACKUP_DIR = os.path.join(".", "backups")
DEFAULT_LOG_DIR = "Logs-pterodactyl/"
DEFAULT_TIMEOUT = 60
DEFAULT_ENV_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "slack.env")


@dataclass(frozen=True)
class BackupConfig:
    url: str
    api_key: str
    server_id: str
    backup_dir: str = DEFAULT_BACKUP_DIR
    timeout: float = DEFAULT_TIMEOUT
    log_dir: str = DEFAULT_LOG_DIR
    env_file: str = DEFAULT_ENV_PATH

    @property
    def server_url(self) -> str:
        return f"{self.url.rstrip('/')}/api/client/servers/{self.server_id}"

    @property
    def headers(self) -> dict:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }


def panel_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise argparse.ArgumentTypeError(f"URL del panel no válida: {value!r}")
    return value


def non_empty(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("el valor no puede estar vacío")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pterodactyl-backup",
        description="Descarga el último backup correcto de un servidor Pterodactyl.",
    )
    p.add_argument("--url", required=True, type=panel_url, help="Pterodactyl Panel URL")
    p.add_argument("--apiKey", required=True, type=non_empty, help="Pterodactyl API Key")
    p.add_argument("--serverId", required=True, type=non_empty, help="Pterodactyl Server ID")
    p.add_argument("--backupDir", default=DEFAULT_BACKUP_DIR, help="Directory where the backups are stored")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="HTTP timeout in seconds")
    p.add_argument("--logDir", default=DEFAULT_LOG_DIR, help="Directory for the run log")
    p.add_argument("--envFile", default=DEFAULT_ENV_PATH, help="KEY=value file with SLACK_TOKEN/SLACK_CHANNEL")
    return p


def parse_args(argv: Optional[List[str]] = None) -> BackupConfig:
    args = build_parser().parse_args(argv)
    return BackupConfig(
        url=args.url,
        api_key=args.apiKey,
        server_id=args.serverId,
        backup_dir=args.backupDir,
        timeout=args.timeout,
        log_dir=args.logDir,
        env_file=args.envFile,
    )


def load_env_file(env_path: str) -> None:
    """Carga KEY=value en os.environ sin pisar variables ya definidas."""
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):]
            if "=" not in line:
                continue
            key, val = line.split("=", 1)
            key = key.strip()
            val = val.strip().strip("\"'")
            if key and key not in os.environ:
                os.environ[key] = val
