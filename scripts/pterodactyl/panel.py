"""
Cliente mínimo de la API de cliente de Pterodactyl: listar backups, pedir la
URL firmada de descarga y volcar el .tar.gz a disco.
"""

import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import requests

from pterodactyl.config import BackupConfig

FILENAME_FORMAT = "%Y-%m-%d_%H.%M.%S"
RFC3339_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)
CHUNK_SIZE = 1024 * 1024


class BackupError(RuntimeError):
    pass


@dataclass(frozen=True)
class BackupRecord:
    uuid: str
    name: str
    is_successful: bool
    checksum: str
    size_bytes: int
    created_at: str
    completed_at: Optional[str] = None

    @classmethod
    def from_api(cls, item: dict) -> "BackupRecord":
        attrs = item["attributes"]
        return cls(
            uuid=attrs["uuid"],
            name=attrs.get("name") or "",
            is_successful=attrs.get("is_successful") is True,
            checksum=attrs.get("checksum") or "",
            size_bytes=int(attrs.get("bytes") or 0),
            created_at=attrs["created_at"],
            completed_at=attrs.get("completed_at"),
        )


@dataclass(frozen=True)
class DownloadTicket:
    url: str


def _get_json(session, url: str, config: BackupConfig):
    response = session.get(url, headers=config.headers, timeout=config.timeout)
    if not 200 <= response.status_code < 300:
        raise BackupError(
            f"Error HTTP en {url}. "
            f"Código: {response.status_code}. Respuesta: {response.text}"
        )
    try:
        return response.json()
    except ValueError as exc:
        raise BackupError(f"Respuesta no es JSON válido en {url}: {exc}") from exc


def list_backups(config: BackupConfig, session=requests) -> List[BackupRecord]:
    payload = _get_json(session, f"{config.server_url}/backups", config)
    try:
        return [BackupRecord.from_api(item) for item in payload["data"]]
    except (KeyError, TypeError) as exc:
        raise BackupError(f"Listado de backups con formato inesperado: {exc!r}") from exc


def select_latest(backups: List[BackupRecord]) -> BackupRecord:
    """El panel devuelve los backups en orden de creación; el último es el más reciente."""
    if not backups:
        raise BackupError("no backups available")
    target = backups[-1]
    if not target.is_successful:
        raise BackupError("latest backup was not successful")
    return target


def resolve_download_url(config: BackupConfig, backup_uuid: str, session=requests) -> DownloadTicket:
    payload = _get_json(session, f"{config.server_url}/backups/{backup_uuid}/download", config)
    try:
        url = payload["attributes"]["url"]
    except (KeyError, TypeError) as exc:
        raise BackupError(f"Respuesta de descarga sin URL: {exc!r}") from exc
    if not url:
        raise BackupError("Respuesta de descarga sin URL")
    return DownloadTicket(url=url)


def parse_timestamp(value: str) -> datetime:
    """Parsea un timestamp RFC3339; exige separador T, segundos y offset."""
    match = RFC3339_RE.match(value)
    if not match:
        raise ValueError(f"timestamp RFC3339 no válido: {value!r}")
    base, fraction, offset = match.groups()
    # fromisoformat antes de 3.11 solo admite 3 o 6 decimales y no acepta "Z"
    if fraction:
        base += "." + fraction[:6].ljust(6, "0")
    if offset == "Z":
        offset = "+00:00"
    return datetime.fromisoformat(base + offset)


def backup_filename(created_at: str) -> str:
    return parse_timestamp(created_at).strftime(FILENAME_FORMAT) + ".tar.gz"


def fetch_and_store(
    ticket_url: str,
    backup_dir: str,
    server_id: str,
    created_at: str,
    timeout: float = 60,
    session=requests,
) -> str:
    with session.get(ticket_url, stream=True, timeout=timeout) as response:
        if not 200 <= response.status_code < 300:
            raise BackupError(
                f"Error al descargar el backup. Código: {response.status_code}"
            )

        folder = os.path.join(backup_dir, server_id)
        os.makedirs(folder, exist_ok=True)
        output_file = os.path.join(folder, backup_filename(created_at))

        with open(output_file, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)

    return output_file
