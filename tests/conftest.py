from __future__ import annotations

import json
from typing import Any

import pytest

from pterodactyl.LOGS import log

PANEL = "https://panel.test"
SERVER = "1a2b3c4d"
SIGNED = "https://node.test/download/backup?token=abc"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, content: bytes = b"", chunk: int = 65536):
        self.status_code = status_code
        self._payload = payload
        self.content = content
        self._chunk = chunk
        self.closed = False

    @property
    def text(self) -> str:
        if self._payload is not None:
            return json.dumps(self._payload)
        return self.content.decode("utf-8", "replace")

    def json(self) -> Any:
        if self._payload is None:
            return json.loads(self.content.decode("utf-8"))
        return self._payload

    def iter_content(self, chunk_size: int = 1):
        step = min(chunk_size, self._chunk)
        for i in range(0, len(self.content), step):
            yield self.content[i:i + step]

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.closed = True


class FakeSession:
    """Responde por URL y guarda cada llamada."""

    def __init__(self, routes: dict[str, FakeResponse]):
        self.routes = routes
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": "GET", "url": url, **kwargs})
        if url not in self.routes:
            raise AssertionError(f"Unexpected request to {url}")
        return self.routes[url]

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": "POST", "url": url, **kwargs})
        if url not in self.routes:
            raise AssertionError(f"Unexpected request to {url}")
        return self.routes[url]

    def urls(self) -> list[str]:
        return [c["url"] for c in self.calls]


def backup_item(uuid: str, ok: bool = True, created_at: str = "2023-05-01T12:30:45+00:00") -> dict:
    return {
        "object": "backup",
        "attributes": {
            "uuid": uuid,
            "name": f"Backup {uuid}",
            "ignored_files": [],
            "is_successful": ok,
            "checksum": "sha1:3b1a9d4c",
            "bytes": 1048576,
            "created_at": created_at,
            "completed_at": created_at if ok else None,
        },
    }


def list_url(server: str = SERVER) -> str:
    return f"{PANEL}/api/client/servers/{server}/backups"


def download_url(uuid: str, server: str = SERVER) -> str:
    return f"{PANEL}/api/client/servers/{server}/backups/{uuid}/download"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    for key in ("SLACK_TOKEN", "SLACK_CHANNEL"):
        # setenv primero para que monkeypatch restaure lo que cargue load_env_file
        monkeypatch.setenv(key, "unset")
        monkeypatch.delenv(key)
    monkeypatch.setattr(log, "directory", str(tmp_path / "logs"))


@pytest.fixture()
def cli_args(tmp_path):
    return [
        "--url", PANEL + "/",
        "--apiKey", "ptlc_testkey",
        "--serverId", SERVER,
        "--backupDir", str(tmp_path / "backups"),
        "--logDir", str(tmp_path / "logs"),
        "--envFile", str(tmp_path / "missing.env"),
    ]
