import sys

import requests

from pterodactyl.config import load_env_file, parse_args
from pterodactyl.LOGS import log
from pterodactyl.notify import notificar_resultado
from pterodactyl.panel import fetch_and_store, list_backups, resolve_download_url, select_latest


def descargar_backup(config, session=requests) -> str:
    backups = list_backups(config, session=session)
    target = select_latest(backups)
    log.logs(messages=f"Backup seleccionado para {config.server_id}: {target.uuid} ({target.created_at})")

    ticket = resolve_download_url(config, target.uuid, session=session)
    return fetch_and_store(
        ticket.url,
        config.backup_dir,
        config.server_id,
        target.created_at,
        timeout=config.timeout,
        session=session,
    )


def main(argv=None, session=requests) -> int:
    config = parse_args(argv)
    log.directory = config.log_dir
    load_env_file(config.env_file)

    try:
        output_file = descargar_backup(config, session=session)
    except Exception as exc:
        error_msg = f"Error al descargar el backup de {config.server_id}: {exc}"
        print(error_msg, file=sys.stderr)
        log.logs(messages=error_msg)
        notificar_resultado(config.server_id, ok=False, detalle=str(exc), session=session)
        return 1

    msg = f"Backup guardado correctamente en {output_file}"
    print(msg)
    log.logs(messages=msg)
    notificar_resultado(config.server_id, ok=True, detalle=output_file, session=session)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
