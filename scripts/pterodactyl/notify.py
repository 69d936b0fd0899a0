import os

import requests

from pterodactyl.LOGS import log

SLACK_API = "https://slack.com/api/chat.postMessage"


def enviar_slack(texto: str, attachments=None, session=requests):
    # Define SLACK_TOKEN and SLACK_CHANNEL in slack.env or env before running.
    token = os.environ.get("SLACK_TOKEN", "").strip()
    channel = os.environ.get("SLACK_CHANNEL", "").strip()
    if not token or not channel:
        log.logs(messages="Slack not configured (missing SLACK_TOKEN or SLACK_CHANNEL).")
        return None
    payload = {
        "channel": channel,
        "text": texto,
    }
    if attachments:
        payload["attachments"] = attachments
    try:
        resp = session.post(
            SLACK_API,
            json=payload,
            headers={"Authorization": f"Bearer {token}"},
            timeout=10,
        )
        resp_data = resp.json()
        if not resp_data.get("ok"):
            raise RuntimeError(resp_data.get("error", "unknown_error"))
        log.logs(messages=f"Slack notification sent to {channel}.")
        return resp_data.get("ts")
    except (requests.RequestException, ValueError, RuntimeError) as e:
        msg = f"No se pudo enviar mensaje a Slack: {e}"
        log.logs(messages=msg)
        print(msg)
        return None


def notificar_resultado(server_id: str, ok: bool, detalle: str, session=requests):
    status_text = "✅ Pterodactyl Backup OK" if ok else "⚠️ Pterodactyl Backup FAILED"
    attachments = [{
        "color": "#2eb886" if ok else "#e01e5a",
        "fields": [
            {"title": "Server", "value": server_id, "short": True},
            {"title": "Detalle", "value": detalle, "short": False},
        ],
    }]
    return enviar_slack(status_text, attachments=attachments, session=session)
