import json
import os
import sys
import traceback

from slack_sdk.webhook import WebhookClient


def find_traceback_locations():
    _, _, tb = sys.exc_info()
    return [
        (fs.filename, fs.lineno, fs.name)
        for fs in traceback.extract_tb(tb)
        # only frames from our own package
        if "/seqslice/" in fs.filename
    ]


def send_slack_message(err, request=None):
    text = {"type": err.__class__.__name__, "exception": str(err), "location": find_traceback_locations()}

    if request:
        text["client"] = str(request.client.host) if request.client else None
        text["request"] = f"{request.method} {request.url}"

    text = json.dumps(text)
    slack_webhook_url = os.getenv("SLACK_WEBHOOK_URL")
    if slack_webhook_url:
        client = WebhookClient(url=slack_webhook_url)
        client.send(
            text=text,
            blocks=[
                {
                    "type": "section",
                    "text": {"type": "plain_text", "text": text},
                }
            ],
        )
    else:
        print(f"EXCEPTION_HANDLER: {text}", file=sys.stderr)
