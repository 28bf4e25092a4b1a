import logging

import requests

from config import API_ENDPOINT, API_KEY, API_SCHEME, MODEL, REQUEST_TIMEOUT
from models import ApiRequestError

log = logging.getLogger(__name__)


def api_url(endpoint: str | None = None, scheme: str | None = None) -> str:
    """Return the chat completions URL for ``endpoint`` (host[:port])."""
    return f"{scheme or API_SCHEME}://{endpoint or API_ENDPOINT}/api/v1/chat/completions"


def build_payload(content, model: str | None = None) -> dict:
    """Build a chat completions request asking for image output.

    ``content`` is either a prompt string or a list of content items.
    """
    return {
        "model": model or MODEL,
        "messages": [
            {
                "role": "user",
                "content": content,
            }
        ],
        "modalities": ["image", "text"],
    }


def post_chat_completion(payload: dict, api_key: str | None = None, endpoint: str | None = None) -> tuple[int, object]:
    """POST ``payload`` to the image API.

    Returns the status code and the decoded JSON body, or the raw response
    text when the body is not JSON.
    """
    url = api_url(endpoint)
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key or API_KEY}",
    }
    log.debug("POST %s model=%s", url, payload.get("model"))
    try:
        resp = requests.post(url, json=payload, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise ApiRequestError(f"Request to {url} failed: {e}") from e

    try:
        body = resp.json()
    except ValueError:
        body = resp.text
    return resp.status_code, body
