import logging
import os
import re
import secrets
import time

from api_client import build_payload, post_chat_completion
from config import DEFAULT_PROMPT, OUTPUT_DIR
from image_extractor import extract_image
from image_persister import extension_for_format, parse_data_url, persist
from models import ApiStatusError, ErrorKind, ImageGenerationError, PersistResult

log = logging.getLogger(__name__)


def ensure_directory_exists(dir_path: str) -> None:
    """Create ``dir_path`` (and parents) if it does not exist yet."""
    if not os.path.isdir(dir_path):
        os.makedirs(dir_path, exist_ok=True)
        log.info("Created directory: %s", dir_path)


def slugify(text: str, max_length: int = 40) -> str:
    """Turn a prompt into a filesystem friendly file stem."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "image"


def save_response_image(body, output_dir: str, stem: str) -> PersistResult:
    """Extract the image from an API response body and write it to ``output_dir``.

    The file is named ``<stem>-<unix time>-<random hex>.<ext>`` with the extension taken
    from the data URL's format. Raises ImageGenerationError when no image is
    present or it cannot be saved.
    """
    data_url = extract_image(body)
    if not data_url:
        raise ImageGenerationError(ErrorKind.NO_IMAGE_FOUND, "No image found in response")

    log.debug("Image data URL found (first 100 chars): %s...", data_url[:100])
    parsed = parse_data_url(data_url)
    ext = extension_for_format(parsed[0]) if parsed else "png"
    output_path = os.path.join(output_dir, f"{stem}-{int(time.time())}-{secrets.token_hex(4)}.{ext}")

    result = persist(data_url, output_path)
    if not result.success:
        raise ImageGenerationError(result.error_kind, result.error_detail)
    return result


def request_image(content, model: str | None = None, api_key: str | None = None):
    """Send ``content`` to the image API and return the decoded body.

    Raises ApiStatusError on any status other than 200.
    """
    payload = build_payload(content, model=model)
    status, body = post_chat_completion(payload, api_key=api_key)
    log.info("Response status: %s", status)
    if status != 200:
        raise ApiStatusError(status, body)
    return body


def generate_image(prompt: str | None = None, output_dir: str | None = None,
                   model: str | None = None, api_key: str | None = None) -> PersistResult:
    """Generate an image for ``prompt`` and save it locally."""
    prompt = prompt or DEFAULT_PROMPT
    output_dir = output_dir or OUTPUT_DIR
    ensure_directory_exists(output_dir)

    body = request_image(prompt, model=model, api_key=api_key)
    return save_response_image(body, output_dir, slugify(prompt))
