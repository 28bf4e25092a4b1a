import base64
import binascii
import logging
import re

from models import ErrorKind, PersistResult

log = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"data:image/([A-Za-z0-9]+);base64,(.+)")


def parse_data_url(data_url: str) -> tuple[str, str] | None:
    """Split a data URL into its format token and base64 payload."""
    if not isinstance(data_url, str):
        return None
    match = DATA_URL_PATTERN.fullmatch(data_url)
    if not match:
        return None
    return match.group(1), match.group(2)


def build_data_url(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a ``data:<mime>;base64,...`` URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def extension_for_format(fmt: str) -> str:
    fmt = fmt.lower()
    return "jpg" if fmt == "jpeg" else fmt


def persist(data_url: str, destination_path: str) -> PersistResult:
    """Decode an image data URL and write its bytes to ``destination_path``.

    The payload is decoded completely before the destination is opened, so a
    corrupt payload never leaves a file behind. The format token is returned
    as it appears in the URL.
    """
    parsed = parse_data_url(data_url)
    if parsed is None:
        return PersistResult.failed(ErrorKind.INVALID_FORMAT, "Invalid data URL format")
    fmt, payload = parsed

    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        return PersistResult.failed(ErrorKind.DECODE_FAILED, f"Failed to decode base64 image data: {e}")

    try:
        with open(destination_path, "wb") as f:
            f.write(image_bytes)
    except (OSError, ValueError) as e:
        log.warning("Failed to save image to %s: %s", destination_path, e)
        return PersistResult.failed(ErrorKind.WRITE_FAILED, str(e))

    log.info("Image saved to %s (format=%s, %d bytes)", destination_path, fmt, len(image_bytes))
    return PersistResult.ok(destination_path, fmt, len(image_bytes))
