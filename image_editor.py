import logging
import mimetypes
import os

from config import DEFAULT_EDIT_PROMPT, EDIT_OUTPUT_DIR, MAX_UPLOAD_BYTES
from image_generator import ensure_directory_exists, request_image, save_response_image, slugify
from image_persister import build_data_url
from models import PersistResult

log = logging.getLogger(__name__)

# Extensions the platform mimetypes database may not know
EXTRA_MIME_TYPES = {
    "webp": "image/webp",
    "bmp": "image/bmp",
}


def get_mime_type(file_path: str) -> str:
    """Guess an image MIME type from the file extension (JPEG if unknown)."""
    mime = mimetypes.guess_type(file_path)[0]
    if mime and mime.startswith("image/"):
        return mime
    ext = os.path.splitext(file_path)[1].lstrip(".").lower()
    return EXTRA_MIME_TYPES.get(ext, "image/jpeg")


def encode_image(image_path: str) -> str:
    """Read ``image_path`` and return it as a data URL."""
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Image file not found: {image_path}")
    if not os.access(image_path, os.R_OK):
        raise PermissionError(f"Image file is not readable: {image_path}")

    size = os.path.getsize(image_path)
    if size > MAX_UPLOAD_BYTES:
        log.warning("Image is large (%s bytes, recommended max %s); the API may reject it",
                    f"{size:,}", f"{MAX_UPLOAD_BYTES:,}")

    with open(image_path, "rb") as f:
        data = f.read()
    return build_data_url(data, get_mime_type(image_path))


def build_edit_content(prompt: str, data_url: str) -> list[dict]:
    return [
        {"type": "text", "text": prompt},
        {"type": "image_url", "image_url": {"url": data_url}},
    ]


def edit_image(image_path: str, prompt: str | None = None, output_dir: str | None = None,
               model: str | None = None, api_key: str | None = None) -> PersistResult:
    """Send an existing image with a modification prompt and save the result."""
    prompt = prompt or DEFAULT_EDIT_PROMPT
    output_dir = output_dir or EDIT_OUTPUT_DIR

    data_url = encode_image(image_path)
    ensure_directory_exists(output_dir)

    body = request_image(build_edit_content(prompt, data_url), model=model, api_key=api_key)
    stem = os.path.splitext(os.path.basename(image_path))[0]
    return save_response_image(body, output_dir, f"edited-{slugify(stem)}")
