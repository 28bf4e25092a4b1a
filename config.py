import os
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from a .env file if present

API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"

# Credentials
API_KEY = os.getenv("API_KEY_OVERRIDE") or API_KEY_PLACEHOLDER

# Optional settings
API_ENDPOINT = os.getenv("API_ENDPOINT", "rahyana.ir")
API_SCHEME = os.getenv("API_SCHEME", "https")
MODEL = os.getenv("IMAGE_MODEL", "google/gemini-3-pro-image-preview")
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "generated-images")
EDIT_OUTPUT_DIR = os.getenv("EDIT_OUTPUT_DIR", os.getenv("OUTPUT_DIR", "edited-images"))
DEFAULT_PROMPT = os.getenv("DEFAULT_PROMPT", "a dog in a city")
DEFAULT_EDIT_PROMPT = os.getenv("DEFAULT_EDIT_PROMPT", "enhance this image and make it more vibrant")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", "500000"))  # base64 adds ~33% on the wire
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "120"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def has_real_api_key(api_key: str | None = None) -> bool:
    """Return False when only the placeholder key is configured."""
    key = API_KEY if api_key is None else api_key
    return bool(key) and key != API_KEY_PLACEHOLDER
