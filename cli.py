import argparse
import json

from models import ApiStatusError, PersistResult

STATUS_HINTS = [
    "API key does not have access to this model",
    "Model requires special permissions",
    "Insufficient credits/balance",
    "Model is not available or disabled",
]


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the ``generate`` and ``edit`` commands."""
    parser = argparse.ArgumentParser(
        description="Generate or edit images through a chat completions image API.",
        epilog="Environment: API_KEY_OVERRIDE (API key), OUTPUT_DIR (where images are saved).",
    )
    parser.add_argument("--model", help="Model to request (defaults to IMAGE_MODEL)")
    parser.add_argument("--output-dir", help="Directory to save images in")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate an image from a text prompt")
    gen.add_argument("prompt", nargs="?", help="Text prompt")

    edit = sub.add_parser(
        "edit",
        help="Modify an existing image",
        epilog='Example: main.py edit input.jpg "make it look like a painting"',
    )
    edit.add_argument("image_path", help="Image to modify")
    edit.add_argument("prompt", nargs="?", help="Modification prompt")
    return parser


def format_result(result: PersistResult) -> str:
    return f"Image saved to: {result.path}\nFormat: {result.format}, Size: {result.byte_size} bytes"


def format_status_error(error: ApiStatusError) -> str:
    """Describe a non-200 response and its likely causes."""
    body = error.body if isinstance(error.body, str) else json.dumps(error.body, indent=2)
    lines = [f"Error response: {body}", "", f"Got error status: {error.status}", "This could mean:"]
    lines += [f"  {i}. {hint}" for i, hint in enumerate(STATUS_HINTS, 1)]
    return "\n".join(lines)
