import logging
import sys

from cli import build_parser, format_result, format_status_error
from config import LOG_LEVEL, has_real_api_key
from image_editor import edit_image
from image_generator import generate_image
from models import ApiRequestError, ApiStatusError, ImageGenerationError

"""
Generate or edit an image with a chat completions image API.

Workflow:
1. Build a request with modalities ["image", "text"] (prompt, or prompt + source image).
2. POST it to the API's /api/v1/chat/completions endpoint.
3. Locate the image data URL in the response.
4. Decode it and save it to the output directory.
"""


def main(argv=None):
    """Run the command line workflow and return a process exit code."""
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    if not has_real_api_key():
        print("Warning: Using default API key. Please set API_KEY_OVERRIDE environment variable.\n")

    try:
        if args.command == "edit":
            print(f"Editing image: {args.image_path}")
            result = edit_image(args.image_path, args.prompt, output_dir=args.output_dir, model=args.model)
        else:
            print("Starting image generation...")
            result = generate_image(args.prompt, output_dir=args.output_dir, model=args.model)
        print(format_result(result))
    except ApiStatusError as e:
        print(format_status_error(e))
        return 1
    except (ImageGenerationError, ApiRequestError, OSError) as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
