import logging
import mimetypes
import os
import secrets

from flask import Flask, request, jsonify, send_file, session
from flask_cors import CORS

from config import MODEL, OUTPUT_DIR, API_KEY, has_real_api_key
from image_generator import generate_image
from models import ApiRequestError, ApiStatusError, ErrorKind, ImageGenerationError

log = logging.getLogger(__name__)

# HTTP status returned for each failure kind
ERROR_STATUS = {
    ErrorKind.NO_IMAGE_FOUND: 502,
    ErrorKind.INVALID_FORMAT: 502,
    ErrorKind.DECODE_FAILED: 502,
    ErrorKind.WRITE_FAILED: 500,
}


def json_object() -> dict | None:
    """Request body as a JSON object, or None when it is missing or any other type."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def nonce_is_valid(data: dict) -> bool:
    expected = session.get("nonce")
    if not expected:
        return False
    return secrets.compare_digest(str(data.get("nonce", "")).encode(), expected.encode())


def create_app(output_dir: str | None = None) -> Flask:
    app = Flask(__name__)
    app.secret_key = os.getenv("FLASK_SECRET_KEY", secrets.token_urlsafe(32))
    app.config.update(
        IMAGE_API_KEY=API_KEY,
        IMAGE_MODEL=MODEL,
        IMAGE_OUTPUT_DIR=os.path.abspath(output_dir or OUTPUT_DIR),
    )
    CORS(app)

    @app.route("/api/settings", methods=["GET"])
    def get_settings():
        """Current model and whether a real API key is configured"""
        return jsonify({
            "model": app.config["IMAGE_MODEL"],
            "hasApiKey": has_real_api_key(app.config["IMAGE_API_KEY"]),
        })

    @app.route("/api/settings", methods=["POST"])
    def update_settings():
        data = json_object()
        if data is None:
            return jsonify({"error": "Expected a JSON object"}), 400
        if not nonce_is_valid(data):
            return jsonify({"error": "Security check failed"}), 403

        api_key, model = data.get("apiKey"), data.get("model")
        if any(v is not None and not isinstance(v, str) for v in (api_key, model)):
            return jsonify({"error": "apiKey and model must be strings"}), 400
        if api_key and api_key.strip():
            app.config["IMAGE_API_KEY"] = api_key.strip()
        if model and model.strip():
            app.config["IMAGE_MODEL"] = model.strip()
        return get_settings()

    @app.route("/api/nonce")
    def issue_nonce():
        """Issue a token that must accompany settings and generate requests from this session"""
        session["nonce"] = secrets.token_urlsafe(16)
        return jsonify({"nonce": session["nonce"]})

    @app.route("/api/generate", methods=["POST"])
    def generate():
        data = json_object()
        if data is None:
            return jsonify({"error": "Expected a JSON object"}), 400
        if not nonce_is_valid(data):
            return jsonify({"error": "Security check failed"}), 403

        prompt = data.get("prompt")
        if not isinstance(prompt, str) or not prompt.strip():
            return jsonify({"error": "Please provide a prompt"}), 400

        if not has_real_api_key(app.config["IMAGE_API_KEY"]):
            return jsonify({"error": "API key is not configured"}), 400

        try:
            result = generate_image(
                prompt.strip(),
                output_dir=app.config["IMAGE_OUTPUT_DIR"],
                model=app.config["IMAGE_MODEL"],
                api_key=app.config["IMAGE_API_KEY"],
            )
        except ApiStatusError as e:
            log.warning("Image API returned status %s", e.status)
            return jsonify({"error": f"API request failed with status {e.status}"}), 502
        except ApiRequestError as e:
            log.warning("Image API request failed: %s", e)
            return jsonify({"error": "Could not reach the image API"}), 502
        except ImageGenerationError as e:
            log.warning("Image generation failed: %s", e)
            return jsonify({"error": str(e), "kind": e.kind.value}), ERROR_STATUS[e.kind]

        filename = os.path.basename(result.path)
        return jsonify({
            "imageUrl": f"/api/images/{filename}",
            "format": result.format,
            "byteSize": result.byte_size,
        })

    @app.route("/api/images/<filename>")
    def serve_image(filename):
        """Serve generated images"""
        if ".." in filename or "/" in filename or "\\" in filename:
            return jsonify({"error": "Invalid filename"}), 400

        image_path = os.path.join(app.config["IMAGE_OUTPUT_DIR"], filename)
        if not os.path.isfile(image_path):
            return jsonify({"error": "Image not found"}), 404
        mimetype = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        return send_file(image_path, mimetype=mimetype)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    port = int(os.getenv("PORT", 5000))
    debug = os.getenv("FLASK_ENV") == "development"

    print(f"Starting image API web server on http://localhost:{port}")
    create_app().run(host="0.0.0.0", port=port, debug=debug)
