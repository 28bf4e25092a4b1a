"""
Tests for the command line entry point.
"""

from unittest.mock import patch

import pytest

from cli import build_parser, format_status_error
from main import main
from models import ApiRequestError, ApiStatusError, ErrorKind, ImageGenerationError, PersistResult


def test_generate_command(capsys) -> None:
    result = PersistResult.ok("out/a-cat-1.png", "png", 10)
    with patch("main.generate_image", return_value=result) as mock_gen:
        assert main(["generate", "a cat"]) == 0

    mock_gen.assert_called_once_with("a cat", output_dir=None, model=None)
    out = capsys.readouterr().out
    assert "Image saved to: out/a-cat-1.png" in out
    assert "Format: png, Size: 10 bytes" in out


def test_edit_command_with_options() -> None:
    result = PersistResult.ok("edited/x.png", "png", 3)
    with patch("main.edit_image", return_value=result) as mock_edit:
        assert main(["--model", "m", "--output-dir", "edited", "edit", "in.jpg", "make it blue"]) == 0
    mock_edit.assert_called_once_with("in.jpg", "make it blue", output_dir="edited", model="m")


def test_status_error_prints_hints(capsys) -> None:
    with patch("main.generate_image", side_effect=ApiStatusError(402, {"error": "balance"})):
        assert main(["generate"]) == 1
    out = capsys.readouterr().out
    assert "Got error status: 402" in out
    assert "Insufficient credits/balance" in out


@pytest.mark.parametrize("error", [
    ImageGenerationError(ErrorKind.NO_IMAGE_FOUND, "No image found in response"),
    ApiRequestError("connection refused"),
    FileNotFoundError("Image file not found: x.jpg"),
])
def test_failures_exit_nonzero(error, capsys) -> None:
    with patch("main.edit_image", side_effect=error):
        assert main(["edit", "x.jpg"]) == 1
    assert "Error:" in capsys.readouterr().out


def test_edit_requires_image_path() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["edit"])


def test_format_status_error_with_text_body() -> None:
    text = format_status_error(ApiStatusError(500, "Internal Server Error"))
    assert text.startswith("Error response: Internal Server Error")
