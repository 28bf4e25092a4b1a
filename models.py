from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Reasons an image could not be pulled out of a response and saved."""

    NO_IMAGE_FOUND = "no_image_found"
    INVALID_FORMAT = "invalid_format"
    DECODE_FAILED = "decode_failed"
    WRITE_FAILED = "write_failed"


class ResponseShape(Enum):
    """Where in the response a message object was found."""

    PROVIDER_RESPONSE = "providerResponse"  # providerResponse.choices[0].message
    TOP_LEVEL = "choices"  # choices[0].message


class ContentKind(Enum):
    """What a message's ``content`` field holds."""

    ABSENT = "absent"
    TEXT = "text"
    ITEMS = "items"


@dataclass(frozen=True)
class PersistResult:
    """Outcome of writing a data URL to disk."""

    success: bool
    path: str | None = None
    format: str | None = None
    byte_size: int | None = None
    error_kind: ErrorKind | None = None
    error_detail: str | None = None

    @classmethod
    def ok(cls, path: str, fmt: str, byte_size: int) -> "PersistResult":
        return cls(success=True, path=path, format=fmt, byte_size=byte_size)

    @classmethod
    def failed(cls, kind: ErrorKind, detail: str | None = None) -> "PersistResult":
        return cls(success=False, error_kind=kind, error_detail=detail)


class ApiRequestError(RuntimeError):
    """The HTTP request to the image API could not be completed."""


class ApiStatusError(RuntimeError):
    """The image API answered with a non-200 status."""

    def __init__(self, status: int, body):
        super().__init__(f"Image API returned status {status}")
        self.status = status
        self.body = body


class ImageGenerationError(RuntimeError):
    """An image could not be extracted from a response or saved."""

    def __init__(self, kind: ErrorKind, detail: str | None = None):
        message = kind.value if not detail else f"{kind.value}: {detail}"
        super().__init__(message)
        self.kind = kind
        self.detail = detail
