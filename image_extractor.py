"""Locate the generated image inside a chat-completions response.

Responses come in two known shapes. Some gateways wrap the upstream
provider's answer as ``providerResponse.choices[0].message``; others return
``choices[0].message`` directly. The provider-wrapped shape always wins.

Inside a message, the image is either the first entry of ``images`` or an
item of ``content`` (which may also be a bare data URL string).
"""

from collections.abc import Iterator, Mapping, Sequence

from models import ContentKind, ResponseShape

DATA_URL_PREFIX = "data:image/"


def _is_data_url(value) -> bool:
    return isinstance(value, str) and value.startswith(DATA_URL_PREFIX)


def _is_list(value) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _first_message(container):
    """Return ``container["choices"][0]["message"]`` when it is a mapping."""
    if not isinstance(container, Mapping):
        return None
    choices = container.get("choices")
    if not _is_list(choices) or not choices:
        return None
    choice = choices[0]
    if not isinstance(choice, Mapping):
        return None
    message = choice.get("message")
    return message if isinstance(message, Mapping) else None


def iter_messages(response) -> Iterator[tuple[ResponseShape, Mapping]]:
    """Yield the messages present in ``response`` in priority order."""
    if not isinstance(response, Mapping):
        return
    message = _first_message(response.get("providerResponse"))
    if message is not None:
        yield ResponseShape.PROVIDER_RESPONSE, message
    message = _first_message(response)
    if message is not None:
        yield ResponseShape.TOP_LEVEL, message


def classify_content(content) -> ContentKind:
    if isinstance(content, str):
        return ContentKind.TEXT
    if _is_list(content):
        return ContentKind.ITEMS
    return ContentKind.ABSENT


def _nested(item: Mapping, outer: str, inner: str):
    value = item.get(outer)
    if not isinstance(value, Mapping):
        return None
    return value.get(inner)


def _from_images(images) -> str | None:
    # Only the first entry is considered.
    if not _is_list(images) or not images:
        return None
    item = images[0]
    if not isinstance(item, Mapping) or item.get("type") != "image_url":
        return None
    url = _nested(item, "image_url", "url")
    return url if _is_data_url(url) else None


def _from_content_item(item) -> str | None:
    if not isinstance(item, Mapping):
        return None
    kind = item.get("type")
    if kind == "image_url":
        url = _nested(item, "image_url", "url")
        if _is_data_url(url):
            return url
    elif kind == "image":
        data = _nested(item, "image", "data")
        if _is_data_url(data):
            return data
    return None


def extract_from_message(message) -> str | None:
    """Return the first image data URL found in a single message."""
    if not message or not isinstance(message, Mapping):
        return None

    url = _from_images(message.get("images"))
    if url:
        return url

    content = message.get("content")
    kind = classify_content(content)
    if kind is ContentKind.TEXT:
        return content if _is_data_url(content) else None
    if kind is ContentKind.ITEMS:
        for item in content:
            url = _from_content_item(item)
            if url:
                return url
    return None


def extract_image(response) -> str | None:
    """Return the image data URL from an API response, or None.

    The provider-wrapped message is consulted first; the top-level message is
    only inspected when the first yields nothing.
    """
    for _shape, message in iter_messages(response):
        url = extract_from_message(message)
        if url:
            return url
    return None
