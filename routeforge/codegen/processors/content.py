"""Content type collection and classification."""

from collections.abc import Iterable, Mapping
from typing import Any

from routeforge.codegen.models import ContentKind

__all__ = ['collect_content_types', 'get_content_kind']

JSON_CONTENT_TYPE = 'application/json'
URL_ENCODED_CONTENT_TYPE = 'application/x-www-form-urlencoded'
FORM_DATA_CONTENT_TYPE = 'multipart/form-data'


def collect_content_types(
    bodies: Iterable[Any], extra: Iterable[str | None] | None = None
) -> list[str]:
    """Collect the media types of request/response bodies.

    Args:
        bodies: Request bodies or responses; their ``content`` keys are used.
        extra: Explicitly declared media types (``consumes``, ``produces``...),
            listed first.

    Returns:
        De-duplicated, non-empty media types in first-seen order.
    """
    content_types: list[str | None] = list(extra or [])
    for body in bodies:
        if isinstance(body, Mapping) and isinstance(body.get('content'), Mapping):
            content_types.extend(body['content'].keys())
    return list(dict.fromkeys(ct for ct in content_types if ct))


def get_content_kind(content_types: Iterable[str]) -> ContentKind:
    """Classify media types, JSON first, then URL-encoded, form data, images."""
    content_types = [ct for ct in content_types if ct]

    if JSON_CONTENT_TYPE in content_types or any(
        ct.endswith('+json') for ct in content_types
    ):
        return ContentKind.JSON

    if URL_ENCODED_CONTENT_TYPE in content_types:
        return ContentKind.URL_ENCODED

    if FORM_DATA_CONTENT_TYPE in content_types:
        return ContentKind.FORM_DATA

    if any('image/' in ct for ct in content_types):
        return ContentKind.IMAGE

    return ContentKind.OTHER
