"""Media type registry used to validate the ``mediaTypes`` option."""

import mimetypes
from typing import Protocol, runtime_checkable


@runtime_checkable
class MediaTypeRegistry(Protocol):
    """Maps a media type to its file extensions. An empty set means unknown."""

    def extensions_for(self, media_type: str) -> set[str]: ...


class MimetypesRegistry:
    """Registry backed by the standard ``mimetypes`` database.

    Args:
        extra_types: Additional media type to extensions mappings, e.g.
            ``{"image/x-custom": {"xcst"}}``
    """

    def __init__(self, extra_types: dict[str, set[str]] | None = None):
        self._types = mimetypes.MimeTypes()
        self._extra_types = {k.lower(): set(v) for k, v in (extra_types or {}).items()}

    def extensions_for(self, media_type: str) -> set[str]:
        if not isinstance(media_type, str):
            return set()
        normalized = media_type.strip().lower()
        extensions = {ext.lstrip(".") for ext in self._types.guess_all_extensions(normalized, strict=False)}
        return extensions | self._extra_types.get(normalized, set())
