"""Multipart field naming and generated object names for article media."""

from __future__ import annotations

from pathlib import PurePosixPath
import threading
import time

CONTENT_FILES_PREFIX = "content_files["
CONTENT_FILES_SUFFIX = "]"
CONTENT_FILE_FLAT_PREFIX = "content_file_"

CONTENT_OBJECT_PREFIX = "articles/content"
HEADER_OBJECT_PREFIX = "articles/header"

_FALLBACK_FILENAME = "file"


def extract_upload_key(field_name: str) -> str | None:
    """Return the upload key encoded in a multipart field name.

    Accepts ``content_files[<key>]`` and the flat ``content_file_<key>`` form.
    Blank keys and any other field name yield ``None``.
    """
    if field_name.startswith(CONTENT_FILES_PREFIX) and field_name.endswith(CONTENT_FILES_SUFFIX):
        key = field_name[len(CONTENT_FILES_PREFIX) : -len(CONTENT_FILES_SUFFIX)].strip()
        return key or None
    if field_name.startswith(CONTENT_FILE_FLAT_PREFIX):
        key = field_name[len(CONTENT_FILE_FLAT_PREFIX) :].strip()
        return key or None
    return None


def sanitize_filename(filename: str | None) -> str:
    """Reduce a client-supplied filename to a bare name with no path components."""
    name = PurePosixPath((filename or "").replace("\\", "/")).name
    name = name.replace("..", "").strip()
    return name or _FALLBACK_FILENAME


class _MonotonicNanos:
    """Wall-clock nanoseconds, bumped so no two calls in this process return the same value."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def __call__(self) -> int:
        with self._lock:
            now = max(time.time_ns(), self._last + 1)
            self._last = now
            return now


unique_timestamp = _MonotonicNanos()


def content_object_name(key: str, filename: str | None) -> str:
    # Keys are client-chosen; keep them inside the content prefix.
    safe_key = key.replace("/", "_").replace("\\", "_").replace("..", "")
    return f"{CONTENT_OBJECT_PREFIX}/{safe_key}_{unique_timestamp()}_{sanitize_filename(filename)}"


def header_object_name(filename: str | None) -> str:
    return f"{HEADER_OBJECT_PREFIX}_{unique_timestamp()}_{sanitize_filename(filename)}"
