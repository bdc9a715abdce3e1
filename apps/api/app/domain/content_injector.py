"""Rewrites upload placeholders in article content with resolved media URLs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias

JsonValue: TypeAlias = dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None

UPLOAD_KEY_FIELD = "upload_key"
URL_FIELD = "url"
IMAGE_BLOCK_TYPE = "image"
FILE_KEY_FIELDS = ("fileKey", "file_key")


def inject_uploaded_urls(node: JsonValue, urls: Mapping[str, str] | None) -> JsonValue:
    """Return a copy of ``node`` with upload placeholders resolved against ``urls``.

    Two placeholder shapes are recognized:

    * ``{"upload_key": "<key>", ...}``: when the key resolves, ``upload_key`` is
      dropped and ``url`` is set. Unknown keys are left untouched.
    * ``{"type": "image", "data": {"file": {"fileKey": "<key>", ...}}}``: when
      the key resolves to a non-blank URL, ``data.file.url`` is overwritten and
      the key is kept so later edits can reference it again.

    Every other object and array is walked recursively; key and element order
    are preserved and the input is never mutated.
    """
    if not urls:
        return node

    match node:
        case dict():
            return _inject_object(node, urls)
        case list():
            return [inject_uploaded_urls(item, urls) for item in node]
        case _:
            return node


def _inject_object(obj: dict[str, JsonValue], urls: Mapping[str, str]) -> dict[str, JsonValue]:
    rewritten = dict(obj)

    match rewritten.get(UPLOAD_KEY_FIELD):
        case str() as key if key in urls:
            del rewritten[UPLOAD_KEY_FIELD]
            rewritten[URL_FIELD] = urls[key]

    match rewritten:
        case {"type": str() as block_type, "data": {"file": dict() as file_obj} as data} if (
            block_type.lower() == IMAGE_BLOCK_TYPE
        ):
            url = _resolve_file_url(file_obj, urls)
            if url is not None:
                rewritten["data"] = {**data, "file": {**file_obj, URL_FIELD: url}}

    return {key: inject_uploaded_urls(value, urls) for key, value in rewritten.items()}


def _resolve_file_url(file_obj: Mapping[str, Any], urls: Mapping[str, str]) -> str | None:
    for field in FILE_KEY_FIELDS:
        match file_obj.get(field):
            case str() as raw if raw.strip():
                url = urls.get(raw.strip())
                if url is not None and url.strip():
                    return url
                return None
    return None


__all__ = ["JsonValue", "inject_uploaded_urls"]
