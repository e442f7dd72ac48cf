"""Form input adapter — already-parsed submissions into validator input.

Web frameworks hand over form fields as multi-value mappings and uploads as
file objects. ``form_input()`` flattens both into the mapping
``Validator.check()`` expects: a key submitted once maps to its string, a
repeated key (checkbox group, multi-select) to a list, and an upload to its
``UploadInfo`` metadata::

    values = form_input(request.form, request.files, max_file_size=2 * 1024 * 1024)
    validator.check(values)

Parsing request bodies is left to the framework.
"""

from collections.abc import Mapping
from typing import Any

from formcheck.validation.files import UploadError, UploadInfo


def upload_info(upload: Any, max_file_size: int | None = None) -> UploadInfo:
    """Metadata for one uploaded file object.

    Reads ``filename``, ``content_type`` and ``size`` attributes, which
    framework upload objects carry. An empty filename with no content is a
    file input left blank (``NO_FILE``); a size over *max_file_size* bytes
    is ``FORM_SIZE``. ``UploadInfo`` values and metadata mappings are
    passed to ``UploadInfo.coerce`` unchanged.
    """
    if upload is None or isinstance(upload, UploadInfo | Mapping):
        return UploadInfo.coerce(upload)

    name = getattr(upload, "filename", None) or ""
    size = getattr(upload, "size", None) or 0
    if not name and not size:
        error = UploadError.NO_FILE
    elif max_file_size is not None and size > max_file_size:
        error = UploadError.FORM_SIZE
    else:
        error = UploadError.OK
    return UploadInfo(
        name=name,
        error=error,
        size=size,
        type=getattr(upload, "content_type", None) or "",
    )


def form_input(
    values: Mapping[str, Any],
    files: Mapping[str, Any] | None = None,
    *,
    max_file_size: int | None = None,
) -> dict[str, Any]:
    """Flatten parsed form fields and uploads into validator input.

    Args:
        values: Field values. Multi-value mappings exposing ``getlist``
            (werkzeug, starlette) are read through it; otherwise each value
            may be a string or a list of strings (``urllib.parse.parse_qs``).
        files: Upload objects or metadata by field name.
        max_file_size: Byte limit reported as ``FORM_SIZE`` when exceeded.

    Returns:
        A new dict; *values* and *files* are not modified.
    """
    getlist = getattr(values, "getlist", None)
    flat: dict[str, Any] = {}
    for key in values:
        items = getlist(key) if getlist is not None else values[key]
        if not isinstance(items, list | tuple):
            flat[key] = items
        elif len(items) == 1:
            flat[key] = items[0]
        elif not items:
            flat[key] = ""
        else:
            flat[key] = list(items)

    for key, upload in (files or {}).items():
        flat[key] = upload_info(upload, max_file_size)
    return flat
