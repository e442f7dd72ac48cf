"""File upload constraint.

Uploads are judged on their transport metadata, not on a field value: the
upload status code reported by the form parser, the original filename and
the content type. A rule with ``Check.FILE`` runs only this constraint; the
value constraints are skipped for that field.

Metadata is the field's own value in the submitted data, or comes from the
separate ``files`` mapping given to ``Validator.check()``::

    validator = Validator({
        "avatar": {"check": CH_REQUIRED | CH_FILE, "extension": "jpg, png"},
    })
    validator.check(form_values, files={"avatar": UploadInfo("me.png")})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from formcheck.validation.context import FieldContext
from formcheck.validation.kinds import Check
from formcheck.validation.sink import ErrorSink


class UploadError(IntEnum):
    """Upload status codes, numbered as PHP's ``UPLOAD_ERR_*`` constants."""

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


@dataclass(frozen=True, slots=True)
class UploadInfo:
    """Metadata of one uploaded file as the transport reported it."""

    name: str = ""
    error: int = UploadError.OK
    size: int = 0
    type: str = ""

    @property
    def extension(self) -> str:
        """Text after the last ``.`` of the filename, empty if there is none."""
        _base, dot, ext = self.name.rpartition(".")
        return ext if dot else ""

    @classmethod
    def coerce(cls, raw: Any) -> UploadInfo:
        """Normalize metadata given as ``UploadInfo`` or a mapping.

        Anything else, including a field that was never submitted, reads as
        "no file submitted".
        """
        if isinstance(raw, UploadInfo):
            return raw
        if isinstance(raw, Mapping):
            return cls(
                name=str(raw.get("name") or ""),
                error=int(raw.get("error") or UploadError.OK),
                size=int(raw.get("size") or 0),
                type=str(raw.get("type") or ""),
            )
        return cls(error=UploadError.NO_FILE)


def group_uploads(raw: Any) -> Mapping[str, Any]:
    """Resolve the uploads of a field group.

    Accepts a plain field -> metadata mapping, or the attribute-major layout
    PHP uses for grouped uploads (``{"name": {"a": ...}, "error": {"a": ...}}``),
    which is turned into per-field metadata.
    """
    if not isinstance(raw, Mapping):
        return {}
    if isinstance(raw.get("error"), Mapping):
        per_field: dict[str, dict[str, Any]] = {}
        for attribute, values in raw.items():
            if not isinstance(values, Mapping):
                continue
            for field_name, value in values.items():
                per_field.setdefault(field_name, {})[attribute] = value
        return per_field
    return raw


# ---------------------------------------------------------------------------
# Constraint
# ---------------------------------------------------------------------------

UPLOAD_ERROR = "The error occured while uploading file."
SIZE_ERROR = "Filesize excedeed max allowed size."
NO_FILE_ERROR = "Please select file."
EXTENSION_ERROR = "Allowed file types are %s."
MIME_TYPE_ERROR = "Allowed MIME types are %s."


def _allowed(spec: str) -> list[str]:
    return [part.strip(" ") for part in spec.split(",")]


def resolve_upload(value: Any, ctx: FieldContext) -> UploadInfo:
    """Find the upload metadata for the field under test."""
    if ctx.files is not None:
        return UploadInfo.coerce(ctx.files.get(ctx.field))
    return UploadInfo.coerce(value)


def file(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Validate an upload's transport status, then its extension and type.

    "No file submitted" only fails when the rule also has ``Check.REQUIRED``.
    """
    rule = ctx.rule
    upload = resolve_upload(value, ctx)

    match upload.error:
        case UploadError.OK:
            pass
        case UploadError.FORM_SIZE:
            sink.push(rule.message if rule.message is not None else SIZE_ERROR)
            return False
        case UploadError.NO_FILE:
            if rule.has(Check.REQUIRED):
                sink.push(rule.message if rule.message is not None else NO_FILE_ERROR)
                return False
            return True
        case _:
            sink.push(UPLOAD_ERROR)
            return False

    if rule.extension is not None and upload.extension not in _allowed(rule.extension):
        sink.push(EXTENSION_ERROR % rule.extension)
        return False

    if rule.mime_types is not None and upload.type not in _allowed(rule.mime_types):
        sink.push(MIME_TYPE_ERROR % rule.mime_types)
        return False

    return True
