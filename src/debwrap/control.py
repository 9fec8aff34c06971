"""Validation and rendering of the DEBIAN/control manifest."""

import re

from .exceptions import ValidationError
from .models import CONTROL_FIELDS, MANDATORY_FIELDS, PackageMetadata

WRAP_WIDTH = 79

_FIELD_NAMES = {
    "package": "Package",
    "source": "Source",
    "version": "Version",
    "section": "Section",
    "priority": "Priority",
    "architecture": "Architecture",
    "essential": "Essential",
    "depends": "Depends",
    "installed_size": "Installed-Size",
    "maintainer": "Maintainer",
    "homepage": "Homepage",
    "description": "Description",
}

# A run of up to WRAP_WIDTH characters ending at spaces or a line end,
# or failing that a hard cut at WRAP_WIDTH.
_WRAP_RE = re.compile(
    rf"(.{{1,{WRAP_WIDTH}}})( +|$\n?)|(.{{1,{WRAP_WIDTH}}})", re.MULTILINE
)


def _is_absent(value: object) -> bool:
    return value is None or value == ""


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def validate(metadata: PackageMetadata) -> None:
    """Raises ValidationError for the first missing mandatory field."""
    for name in MANDATORY_FIELDS:
        if _is_absent(getattr(metadata, name)):
            raise ValidationError(name)


def wrap_extended_description(text: str) -> str:
    """
    Wraps a long description into control-file continuation lines.

    Every chunk is followed by a newline and the leading space of the next
    continuation line; the final two characters of the result are dropped
    so the block does not end with a dangling continuation.
    """
    wrapped = _WRAP_RE.sub(
        lambda m: f"{m.group(1) or ''}{m.group(3) or ''}\n ", text
    )
    return f" {wrapped[:-2]}\n"


def build(metadata: PackageMetadata) -> str:
    """Renders the control file. Call `validate` first."""
    control = ""
    for name in CONTROL_FIELDS:
        value = getattr(metadata, name)
        if not _is_absent(value):
            control += f"{_FIELD_NAMES[name]}: {_format_value(value)}\n"
    if not _is_absent(metadata.description_extended):
        control += wrap_extended_description(metadata.description_extended)
    return control
