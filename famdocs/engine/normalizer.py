"""French typography clean-up applied to filled document text."""

import re
from collections.abc import Mapping

from famdocs.engine.models import BLANK_MARKER

NBSP = "\u00a0"

_DOT_RUN = re.compile(r"\.{2,}")
# Digits with optional inner separators (spaces, nbsp, dots, commas), never
# spanning a line break.
_AMOUNT_BEFORE_EURO = re.compile(r"(\d(?:[\d.,\u00a0\u202f ]*\d)?)[ \t\u00a0\u202f]*€")
_EURO_BEFORE_DOT = re.compile(r"\u00a0€[ \t]+\.")
_PLACEHOLDER = re.compile(r"\{\{([^{}]+)\}\}")


def normalize_text(text: str) -> str:
    """Fix typography artifacts left by variable substitution.

    - runs of two or more dots become a single ellipsis;
    - an amount and the euro sign are bound by a non-breaking space;
    - a full stop detached from the euro sign is re-attached.

    Applying it twice gives the same result as applying it once.
    """
    out = _DOT_RUN.sub("…", text)
    out = _AMOUNT_BEFORE_EURO.sub(lambda m: f"{m.group(1)}{NBSP}€", out)
    out = _EURO_BEFORE_DOT.sub(f"{NBSP}€.", out)
    return out


def substitute_placeholders(text: str, values: Mapping[str, str | None]) -> str:
    """Replace every ``{{name}}`` placeholder in a single pass.

    Non-blank values are inserted as is, so a value that itself contains
    ``{{other}}`` is never expanded. Missing or blank values become the
    blank marker.
    """

    def replace(match: re.Match[str]) -> str:
        value = values.get(match.group(1).strip())
        if value is None or not value.strip():
            return BLANK_MARKER
        return value

    return _PLACEHOLDER.sub(replace, text)
