"""Slug helpers for projects and organizations."""

import re
import unicodedata
from typing import Final

MAX_SLUG_LENGTH: Final[int] = 60
FALLBACK_SLUG: Final[str] = "item"
PROJECT_SLUG_REGEX: Final[str] = r"^[a-z0-9]+(-[a-z0-9]+)*$"

_PROJECT_SLUG_PATTERN: Final[re.Pattern[str]] = re.compile(PROJECT_SLUG_REGEX)
_DISALLOWED_CHARS: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9\s_-]")
_SEPARATOR_RUNS: Final[re.Pattern[str]] = re.compile(r"[\s_-]+")


def slugify(value: str | None) -> str:
    """Derive a URL-safe slug from free text.

    Accents are folded to ASCII, anything that is not a letter, digit,
    whitespace, hyphen or underscore is dropped, and separator runs collapse
    to a single hyphen. Empty results fall back to 'item'.

    E.g., 'Café Roll-out  2025' -> 'cafe-roll-out-2025'
    """
    folded = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    s = _DISALLOWED_CHARS.sub("", folded.lower()).strip()
    s = _SEPARATOR_RUNS.sub("-", s).strip("-")
    s = s[:MAX_SLUG_LENGTH].rstrip("-")
    return s or FALLBACK_SLUG


def validate_project_slug_format(slug: str) -> str:
    """Validate project slug format.

    This validates **format only**. Length is enforced by Field(max_length=...).
    """
    if not _PROJECT_SLUG_PATTERN.match(slug):
        raise ValueError(
            "Slug must contain only lowercase letters and numbers, "
            "separated by single hyphens"
        )
    return slug
