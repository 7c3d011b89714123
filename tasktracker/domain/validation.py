from __future__ import annotations

from typing import Optional

from .errors import ValidationError

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def collect_errors(title: Optional[str], description: Optional[str]) -> dict[str, str]:
    errors: dict[str, str] = {}
    if title is None or not title.strip():
        errors["title"] = "Title is required"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Title must be at most {TITLE_MAX_LENGTH} characters"
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = (
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )
    return errors


def ensure_valid(title: Optional[str], description: Optional[str]) -> None:
    """Raise ``ValidationError`` carrying every violated field at once."""
    errors = collect_errors(title, description)
    if errors:
        raise ValidationError(errors)
