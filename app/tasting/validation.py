"""Field validation helpers shared by the ledgers.

Helpers collect problems into an ``errors`` dict keyed by the wire field
name instead of raising on the first one, so a client gets every message
for a request at once. Call ``raise_if_errors`` after the last check.
"""

from app.models.review import MAX_SCORE, MIN_SCORE
from app.tasting.errors import ValidationFailedError


def clean_text(
    value: str | None,
    field: str,
    max_length: int,
    errors: dict[str, str],
    required: bool = False,
) -> str | None:
    """Trim a free-text value; blank values become None.

    Records a message in ``errors`` when a required value is missing or the
    trimmed value is longer than ``max_length``.
    """
    cleaned = value.strip() if value is not None else ""
    if not cleaned:
        if required:
            errors[field] = "This field is required."
        return None
    if len(cleaned) > max_length:
        errors[field] = f"Must be at most {max_length} characters."
    return cleaned


def check_score(value, field: str, errors: dict[str, str]) -> int | None:
    """Validate a review score (integer in MIN_SCORE..MAX_SCORE)."""
    if isinstance(value, bool) or not isinstance(value, int):
        errors[field] = "Must be an integer."
        return None
    if not MIN_SCORE <= value <= MAX_SCORE:
        errors[field] = f"Must be between {MIN_SCORE} and {MAX_SCORE}."
        return None
    return value


def raise_if_errors(errors: dict[str, str]) -> None:
    """Raise a ValidationFailedError carrying every collected message, if any."""
    if errors:
        raise ValidationFailedError(errors)
