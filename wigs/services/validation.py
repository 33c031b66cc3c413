"""Field-level validation for WIG input."""

from __future__ import annotations

from wigs.models.wig import DESCRIPTION_MAX_LENGTH, GOAL_MAX_LENGTH


def validate_wig(goal: str | None, description: str | None) -> dict[str, str]:
    """Return ``{field: message}`` for every violated field; empty means valid.

    At most one message per field: required-ness is checked before length.
    Lengths are counted in code points, the unit of a VARCHAR(n) column.
    """
    errors: dict[str, str] = {}

    if goal is None or not goal.strip():
        errors["goal"] = "goal is required"
    elif len(goal) > GOAL_MAX_LENGTH:
        errors["goal"] = f"goal must be at most {GOAL_MAX_LENGTH} characters"

    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = (
            f"description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )

    return errors
