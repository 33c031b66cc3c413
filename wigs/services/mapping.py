"""Translation between service input/output shapes and the Wig row."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wigs.models.wig import Wig


@dataclass(frozen=True)
class WigInput:
    """Candidate fields for create or update."""

    goal: str | None
    description: str | None = None


@dataclass(frozen=True)
class WigView:
    """Externally visible projection of a Wig."""

    id: int
    goal: str
    description: str | None


def to_record_values(data: WigInput) -> dict[str, Any]:
    """Column values for a new row. No id; strings pass through untouched."""
    return {"goal": data.goal, "description": data.description}


def to_view(wig: Wig) -> WigView:
    # Timestamps stay internal.
    return WigView(id=wig.id, goal=wig.goal, description=wig.description)
