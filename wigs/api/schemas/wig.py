"""WIG request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from wigs.services.mapping import WigInput


class WigRequest(BaseModel):
    """Body for create and full-replace update.

    No constraints here: field rules are enforced by the service so the
    400 envelope carries its messages.
    """

    goal: str | None = None
    description: str | None = None

    def to_input(self) -> WigInput:
        return WigInput(goal=self.goal, description=self.description)


class WigResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    goal: str
    description: str | None
