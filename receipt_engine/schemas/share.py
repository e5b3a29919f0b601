"""
User-facing feedback and share pipeline outcomes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from receipt_engine.models.enums import ShareChannel, ShareState


class Notice(BaseModel):
    """A user-visible alert: title plus message."""
    model_config = ConfigDict(frozen=True)

    title: str
    message: str


class StateTransition(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_state: ShareState
    to_state: ShareState
    reason: Optional[str] = None


class ShareOutcome(BaseModel):
    """Result of one user-triggered share."""
    model_config = ConfigDict(frozen=True)

    state: ShareState
    channel: Optional[ShareChannel] = None
    notice: Optional[Notice] = None
    transitions: tuple[StateTransition, ...] = ()
    in_progress: bool = False

    @property
    def shared(self) -> bool:
        return self.state == ShareState.SHARED
