"""Result envelopes shared by the operation set and the dispatcher."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Status(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"


ACTION_FAILED = "actionFailed"


class BlockchainError(Exception):
    """Raised by a blockchain operation; the message names what failed."""


class FunctionResponse(BaseModel):
    """Outcome of one blockchain operation."""

    status: Status
    action: str
    message: str
    data: dict[str, Any] | None = None

    @classmethod
    def failed(cls, message: str) -> FunctionResponse:
        return cls(status=Status.FAILED, action=ACTION_FAILED, message=message)


class CommandResult(BaseModel):
    """Normalized answer to one user command."""

    action: str = ""
    message: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
    status: Status | None = None

    def merge(self, response: FunctionResponse) -> None:
        """Fold one operation outcome in; later non-empty fields win."""
        self.status = response.status
        if response.message:
            self.message = response.message
        if response.data:
            self.data = response.data
        if response.action:
            self.action = response.action
