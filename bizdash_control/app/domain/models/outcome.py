from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class MutationOutcome:
    status: OutcomeStatus
    message: str | None = None
    code: str | None = None
    trace_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @classmethod
    def success(cls, trace_id: str | None = None) -> "MutationOutcome":
        return cls(status=OutcomeStatus.SUCCESS, trace_id=trace_id)

    @classmethod
    def failure(cls, message: str, code: str | None = None, trace_id: str | None = None) -> "MutationOutcome":
        return cls(status=OutcomeStatus.FAILURE, message=message, code=code, trace_id=trace_id)
