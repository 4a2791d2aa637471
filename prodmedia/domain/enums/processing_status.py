from __future__ import annotations
from enum import StrEnum


class ProcessingStatus(StrEnum):
    not_started = "not_started"
    pending = "pending"
    completed = "completed"
    completed_with_errors = "completed_with_errors"
    failed = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (
            ProcessingStatus.completed,
            ProcessingStatus.completed_with_errors,
            ProcessingStatus.failed,
        )

    @classmethod
    def parse(cls, value: object) -> "ProcessingStatus | None":
        """Lenient parse of a stored status; unknown or missing values yield None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
