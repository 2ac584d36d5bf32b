"""Domain error taxonomy.

Errors subclass ``ValueError`` and carry their code as the message, so callers
can keep switching on ``str(exc)``.
"""

from __future__ import annotations


class HabitTrackerError(ValueError):
    code = "error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(self.code)
        self.detail = detail


class ValidationError(HabitTrackerError):
    code = "validation_error"


class ConflictError(HabitTrackerError):
    code = "conflict"


class NotFoundError(HabitTrackerError):
    code = "not_found"
