from __future__ import annotations


class DataLoadError(ValueError):
    """Raised when the schedule, team directory or app config cannot be loaded.

    These failures are fatal: a run never starts without its reference data.
    """

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to load {path}: {reason}")
