"""Exceptions raised by the kanpad core."""


class KanpadError(Exception):
    """Base exception for kanpad errors."""

    pass


class NotFoundError(KanpadError):
    """A record referenced by id does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class ValidationFailure(KanpadError):
    """Input rejected before reaching the store (e.g. blank title)."""

    pass


class StoreUnavailableError(KanpadError):
    """The entity store could not read or write its data."""

    pass


class IllegalTransitionError(KanpadError):
    """A lifecycle transition was requested from a state that forbids it."""

    def __init__(self, task_id: str, message: str) -> None:
        super().__init__(f"{task_id}: {message}")
        self.task_id = task_id
