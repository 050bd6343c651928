from __future__ import annotations


class DormkeepError(ValueError):
    """Base class for domain errors raised by the services."""


class NotFoundError(DormkeepError):
    pass


class MeterReadingError(DormkeepError):
    """One or more current meter readings are below the stored reading.

    ``problems`` maps room id to a human-readable message.
    """

    def __init__(self, problems: dict[int, str]) -> None:
        self.problems = problems
        super().__init__("; ".join(problems.values()))


class DuplicateBillingError(DormkeepError):
    pass


class RoomFullError(DormkeepError):
    pass


class InvalidTransitionError(DormkeepError):
    pass
