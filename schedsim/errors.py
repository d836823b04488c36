"""
Errors raised while validating simulator input.

The scheduling engines assume well-formed input; these exceptions are raised
at the boundary (prompts, workload files, dispatch).
"""


class SchedulerInputError(ValueError):
    """Base class for invalid simulator input."""


class InvalidCount(SchedulerInputError):
    """The number of processes is not a positive integer."""


class InvalidProcess(SchedulerInputError):
    """A process has a negative arrival, non-positive burst, negative priority or a bad pid."""


class InvalidChoice(SchedulerInputError):
    """The algorithm selector does not name a known policy."""


class InvalidQuantum(SchedulerInputError):
    """Round Robin was requested with a quantum that is not a positive integer."""
