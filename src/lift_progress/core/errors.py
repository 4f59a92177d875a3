"""Exceptions raised by the analytics engine."""


class ConfigurationError(ValueError):
    """
    Raised when a goal or estimator input violates its preconditions.

    Signals a validation bug upstream (e.g. a goal whose target equals its
    baseline, or reps < 1 passed to the 1RM estimator). Not recoverable
    inside the engine.
    """

    pass
