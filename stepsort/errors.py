"""Error types raised by the stepping engine and its controller."""


class ConfigurationError(ValueError):
    """Rejected run input: unknown algorithm, bad array, size or speed."""


class OperationCancelled(Exception):
    """Raised at a checkpoint once the run has been cancelled.

    The driver loop catches it; it never reaches callers of the controller.
    """


class TransitionError(RuntimeError):
    """A controller call that the current RunState does not allow."""
