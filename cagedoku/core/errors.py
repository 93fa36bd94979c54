"""Exceptions raised by the puzzle engine."""


class InvariantViolation(RuntimeError):
    """A broken precondition: unknown region id, bad sum, failed sanity check."""


class SearchLimitExceeded(RuntimeError):
    """The solver hit its node or time cap before finishing."""

    def __init__(self, message: str, nodes: int = 0, elapsed: float = 0.0):
        super().__init__(message)
        self.nodes = nodes
        self.elapsed = elapsed
