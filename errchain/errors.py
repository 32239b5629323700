from __future__ import annotations


class TraceInvariantError(RuntimeError):
    """Raised when an error chain violates a construction invariant.

    This is not a recoverable condition: it means some node was built outside
    of ``annotate``/``wrap`` with a shape they never produce.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"errchain invariant violated: {detail}")


__all__ = ["TraceInvariantError"]
