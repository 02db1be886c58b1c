"""Exception types raised by brepkit.

Only contract faults are raised. Invalid user input and kernel failures are
returned as ``Result.err`` values instead (see :mod:`brepkit.result`).
"""


class BrepkitError(Exception):
    """Base class for all brepkit exceptions."""


class ForeignShapeError(BrepkitError, TypeError):
    """A shape that was not built by this kernel binding reached a kernel call."""

    def __init__(self, message: str = "The OCC kernel only supports OCC geometries."):
        super().__init__(message)


class DisposedShapeError(BrepkitError, RuntimeError):
    """The native handle of a shape wrapper was used after ``dispose()``."""


class OccUnavailableError(BrepkitError, RuntimeError):
    """pythonocc-core could not be imported."""


class ResultAccessError(BrepkitError, RuntimeError):
    """The value of an error result (or the error of an ok result) was read."""


__all__ = [
    "BrepkitError",
    "ForeignShapeError",
    "DisposedShapeError",
    "OccUnavailableError",
    "ResultAccessError",
]
