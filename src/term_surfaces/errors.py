"""
Exceptions raised by the surface layer.

Two kinds of fault exist: a call into the terminal service reported failure
(:class:`TerminalError`), or an internal invariant was violated
(:class:`FailedAssertion`).
"""

from .native import ERR


class SurfaceError(Exception):
    """Base class for every fault raised by this package."""


class TerminalError(SurfaceError):
    """A terminal operation failed. No further detail is available."""

    def __init__(self):
        super().__init__("terminal operation failed")


class FailedAssertion(SurfaceError, AssertionError):
    """An invariant was violated (bad geometry, color table misuse, ...)."""

    def __init__(self, message="failed assertion"):
        super().__init__(message)


def check(ret):
    """Raise TerminalError if a service call returned the ERR sentinel."""
    if ret == ERR:
        raise TerminalError()
    return ret


def ensure(cond, message="failed assertion"):
    """Raise FailedAssertion unless cond holds."""
    if not cond:
        raise FailedAssertion(message)
