"""
ZGrid — grid/errors.py
Exception taxonomy shared by the console, session and backends.
"""


class ZGridError(Exception):
    """Base class for every error raised by ZGrid itself."""


class ConsoleBoundsError(ZGridError, IndexError):
    """A point operation (get/set/set_r) addressed a cell outside the console."""


class SessionStateError(ZGridError, RuntimeError):
    """A session operation was called before open() or after close()."""


class BackendError(ZGridError, RuntimeError):
    """The windowing backend failed (typically while creating the window)."""
