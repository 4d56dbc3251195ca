from __future__ import annotations


class DriveFocusError(Exception):
    """Base class for errors raised by the focus session core."""


class PreconditionError(DriveFocusError):
    """A session command was issued in a state that does not allow it."""


class InvalidInput(DriveFocusError):
    """A classification payload did not carry a usable focus probability."""
