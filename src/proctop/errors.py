"""Exceptions raised by proctop."""


class ProctopError(Exception):
    """Base class for proctop errors."""


class SurfaceError(ProctopError):
    """The terminal could not be set up, read from or restored."""
