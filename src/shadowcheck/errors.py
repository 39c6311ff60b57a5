"""Exceptions raised by shadowcheck."""

from shadowcheck.syntax.nodes import Node


class ShadowCheckError(Exception):
    """Base class for shadowcheck errors."""


class MalformedNodeError(ShadowCheckError):
    """A node that must have a particular shape does not.

    Raised while examining a single declaration; the detector reports it as a
    diagnostic anchored at the offending node and moves on to the next one.
    """

    def __init__(self, node: Node, message: str) -> None:
        super().__init__(message)
        self.node = node
        self.message = message


class DumpFormatError(ShadowCheckError, ValueError):
    """A resolved package dump could not be decoded."""
