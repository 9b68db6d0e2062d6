"""
Exceptions raised by testdoc.

Rendering faults abort the whole render pass; authoring faults are raised
at the call that misuses a context or the registry.
"""

from __future__ import annotations


class DocError(Exception):
    """Base class for all testdoc errors."""


class UnsupportedRenderError(DocError, NotImplementedError):
    """An element has no rendering for the requested output format."""

    def __init__(self, element: object, fmt: str):
        self.element = element
        self.format = fmt
        super().__init__(f"{type(element).__name__} cannot be rendered as {fmt}")


class RegistrationError(DocError, ValueError):
    """An element or container kind cannot be registered under a name."""


class DanglingElementError(DocError):
    """An element was created through a context that is already disposed."""
