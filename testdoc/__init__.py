"""
testdoc - Living documentation built and rendered from Python.

This package provides:
- A document tree of sections, flavored text, notes, images and code samples
- An extensible authoring context (register new element and container kinds)
- Deterministic rendering to HTML or Markdown

Configuration is managed through testdoc.yaml or a DocumentConfig instance.
"""

__version__ = "1.0.0"

from .config import DocumentConfig, load_config
from .context import ContextBase, OwnershipLedger, Populated
from .document import Document, document
from .elements import Container, Contents, Element, Image, Note, PreformattedBlock, Section, Text
from .errors import DanglingElementError, DocError, RegistrationError, UnsupportedRenderError
from .registry import Context, ContextFactory
from .rendering import OutputFormat, Renderer, render
from .text import FlavorSet, TextList, TextRun

__all__ = [
    # Config
    "DocumentConfig",
    "load_config",
    # Authoring
    "Context",
    "ContextBase",
    "ContextFactory",
    "Document",
    "OwnershipLedger",
    "Populated",
    "document",
    # Elements
    "Container",
    "Contents",
    "Element",
    "Image",
    "Note",
    "PreformattedBlock",
    "Section",
    "Text",
    # Text
    "FlavorSet",
    "TextList",
    "TextRun",
    # Rendering
    "OutputFormat",
    "Renderer",
    "render",
    # Errors
    "DanglingElementError",
    "DocError",
    "RegistrationError",
    "UnsupportedRenderError",
]
