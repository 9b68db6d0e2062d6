"""
Document root and the default document factory.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Awaitable, Callable, Iterable

from .config import DocumentConfig
from .context import CallbackOrList, ContextBase, ContextCallback, OwnershipLedger, Populated
from .elements import Container, Contents, Element, Image, Note, PreformattedBlock, Section, Text
from .log import get_logger
from .registry import ContextFactory

if TYPE_CHECKING:
    from .rendering import Renderer

LOGGER = get_logger(__name__)


class Document(Container):
    """Root container of a testdoc tree, and the entry point for authoring."""

    def __init__(
        self,
        factory: ContextFactory | None = None,
        config: DocumentConfig | None = None,
    ):
        """Initialize an empty document.

        Args:
            factory: Registered element and container kinds (none if omitted)
            config: Authoring and rendering configuration
        """
        super().__init__()
        self.factory = factory or ContextFactory()
        self.config = config or DocumentConfig()
        self._ledger = OwnershipLedger()

    def use_element(self, name: str, constructor: Callable[..., Element]) -> Document:
        """Register an element kind and return this document for chaining."""
        self.factory = self.factory.use_element(name, constructor)
        return self

    def use_container(self, name: str, constructor: Callable[..., Container]) -> Document:
        """Register a container kind and return this document for chaining."""
        self.factory = self.factory.use_container(name, constructor)
        return self

    def context(self) -> ContextBase:
        """Open a root-level context bound to this document.

        The caller must dispose it (or use it as a ``with`` block) to attach
        what was created through it.
        """
        return ContextBase(self, self.factory, self._ledger, self.config.strict)

    def body(self, callback_or_list: CallbackOrList) -> Awaitable[Document]:
        """Write into the document from a list of elements or a callback.

        A list is attached before this returns; a callback runs once the
        result is awaited.

        Args:
            callback_or_list: Ordered elements, or a (sync or async) callback
                receiving the document's context

        Returns:
            An awaitable resolving to this document once every nested
            callback has completed
        """
        if not callable(callback_or_list):
            return Populated(self._write_list(callback_or_list))
        return self._write_callback(callback_or_list)

    def build(self, callback_or_list: CallbackOrList) -> Document:
        """Run ``body`` to completion from synchronous code."""
        if not callable(callback_or_list):
            return self._write_list(callback_or_list)
        return asyncio.run(self._write_callback(callback_or_list))

    def _write_list(self, elements: Iterable[Element]) -> Document:
        with self.context() as root:
            root.claim(self, elements)
        LOGGER.debug("Document body complete with %d top-level element(s)", len(self.elements))
        return self

    async def _write_callback(self, callback: ContextCallback) -> Document:
        with self.context() as root:
            await root.container(self, callback)
        LOGGER.debug("Document body complete with %d top-level element(s)", len(self.elements))
        return self

    def render_html(self, depth: int, renderer: Renderer) -> None:
        renderer.render_line("<html>")
        renderer.tab_in()
        self.render_children_html(depth, renderer)
        renderer.tab_out()
        renderer.render_line("</html>")

    def render_markdown(self, depth: int, renderer: Renderer) -> None:
        self.render_children_markdown(depth, renderer)


def document(config: DocumentConfig | None = None) -> Document:
    """Create a document with the standard element and container kinds."""
    return (
        Document(config=config)
        .use_element("text", Text)
        .use_element("note", Note)
        .use_element("image", Image)
        .use_element("sample", PreformattedBlock)
        .use_element("contents", Contents)
        .use_container("section", Section)
    )
