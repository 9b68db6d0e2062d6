"""
Rendering engine for testdoc trees.

The ``Renderer`` is a plain text accumulator: elements call its line,
indentation and blank-line primitives while they walk themselves, and the
result is read back once the walk is complete.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Callable

from .log import get_logger
from .text import DEFAULT_CLASS_PREFIX

if TYPE_CHECKING:
    from .config import DocumentConfig
    from .elements import Element

LOGGER = get_logger(__name__)


class OutputFormat(str, Enum):
    """Supported output formats."""

    HTML = "html"
    MARKDOWN = "md"

    @classmethod
    def from_string(cls, value: str | OutputFormat) -> OutputFormat:
        """Parse a format name, accepting a few common aliases."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("markdown", ".md"):
            key = "md"
        elif key in ("htm", ".html"):
            key = "html"
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown output format {value!r} (expected one of: {choices})") from None


class Renderer:
    """Accumulates rendered text and tracks indentation for one render pass."""

    def __init__(
        self,
        root: Element,
        tab_size: int = 2,
        class_prefix: str = DEFAULT_CLASS_PREFIX,
    ):
        """Initialize the renderer.

        Args:
            root: Element the render pass starts from (also the crawl root)
            tab_size: Number of spaces per indentation level
            class_prefix: Prefix for CSS classes emitted in HTML
        """
        self.root = root
        self.tab_size = tab_size
        self.class_prefix = class_prefix
        self._indent = 0
        self._content = ""
        self._padded = False

    # Indentation

    @property
    def indent(self) -> int:
        """Current indentation width in spaces."""
        return self._indent

    @indent.setter
    def indent(self, width: int) -> None:
        self._indent = max(0, width)

    def tab_in(self) -> None:
        self._indent += self.tab_size

    def tab_out(self) -> None:
        self._indent = max(0, self._indent - self.tab_size)

    def set_tab_count(self, tabs: int) -> None:
        """Set the indentation to ``tabs`` levels."""
        self.indent = self.tab_size * tabs

    # Output primitives

    def _write(self, text: str) -> None:
        if not text:
            return
        self._content += text
        if text.endswith("\n"):
            self._padded = False

    def pad_line(self) -> None:
        """Emit the indentation for the current line, once per line."""
        if self._padded:
            return
        self._content += " " * self._indent
        self._padded = True

    def render_line(self, content: str) -> None:
        """Start a fresh line (unless already at one) and write ``content`` to it."""
        if self._content and not self._content.endswith("\n"):
            self._write("\n")
        self.pad_line()
        self._write(content)

    def render_append(self, content: str) -> None:
        """Continue the current line with ``content``."""
        self.pad_line()
        self._write(content)

    def render_empty_space(self, amount: int) -> None:
        """Make the buffer end with at least ``amount`` newlines.

        Existing trailing newlines count toward the total and are never
        removed. Nothing is written into an empty buffer.
        """
        if not self._content:
            return
        trailing = len(self._content) - len(self._content.rstrip("\n"))
        if amount > trailing:
            self._write("\n" * (amount - trailing))

    # Traversal

    def crawl(self, callback: Callable[[int, Element], None]) -> None:
        """Visit every element under the root depth-first.

        The root is visited at depth 0. A container's children are queued at
        the front so they are visited right after their parent.
        """
        pending: deque[tuple[Element, int]] = deque([(self.root, 0)])
        while pending:
            element, depth = pending.popleft()
            get_elements = getattr(element, "get_elements", None)
            if callable(get_elements):
                children = get_elements()
                pending.extendleft((child, depth + 1) for child in reversed(children))
            callback(depth, element)

    def get_content(self) -> str:
        return self._content


def render(
    element: Element,
    fmt: str | OutputFormat | None = None,
    tab_size: int | None = None,
    config: DocumentConfig | None = None,
) -> str:
    """Render a document or any element into a string.

    Args:
        element: Document or element to render
        fmt: ``"html"`` or ``"md"`` (defaults to the configured format)
        tab_size: Spaces per indentation level (defaults to the configured size)
        config: Rendering configuration (defaults to the element's own, if any)

    Returns:
        The rendered text

    Raises:
        ValueError: If the format is unknown
        UnsupportedRenderError: If an element cannot be rendered in the format
    """
    if config is None:
        config = getattr(element, "config", None)
    if config is None:
        from .config import DocumentConfig

        config = DocumentConfig()

    output_format = OutputFormat.from_string(fmt if fmt is not None else config.default_format)
    renderer = Renderer(
        element,
        tab_size=config.tab_size if tab_size is None else tab_size,
        class_prefix=config.class_prefix,
    )

    LOGGER.debug("Rendering %s as %s", type(element).__name__, output_format.value)
    if output_format is OutputFormat.HTML:
        element.render_html(0, renderer)
    else:
        element.render_markdown(0, renderer)
    return renderer.get_content()
