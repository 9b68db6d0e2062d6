"""
Element and container model.

Every element knows how to render itself in each output format by calling
into a ``Renderer``. Containers additionally own an ordered list of children.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .errors import UnsupportedRenderError
from .escaping import escape_html, escape_markdown, slugify
from .text import TextList

if TYPE_CHECKING:
    from .rendering import Renderer

# Deepest heading level HTML and Markdown support
MAX_HEADING_LEVEL = 6


def heading_level(depth: int) -> int:
    """Heading level for a section rendered at ``depth``."""
    return min(MAX_HEADING_LEVEL, depth + 1)


class Element(ABC):
    """A node of a testdoc tree."""

    @abstractmethod
    def render_html(self, depth: int, renderer: Renderer) -> None:
        """Write this element as HTML."""

    @abstractmethod
    def render_markdown(self, depth: int, renderer: Renderer) -> None:
        """Write this element as Markdown."""


class Container(Element):
    """An element that owns an ordered list of children."""

    def __init__(self) -> None:
        self.elements: list[Element] = []

    def add_element(self, element: Element) -> None:
        self.elements.append(element)

    def remove_element(self, element: Element) -> bool:
        """Remove ``element`` (matched by identity).

        Returns:
            True if the element was a child of this container
        """
        for index, child in enumerate(self.elements):
            if child is element:
                del self.elements[index]
                return True
        return False

    def get_elements(self) -> list[Element]:
        return self.elements

    def render_children_html(self, depth: int, renderer: Renderer) -> None:
        for element in self.elements:
            element.render_html(depth, renderer)

    def render_children_markdown(self, depth: int, renderer: Renderer) -> None:
        for element in self.elements:
            element.render_markdown(depth, renderer)


class Text(TextList, Element):
    """A paragraph of flavored text."""

    def render_html(self, depth: int, renderer: Renderer) -> None:
        renderer.render_line(self.html(renderer.class_prefix))

    def render_markdown(self, depth: int, renderer: Renderer) -> None:
        renderer.render_empty_space(2)
        renderer.render_line(self.markdown())


class Note(TextList, Element):
    """A highlighted remark, rendered as a callout or block quote."""

    def render_html(self, depth: int, renderer: Renderer) -> None:
        renderer.render_line(f'<div class="{renderer.class_prefix}-note">')
        renderer.tab_in()
        renderer.render_line(self.html(renderer.class_prefix))
        renderer.tab_out()
        renderer.render_line("</div>")

    def render_markdown(self, depth: int, renderer: Renderer) -> None:
        renderer.render_line("> ")
        renderer.render_append(self.markdown())


class Image(Element):
    """An image with a caption."""

    def __init__(self, path: str, label: str):
        self.path = path
        self.label = label

    def render_html(self, depth: int, renderer: Renderer) -> None:
        label = escape_html(self.label)
        renderer.render_line("<figure>")
        renderer.tab_in()
        renderer.render_line(f'<img alt="{label}" src="{escape_html(self.path)}"/>')
        renderer.render_line(f"<figcaption>{label}</figcaption>")
        renderer.tab_out()
        renderer.render_line("</figure>")

    def render_markdown(self, depth: int, renderer: Renderer) -> None:
        label = escape_markdown(self.label)
        renderer.render_line(f"![{label}]({self.path})")
        renderer.render_line(f"> {label}")


class PreformattedBlock(Element):
    """A fenced block of code or program output."""

    def __init__(self, text: str, language_hint: str | None = None):
        self.lines = text.split("\n")
        self.language_hint = language_hint

    def render_html(self, depth: int, renderer: Renderer) -> None:
        raise UnsupportedRenderError(self, "html")

    def render_markdown(self, depth: int, renderer: Renderer) -> None:
        renderer.render_line("```")
        if self.language_hint:
            renderer.render_append(self.language_hint)

        # Blank lines are only written once the next non-blank line shows up,
        # so trailing ones are dropped. The fence line absorbs one leading blank.
        empty_space = 0
        for line in self.lines:
            if not line:
                empty_space += 1
                continue
            renderer.render_empty_space(empty_space)
            renderer.render_line(line)
            empty_space = 1
        renderer.render_line("```")


class Section(Container):
    """A heading followed by its child elements."""

    def __init__(self, title: str):
        super().__init__()
        self.title = title

    @property
    def slug(self) -> str:
        return slugify(self.title)

    def render_html(self, depth: int, renderer: Renderer) -> None:
        level = heading_level(depth)
        renderer.render_line(f"<h{level}>{escape_html(self.title)}</h{level}>")
        self.render_children_html(depth + 1, renderer)

    def render_markdown(self, depth: int, renderer: Renderer) -> None:
        level = heading_level(depth)
        renderer.render_line(f"{'#' * level} {escape_markdown(self.title)}")
        self.render_children_markdown(depth + 1, renderer)


class Contents(Element):
    """Table of contents for every section of the rendered tree."""

    def render_html(self, depth: int, renderer: Renderer) -> None:
        raise UnsupportedRenderError(self, "html")

    def render_markdown(self, depth: int, renderer: Renderer) -> None:
        previous_indent = renderer.indent

        def add_entry(section_depth: int, element: Element) -> None:
            if isinstance(element, Section):
                renderer.set_tab_count(section_depth - 1)
                renderer.render_line(f"- [{element.title}](#{element.slug})")

        renderer.crawl(add_entry)
        renderer.indent = previous_indent
