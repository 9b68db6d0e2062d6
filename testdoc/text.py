"""
Flavored text runs.

A paragraph is an ordered list of runs, each carrying its own flavor set.
Chained calls always append a new run; flavors are never merged across calls.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .escaping import escape_html, escape_markdown

DEFAULT_CLASS_PREFIX = "testdoc"


class FlavorSet(BaseModel):
    """Independent styling flags attached to one text run."""

    model_config = ConfigDict(frozen=True)

    italic: bool = False
    bold: bool = False
    preformatted: bool = False
    strikethrough: bool = False
    # Carried on the run but not rendered yet
    link: bool = False


class TextRun(BaseModel):
    """A contiguous piece of text rendered with a single flavor set."""

    model_config = ConfigDict(frozen=True)

    text: str
    flavors: FlavorSet = Field(default_factory=FlavorSet)

    def html(self, class_prefix: str = DEFAULT_CLASS_PREFIX) -> str:
        """Render the run as an HTML fragment.

        Wrapping order is preformatted, italic, bold, strikethrough; the last
        applied tag ends up outermost.
        """
        value = escape_html(self.text)
        if self.flavors.preformatted:
            value = f'<span class="{class_prefix}-preformatted">{value}</span>'
        if self.flavors.italic:
            value = f"<i>{value}</i>"
        if self.flavors.bold:
            value = f"<b>{value}</b>"
        if self.flavors.strikethrough:
            value = f"<s>{value}</s>"
        return value

    def markdown(self) -> str:
        """Render the run as a Markdown fragment.

        Preformatted text is wrapped in backticks and left unescaped.
        """
        if self.flavors.preformatted:
            value = f"`{self.text}`"
        else:
            value = escape_markdown(self.text)
        if self.flavors.italic:
            value = f"_{value}_"
        if self.flavors.bold:
            value = f"**{value}**"
        if self.flavors.strikethrough:
            value = f"~~{value}~~"
        return value


class TextList:
    """Ordered runs forming one paragraph, built through chained calls."""

    def __init__(self, text: str | None = None):
        self.runs: list[TextRun] = []
        if text is not None:
            self.text(text)

    def add_run(self, run: TextRun) -> TextList:
        self.runs.append(run)
        return self

    def _append(self, text: str, **flavors: bool) -> TextList:
        return self.add_run(TextRun(text=text, flavors=FlavorSet(**flavors)))

    def text(self, text: str) -> TextList:
        """Append a plain run."""
        return self._append(text)

    def italic(self, text: str) -> TextList:
        """Append an italic run."""
        return self._append(text, italic=True)

    def bold(self, text: str) -> TextList:
        """Append a bold run."""
        return self._append(text, bold=True)

    def preformatted(self, text: str) -> TextList:
        """Append an inline code run."""
        return self._append(text, preformatted=True)

    def strikethrough(self, text: str) -> TextList:
        """Append a struck-through run."""
        return self._append(text, strikethrough=True)

    def html(self, class_prefix: str = DEFAULT_CLASS_PREFIX) -> str:
        """Join the trimmed HTML of every run with single spaces."""
        return " ".join(run.html(class_prefix).strip() for run in self.runs)

    def markdown(self) -> str:
        """Join the trimmed Markdown of every run with single spaces."""
        return " ".join(run.markdown().strip() for run in self.runs)
