"""Markdown and syntax-highlighting helpers shared by component renderers."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

if typ.TYPE_CHECKING:
    import collections.abc as cabc

CODEHILITE_CLASS = "codehilite"
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
DEFAULT_MARKDOWN_EXTENSIONS: tuple[str, ...] = (
    "fenced_code",
    "codehilite",
    "tables",
    "sane_lists",
)


class HtmlContentRenderer:
    """Render rich-text and code props with consistent styling."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        extensions: cabc.Sequence[str] = DEFAULT_MARKDOWN_EXTENSIONS,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style used for highlighted code. Defaults to
            ``"monokai"``.
        extensions : Sequence[str], optional
            Python-Markdown extensions enabled for rich text.
        """
        self.pygments_style = pygments_style
        self.extensions = list(extensions)
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CODEHILITE_CLASS)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(f".{CODEHILITE_CLASS}")

    def markdown(self, text: str) -> str:
        """Render markdown ``text`` into HTML; blank input renders nothing."""
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return ""
        md = Markdown(
            extensions=self.extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": CODEHILITE_CLASS,
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(normalized)

    def code_block(self, code: str, language: str | None = None) -> str:
        """Highlight ``code``, tagging the block with ``data-language``.

        Unknown or missing languages fall back to the plain ``text`` lexer.
        """
        lang = language or "text"
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        html = highlight(code, lexer, self._formatter)
        safe_lang = escape(lang, quote=True)

        def _repl(_match: re.Match[str]) -> str:
            return f'<div class="{CODEHILITE_CLASS}" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)


__all__ = ["DEFAULT_MARKDOWN_EXTENSIONS", "HtmlContentRenderer"]
