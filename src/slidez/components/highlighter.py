from functools import cached_property
from logging import getLogger

from markupsafe import Markup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ..models import SourceNotation
from .protocols import HighlighterProtocol

_logger = getLogger(__name__)


class Highlighter(HighlighterProtocol):
    """Turn code listings into HTML styled by CSS classes."""

    def __init__(self, style: str, css_class: str = "highlight") -> None:
        self._style = style
        self._css_class = css_class

    @property
    def stylesheet(self) -> str:
        return self._formatter.get_style_defs(f".{self._css_class}")

    def highlight(self, code: str, notation: SourceNotation) -> Markup:
        try:
            lexer = get_lexer_by_name(notation)
        except ClassNotFound:
            _logger.debug(f"No lexer for {notation}, leaving the listing as is")
            return Markup(
                '<div class="listing" data-notation="{0}">'
                "<pre><code>{1}</code></pre></div>"
            ).format(notation, code)
        return Markup('<div class="listing" data-notation="{0}">{1}</div>').format(
            notation, Markup(highlight(code, lexer, self._formatter))
        )

    @cached_property
    def _formatter(self) -> HtmlFormatter:
        return HtmlFormatter(style=self._style, cssclass=self._css_class)
