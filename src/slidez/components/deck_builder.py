from logging import getLogger
from pathlib import Path

from ..models import BuildResult
from .protocols import DeckBuilderProtocol, ParserProtocol, RendererProtocol


class DeckBuilder(DeckBuilderProtocol):
    def __init__(
        self,
        source: Path,
        template: Path,
        output: Path,
        parser: ParserProtocol,
        renderer: RendererProtocol,
    ) -> None:
        self._source = source
        self._template = template
        self._output = output
        self._parser = parser
        self._renderer = renderer
        self._logger = getLogger(__name__)

    def build_deck(self) -> BuildResult:
        deck = self._parser.from_path(self._source)
        self._logger.info(f"Parsed {len(deck.slides)} slides from {self._source}")
        for ordinal, issues in deck.issues.items():
            for issue in issues:
                self._logger.warning(f"Slide {ordinal}, {issue}")
        written = self._renderer.render_to_path(self._template, self._output, deck)
        return BuildResult(deck=deck, output=self._output, written=written)
