from typing import TYPE_CHECKING

from .protocols import (
    DeckBuilderProtocol,
    DeckFactoryProtocol,
    HighlighterProtocol,
    InlinerProtocol,
    ParserProtocol,
    RendererProtocol,
    WriterProtocol,
)

if TYPE_CHECKING:
    from ..configuring.settings import DeckSettings


class DeckSettingsFactory(DeckFactoryProtocol):
    def __init__(self, settings: "DeckSettings") -> None:
        self._settings = settings

    def parser(self) -> ParserProtocol:
        from .parser import Parser

        return Parser(
            separator=self._settings.separator,
            note_classes=self._settings.note_classes,
        )

    def highlighter(self) -> HighlighterProtocol:
        from .highlighter import Highlighter

        return Highlighter(style=self._settings.highlight_style)

    def writer(self) -> WriterProtocol:
        from .writer import HtmlWriter

        return HtmlWriter(highlighter=self.highlighter())

    def inliner(self) -> InlinerProtocol:
        from .inliner import AssetsInliner

        return AssetsInliner(
            asset_dirs=(
                self._settings.paths.template.parent,
                self._settings.paths.source.parent,
            )
        )

    def renderer(self) -> RendererProtocol:
        from .renderer import Renderer

        return Renderer(
            writer=self.writer(),
            highlighter=self.highlighter(),
            inliner=self.inliner(),
            variables=self._settings.variables,
        )

    def deck_builder(self) -> DeckBuilderProtocol:
        from .deck_builder import DeckBuilder

        return DeckBuilder(
            source=self._settings.paths.source,
            template=self._settings.paths.template,
            output=self._settings.paths.output,
            parser=self.parser(),
            renderer=self.renderer(),
        )
