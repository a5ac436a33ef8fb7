from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from markupsafe import Markup

    from ..models import BuildResult, Deck, RenderedSlide, SourceNotation


class ParserProtocol(Protocol):
    """Build a deck from a source.

    The source can be a file or directly the text it would contain.
    """

    def from_path(self, path: Path) -> "Deck":
        """Parse a deck from a source file.

        Args:
            path: Path to the deck source.

        Returns:
            The parsed deck.
        """

    def from_str(self, text: str) -> "Deck": ...


class HighlighterProtocol(Protocol):
    @property
    def stylesheet(self) -> str: ...

    def highlight(self, code: str, notation: "SourceNotation") -> "Markup": ...


class WriterProtocol(Protocol):
    def write(self, deck: "Deck") -> tuple["RenderedSlide", ...]: ...


class InlinerProtocol(Protocol):
    def inline(self, html: str) -> str: ...


class RendererProtocol(Protocol):
    def render_to_str(
        self, template_path: Path, deck: "Deck", /, **template_kwargs: Any
    ) -> str: ...

    def render_to_path(
        self,
        template_path: Path,
        output_path: Path,
        deck: "Deck",
        /,
        **template_kwargs: Any,
    ) -> bool: ...


class DeckBuilderProtocol(Protocol):
    def build_deck(self) -> "BuildResult": ...


class DeckFactoryProtocol(Protocol):
    def parser(self) -> ParserProtocol: ...

    def highlighter(self) -> HighlighterProtocol: ...

    def writer(self) -> WriterProtocol: ...

    def inliner(self) -> InlinerProtocol: ...

    def renderer(self) -> RendererProtocol: ...

    def deck_builder(self) -> DeckBuilderProtocol: ...
