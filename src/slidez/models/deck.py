"""Model classes for parsed decks.

The main class is [`Deck`][slidez.models.deck.Deck]. It's comprised of \
[`SlideBlock`][slidez.models.deck.SlideBlock]s, each one holding an ordered body of \
fragments. All classes are frozen: a deck is never mutated once parsed.
"""

from dataclasses import dataclass, field
from enum import Enum

from .scalars import Ordinal, SourceNotation


class SeparatorStyle(Enum):
    """Kind of dash rule found in the source."""

    Hard = "hard"
    """Full slide break."""

    Soft = "soft"
    """Visual divider inside the current slide."""


@dataclass(frozen=True)
class Separator:
    style: SeparatorStyle
    literal: str
    """The dash line exactly as written in the source, without its line ending."""


@dataclass(frozen=True)
class Prose:
    """Paragraph of text, possibly containing inline markup."""

    text: str


@dataclass(frozen=True)
class Listing:
    """Code listing to be highlighted according to its notation."""

    code: str
    notation: SourceNotation


@dataclass(frozen=True)
class Diagram:
    """Literal preformatted text, rendered as is."""

    text: str


@dataclass(frozen=True)
class Subheading:
    """Heading found after the start of a slide."""

    text: str
    level: int


@dataclass(frozen=True)
class BulletList:
    items: tuple[str, ...]
    ordered: bool = False


@dataclass(frozen=True)
class Divider:
    """Soft visual divider that does not end the slide."""

    separator: Separator


Fragment = Prose | Listing | Diagram | Subheading | BulletList | Divider
"""Alias denoting any element of a slide body."""


@dataclass(frozen=True)
class SlideBlock:
    """Single slide of a deck."""

    ordinal: Ordinal
    """Position of the slide in the deck, starting at 1."""

    heading: str | None = None
    """Title of the slide, taken from a heading starting the slide."""

    heading_level: int = 1

    body: tuple[Fragment, ...] = ()
    """Content of the slide, in source order."""

    speaker_note: str | None = None
    """Presenter-only text. Never part of the rendered slide."""

    separator: Separator | None = None
    """Hard separator that opened the slide, None for the first slide."""

    issues: tuple[str, ...] = ()
    """Descriptions of the malformed markup that was degraded to prose."""

    @property
    def is_blank(self) -> bool:
        return self.heading is None and not self.body


@dataclass(frozen=True)
class DeckMetadata:
    title: str | None = None
    authors: tuple[str, ...] = ()
    date: str | None = None


@dataclass(frozen=True)
class Deck:
    """Top of the hierarchy for deck parsing."""

    slides: tuple[SlideBlock, ...]
    """Slides of the deck, in source order."""

    metadata: DeckMetadata = field(default_factory=DeckMetadata)

    @property
    def issues(self) -> dict[Ordinal, tuple[str, ...]]:
        """Map each slide with issues to its issues."""
        return {slide.ordinal: slide.issues for slide in self.slides if slide.issues}
