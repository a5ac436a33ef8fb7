"""Model classes fed to the template by the rendering side of slidez."""

from dataclasses import dataclass
from pathlib import Path

from markupsafe import Markup

from .deck import Deck
from .scalars import Ordinal


@dataclass(frozen=True)
class RenderedSlide:
    """HTML projection of a [`SlideBlock`][slidez.models.deck.SlideBlock]."""

    ordinal: Ordinal
    heading: str | None
    content: Markup
    """Body fragments of the slide, already converted to HTML."""

    html: Markup
    """Whole `<section>` element of the slide."""

    speaker_note: str | None
    separator_style: str | None


@dataclass(frozen=True)
class BuildResult:
    deck: Deck
    output: Path
    written: bool
    """False if the output was already up to date."""
