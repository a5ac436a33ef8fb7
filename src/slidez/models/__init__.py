"""Modules containing model classes for different parts of slidez.

- [`deck`][slidez.models.deck] contains models that represent parsed decks and their \
    constituents
- [`rendering`][slidez.models.rendering] contains models that are fed to the \
    templates
- [`scalars`][slidez.models.scalars] contains NewTypes that help disambiguate types \
    used in different contexts
"""

from .deck import (
    BulletList,
    Deck,
    DeckMetadata,
    Diagram,
    Divider,
    Fragment,
    Listing,
    Prose,
    Separator,
    SeparatorStyle,
    SlideBlock,
    Subheading,
)
from .rendering import BuildResult, RenderedSlide
from .scalars import Ordinal, SourceNotation

__all__ = [
    "BuildResult",
    "BulletList",
    "Deck",
    "DeckMetadata",
    "Diagram",
    "Divider",
    "Fragment",
    "Listing",
    "Ordinal",
    "Prose",
    "RenderedSlide",
    "Separator",
    "SeparatorStyle",
    "SlideBlock",
    "SourceNotation",
    "Subheading",
]
