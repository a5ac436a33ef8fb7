"""Provide protocols for the code extracting information from parsed decks."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..models import Deck


class Processor[T](Protocol):
    def process(self, deck: "Deck") -> T:
        """Process a deck."""
        ...
