"""Model NewTypes to disambiguate multi-usage types."""

from typing import NewType

Ordinal = NewType("Ordinal", int)
"""Derived from int to represent the 1-based position of a slide in its deck."""

SourceNotation = NewType("SourceNotation", str)
"""Derived from str to represent the notation of a code listing.

It's the first word of the info string of a fenced block (e.g. `haskell` for \
a block opened with ```` ```haskell ````) and picks the syntax highlighting to apply.
"""
