"""Build self-contained HTML slide decks from Markdown sources."""

__version__ = "0.4.0"

app_name = "slidez"
