from pathlib import Path

from . import app


@app.command()
def tree(*, only_issues: bool = False, workdir: Path = Path()) -> None:
    """Show the outline of the deck in WORKDIR.

    Args:
        only_issues: Only show the slides with malformed markup
        workdir: Path to move into before running the command.
    """
    from logging import getLogger

    from rich import print as rich_print

    from ..components.factory import DeckSettingsFactory
    from ..configuring.settings import DeckSettings
    from ..processing.rich_tree import RichTreeProcessor

    settings = DeckSettings.from_yaml(workdir)
    deck = DeckSettingsFactory(settings).parser().from_path(settings.paths.source)
    tree = RichTreeProcessor(only_issues=only_issues).process(deck)
    if tree is None:
        getLogger(__name__).info("No issues found")
    else:
        rich_print(tree)
