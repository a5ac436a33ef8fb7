from pathlib import Path

from . import app


@app.command()
def print_settings(*, workdir: Path = Path()) -> None:
    """Print the resolved settings.

    Args:
        workdir: Path to move into before running the command
    """
    from rich import print as rich_print

    from ..configuring.settings import DeckSettings

    rich_print(DeckSettings.from_yaml(workdir))
