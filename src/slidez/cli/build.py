from pathlib import Path

from . import app


@app.default
@app.command()
def build(*, workdir: Path = Path()) -> None:
    """Build the self-contained slides of the deck in WORKDIR.

    Args:
        workdir: Path to move into before running the command

    """
    from ..configuring.settings import DeckSettings
    from ..pipelines import build

    build(DeckSettings.from_yaml(workdir))
