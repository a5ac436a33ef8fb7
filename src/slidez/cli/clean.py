from pathlib import Path

from . import app


@app.command()
def clean(*, workdir: Path = Path()) -> None:
    """Delete the built slides.

    Args:
        workdir: Path to move into before running the command

    """
    from ..configuring.settings import DeckSettings
    from ..pipelines import clean

    clean(DeckSettings.from_yaml(workdir))
