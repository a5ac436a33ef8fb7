from pathlib import Path

from . import app


@app.command()
def watch(*, workdir: Path = Path()) -> None:
    """Build the deck in WORKDIR, then rebuild it on change.

    Args:
        workdir: Path to move into before running the command

    """
    from ..configuring.settings import DeckSettings
    from ..pipelines import run, watch

    settings = DeckSettings.from_yaml(workdir)
    watch(
        frozenset(
            [
                settings.paths.current_dir,
                settings.paths.source.parent,
                settings.paths.template.parent,
            ]
        ),
        frozenset([settings.paths.output]),
        run,
        workdir,
    )
