from pathlib import Path

from . import app


@app.command()
def init(*, workdir: Path = Path()) -> None:
    """Create a starter deck in WORKDIR.

    Existing files are left untouched.

    Args:
        workdir: Path to move into before running the command

    """
    from importlib.resources import files
    from logging import getLogger

    from ..configuring.settings import DeckSettings

    logger = getLogger(__name__)
    settings = DeckSettings.from_yaml(workdir)
    resources = files(__package__.rpartition(".")[0]) / "resources"
    starters = {
        settings.paths.source: resources / "slides.md",
        settings.paths.template: resources / "template.html",
        settings.paths.template.parent / "slidez.css": resources / "slidez.css",
        settings.paths.template.parent / "slidez.js": resources / "slidez.js",
    }
    for destination, resource in starters.items():
        if destination.exists():
            logger.info(f"Nothing to do: {destination} already exists")
        else:
            logger.info(f"Creating {destination}")
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(resource.read_text(encoding="utf8"), encoding="utf8")
