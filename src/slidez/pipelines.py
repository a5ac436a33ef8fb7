from collections.abc import Callable, Set
from logging import getLogger
from pathlib import Path
from typing import Any

from watchfiles import Change, DefaultFilter
from watchfiles import watch as watchfiles_watch

from .components.factory import DeckSettingsFactory
from .configuring.settings import DeckSettings
from .models import BuildResult

_logger = getLogger(__name__)


def build(settings: DeckSettings) -> BuildResult:
    result = DeckSettingsFactory(settings).deck_builder().build_deck()
    if result.written:
        _logger.info(f"Wrote {result.output}")
    else:
        _logger.info(f"Nothing to do: {result.output} is up to date")
    return result


def run(directory: Path) -> BuildResult:
    """Build the deck located in `directory`.

    The settings are reloaded on each call, so that changes to `slidez.yml` files are \
    taken into account when watching.

    Args:
        directory: Path to the deck directory.

    Returns:
        The result of the build.
    """
    return build(DeckSettings.from_yaml(directory))


def clean(settings: DeckSettings) -> bool:
    output = settings.paths.output
    if not output.exists():
        _logger.info(f"Nothing to do: {output} doesn't exist")
        return False
    _logger.info(f"Deleting {output}")
    output.unlink(missing_ok=True)
    return True


class BuildFilter(DefaultFilter):
    """Ignore the changes a build makes itself.

    Builds write the avoided paths, and render them through hidden temporary files \
    named `.{name}.*` next to them. Neither should start a new build.
    """

    def __init__(self, avoid: Set[Path]) -> None:
        self._avoid = frozenset(p.resolve() for p in avoid)
        super().__init__()

    def __call__(self, change: Change, path: str) -> bool:
        resolved = Path(path).resolve()
        for to_avoid in self._avoid:
            if resolved == to_avoid or resolved.is_relative_to(to_avoid):
                return False
            if resolved.parent == to_avoid.parent and resolved.name.startswith(
                f".{to_avoid.name}."
            ):
                return False
        return super().__call__(change, path)


def watch[**P](
    watch: Set[Path],
    avoid: Set[Path],
    function: Callable[P, Any],
    *function_args: P.args,
    **function_kwargs: P.kwargs,
) -> None:
    dirs_to_watch = sorted({p.resolve() for p in watch})
    _logger.info(f"Watching {', '.join(str(d) for d in dirs_to_watch)}")
    _logger.info("Initial build")
    try:
        function(*function_args, **function_kwargs)
        _logger.info("Initial build finished")
    except Exception as e:
        _logger.exception(str(e))

    for _ in watchfiles_watch(
        *dirs_to_watch,
        watch_filter=BuildFilter(avoid),
        raise_interrupt=False,
        recursive=False,
    ):
        _logger.info("Detected changes, starting a new build")
        try:
            function(*function_args, **function_kwargs)
            _logger.info("Build finished")
        except Exception as e:
            _logger.exception(str(e))
    _logger.info("Stopped watching")
