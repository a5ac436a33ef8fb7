from logging import INFO, basicConfig, getLogger
from sys import exit

from cyclopts import App
from rich.logging import RichHandler

from ..exceptions import SlidezError

app = App(help="Build self-contained HTML slide decks from Markdown.")


def main() -> None:
    basicConfig(
        level=INFO,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(rich_tracebacks=True, tracebacks_show_locals=False)],
    )
    from ..utils import import_module_and_submodules

    import_module_and_submodules(__name__)
    try:
        app()
    except SlidezError as e:
        getLogger(__name__).critical(str(e))
        exit(1)
