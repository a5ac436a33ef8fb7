from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import cached_property
from pathlib import Path
from typing import Any

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateError
from jinja2 import TemplateNotFound as JinjaTemplateNotFound
from markupsafe import Markup

from ..exceptions import RendererError, TemplateNotFoundError
from ..models import Deck
from .protocols import (
    HighlighterProtocol,
    InlinerProtocol,
    RendererProtocol,
    WriterProtocol,
)


class _BaseRenderer(ABC, RendererProtocol):
    @abstractmethod
    def render_to_str(
        self, template_path: Path, deck: Deck, /, **template_kwargs: Any
    ) -> str:
        raise NotImplementedError

    def render_to_path(
        self,
        template_path: Path,
        output_path: Path,
        deck: Deck,
        /,
        **template_kwargs: Any,
    ) -> bool:
        """Render `deck` and write the result to `output_path`.

        The output is written only once fully rendered, so a failing rendering never \
        leaves a partial file behind. An output identical to the existing one is not \
        rewritten.

        Args:
            template_path: Path to the page template.
            output_path: Path of the file to write.
            deck: Deck to render.
            template_kwargs: Additional variables for the template.

        Returns:
            True if `output_path` was written, False if it was already up to date.
        """
        from contextlib import suppress
        from filecmp import cmp
        from shutil import move
        from tempfile import NamedTemporaryFile

        rendered = self.render_to_str(template_path, deck, **template_kwargs)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fh = NamedTemporaryFile(
            "w",
            encoding="utf8",
            newline="",
            dir=output_path.parent,
            prefix=f".{output_path.name}.",
            delete=False,
        )
        temp_path = Path(fh.name)
        try:
            with fh:
                fh.write(rendered)
            if output_path.exists() and cmp(temp_path, output_path, shallow=False):
                return False
            move(temp_path, output_path)
            return True
        finally:
            with suppress(FileNotFoundError):
                temp_path.unlink()


class _AbsoluteLoader(BaseLoader):
    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str, Callable[[], bool]]:
        template_path = Path(template)
        if not template_path.is_file():
            raise JinjaTemplateNotFound(template)
        mtime = template_path.stat().st_mtime
        source = template_path.read_text(encoding="utf8")
        return (
            source,
            str(template_path),
            lambda: mtime == template_path.stat().st_mtime,
        )


class Renderer(_BaseRenderer):
    """Render decks as single HTML pages.

    The template is a Jinja2 HTML template. It receives:

    - `body`: the HTML of every slide, in order
    - `slides`: the [`RenderedSlide`][slidez.models.RenderedSlide]s, for templates \
        laying slides out themselves
    - `metadata`: the [`DeckMetadata`][slidez.models.DeckMetadata] of the deck
    - `highlight_css`: the stylesheet of the code listings
    - `notes`: speaker notes by slide ordinal
    - `variables`: the variables defined in the settings
    """

    def __init__(
        self,
        writer: WriterProtocol,
        highlighter: HighlighterProtocol,
        inliner: InlinerProtocol,
        variables: dict[str, Any],
    ) -> None:
        self._writer = writer
        self._highlighter = highlighter
        self._inliner = inliner
        self._variables = variables

    def render_to_str(
        self, template_path: Path, deck: Deck, /, **template_kwargs: Any
    ) -> str:
        if not template_path.is_file():
            raise TemplateNotFoundError(template_path)
        slides = self._writer.write(deck)
        try:
            template = self._env.get_template(str(template_path))
            rendered = template.render(
                body=Markup("\n").join(slide.html for slide in slides),
                slides=slides,
                metadata=deck.metadata,
                highlight_css=Markup(self._highlighter.stylesheet),
                notes={
                    slide.ordinal: slide.speaker_note
                    for slide in slides
                    if slide.speaker_note is not None
                },
                variables=self._variables,
                **template_kwargs,
            )
        except JinjaTemplateNotFound as e:
            raise TemplateNotFoundError(template_path) from e
        except TemplateError as e:
            msg = f"could not render {template_path}: {e}"
            raise RendererError(msg) from e
        return self._inliner.inline(rendered)

    @cached_property
    def _env(self) -> Environment:
        return Environment(
            loader=_AbsoluteLoader(),
            autoescape=True,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
