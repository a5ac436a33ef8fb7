from rich.markup import escape
from rich.tree import Tree

from ..models import (
    BulletList,
    Deck,
    Diagram,
    Divider,
    Fragment,
    Listing,
    Prose,
    SlideBlock,
    Subheading,
)
from . import Processor

_PREVIEW_LENGTH = 40


def _preview(text: str) -> str:
    line = " ".join(text.split())
    if len(line) > _PREVIEW_LENGTH:
        line = f"{line[: _PREVIEW_LENGTH - 1]}…"
    return escape(line)


class RichTreeProcessor(Processor[Tree | None]):
    """Outline a deck as a rich tree.

    With `only_issues`, only the slides having issues are shown, and None is returned \
    for a deck without issues.
    """

    def __init__(self, only_issues: bool = True) -> None:
        self._only_issues = only_issues

    def process(self, deck: Deck) -> Tree | None:
        slide_trees = [
            self._process_slide(slide)
            for slide in deck.slides
            if not self._only_issues or slide.issues
        ]
        if self._only_issues and not slide_trees:
            return None
        tree = Tree(escape(deck.metadata.title or "deck"))
        tree.children.extend(slide_trees)
        return tree

    def _process_slide(self, slide: SlideBlock) -> Tree:
        if slide.is_blank:
            label = f"{slide.ordinal}. [dim](blank)[/]"
        elif slide.heading is not None:
            label = f"{slide.ordinal}. [bold]{escape(slide.heading)}[/]"
        else:
            label = f"{slide.ordinal}."
        if slide.issues:
            label = f"[red]{label}[/]"
        tree = Tree(label)
        for fragment in slide.body:
            tree.add(self._label_fragment(fragment))
        if slide.speaker_note is not None:
            tree.add(f"[italic]note[/] {_preview(slide.speaker_note)}")
        for issue in slide.issues:
            tree.add(f"[red]{escape(issue)}[/]")
        return tree

    def _label_fragment(self, fragment: Fragment) -> str:
        match fragment:
            case Prose(text=text):
                return f"prose {_preview(text)}"
            case Listing(notation=notation, code=code):
                return f"listing ({escape(notation)}, {len(code.splitlines())} lines)"
            case Diagram(text=text):
                return f"diagram ({len(text.splitlines())} lines)"
            case Subheading(text=text):
                return f"subheading {_preview(text)}"
            case BulletList(items=items, ordered=ordered):
                kind = "ordered list" if ordered else "list"
                return f"{kind} ({len(items)} items)"
            case Divider(separator=separator):
                return f"divider {escape(separator.literal)}"
        msg = f"unsupported fragment {fragment!r}"
        raise TypeError(msg)
