"""Project parsed slides to HTML.

Text is always escaped. The inline markup understood in prose and list items is a \
small subset of Markdown: code spans, strong emphasis, emphasis, links and images.
"""

import re

from markupsafe import Markup, escape

from ..models import (
    BulletList,
    Deck,
    Diagram,
    Divider,
    Fragment,
    Listing,
    Prose,
    RenderedSlide,
    SlideBlock,
    Subheading,
)
from .protocols import HighlighterProtocol, WriterProtocol

_CODE_SPAN = re.compile(r"(?P<ticks>`+)(?P<code>.+?)(?P=ticks)")
_IMAGE = re.compile(r"!\[(?P<alt>[^\]]*)\]\((?P<src>[^)\s]+)\)")
_LINK = re.compile(r"\[(?P<text>[^\]]+)\]\((?P<href>[^)\s]+)\)")
_STRONG = re.compile(r"(\*\*|__)(?=\S)(.+?)(?<=\S)\1")
_EMPHASIS = re.compile(r"(?<![\w*])([*_])(?=\S)(.+?)(?<=\S)\1(?![\w*])")
_PLACEHOLDER = re.compile("\x00(\\d+)\x00")


def render_inline(text: str) -> Markup:
    """Convert the inline markup of `text` to escaped HTML."""
    stash: list[str] = []
    # NUL delimits placeholders
    text = text.replace("\x00", "\ufffd")

    def keep(html: str) -> str:
        stash.append(html)
        return f"\x00{len(stash) - 1}\x00"

    text = _CODE_SPAN.sub(
        lambda m: keep(f"<code>{escape(m.group('code').strip())}</code>"), text
    )
    text = _IMAGE.sub(
        lambda m: keep(f'<img src="{escape(m["src"])}" alt="{escape(m["alt"])}">'),
        text,
    )
    text = _LINK.sub(
        lambda m: keep(f'<a href="{escape(m["href"])}">') + m["text"] + keep("</a>"),
        text,
    )
    html = str(escape(text))
    html = _STRONG.sub(r"<strong>\2</strong>", html)
    html = _EMPHASIS.sub(r"<em>\2</em>", html)
    return Markup(_PLACEHOLDER.sub(lambda m: stash[int(m.group(1))], html))


class HtmlWriter(WriterProtocol):
    def __init__(self, highlighter: HighlighterProtocol) -> None:
        self._highlighter = highlighter

    def write(self, deck: Deck) -> tuple[RenderedSlide, ...]:
        return tuple(self._write_slide(slide) for slide in deck.slides)

    def _write_slide(self, slide: SlideBlock) -> RenderedSlide:
        content = Markup("\n").join(
            self._write_fragment(fragment) for fragment in slide.body
        )
        parts = []
        if slide.heading is not None:
            parts.append(
                Markup("<h{0}>{1}</h{0}>").format(
                    slide.heading_level, render_inline(slide.heading)
                )
            )
        if content:
            parts.append(content)
        separator_style = (
            slide.separator.style.value if slide.separator is not None else None
        )
        html = (
            Markup('<section id="slide-{0}" data-ordinal="{0}">\n').format(
                slide.ordinal
            )
            + Markup("\n").join(parts)
            + Markup("\n</section>" if parts else "</section>")
        )
        return RenderedSlide(
            ordinal=slide.ordinal,
            heading=slide.heading,
            content=content,
            html=html,
            speaker_note=slide.speaker_note,
            separator_style=separator_style,
        )

    def _write_fragment(self, fragment: Fragment) -> Markup:
        match fragment:
            case Prose(text=text):
                return Markup("<p>{}</p>").format(render_inline(text))
            case Listing(code=code, notation=notation):
                return self._highlighter.highlight(code, notation)
            case Diagram(text=text):
                return Markup('<pre class="diagram">{}</pre>').format(text)
            case Subheading(text=text, level=level):
                # The slide title is the only first level heading of a slide.
                level = max(level, 2)
                return Markup("<h{0}>{1}</h{0}>").format(level, render_inline(text))
            case BulletList(items=items, ordered=ordered):
                tag = "ol" if ordered else "ul"
                return Markup("<{0}>\n{1}\n</{0}>").format(
                    tag,
                    Markup("\n").join(
                        Markup("<li>{}</li>").format(render_inline(item))
                        for item in items
                    ),
                )
            case Divider(separator=separator):
                return Markup('<hr class="{}">').format(separator.style.value)
        msg = f"unsupported fragment {fragment!r}"
        raise TypeError(msg)
