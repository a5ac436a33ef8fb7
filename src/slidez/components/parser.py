"""Parse deck sources into [`Deck`][slidez.models.Deck]s.

The source is a Markdown-like text. A line made exactly of the hard separator \
(`---` by default) starts a new slide. Any other line made only of three or more \
dashes is a soft divider that stays inside the current slide.

Parsing is best effort: malformed markup never aborts the parsing. The offending \
line is kept as plain prose and the problem is recorded in the \
[`issues`][slidez.models.SlideBlock.issues] of the slide.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import MissingInputFileError
from ..models import (
    BulletList,
    Deck,
    DeckMetadata,
    Diagram,
    Divider,
    Fragment,
    Listing,
    Ordinal,
    Prose,
    Separator,
    SeparatorStyle,
    SlideBlock,
    SourceNotation,
    Subheading,
)
from .protocols import ParserProtocol

_FENCE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})\s*(?P<info>.*?)\s*$")
_NOTATION = re.compile(r"^\{?\s*\.?(?P<notation>[\w+#.-]+)")
_HEADING = re.compile(r"^(?P<hashes>#{1,6})(?:\s+(?P<text>.*?))?(?:\s+#+)?\s*$")
_DASHES = re.compile(r"^-{3,}\s*$")
_ITEM = re.compile(r"^(?P<marker>[-*+]|\d{1,9}[.)])\s+(?P<text>.*)$")
_INDENTED = re.compile(r"^(?: {4}|\t)")
_DIV_OPEN = re.compile(
    r"^:{3,}\s*(?:\{(?P<attributes>[^}]*)\}|(?P<name>[\w-]+))\s*:*\s*$"
)
_DIV_CLOSE = re.compile(r"^:{3,}\s*$")
_HTML_DIV_OPEN = re.compile(
    r"""^<div\s+class\s*=\s*(?P<quote>["'])(?P<classes>[^"']*)(?P=quote)\s*>\s*$""",
    re.IGNORECASE,
)
_HTML_DIV_CLOSE = re.compile(r"^</div>\s*$", re.IGNORECASE)
_HTML_NESTED_DIV_OPEN = re.compile(r"^<div[\s>](?!.*</div>)", re.IGNORECASE)
_TITLE_BLOCK = re.compile(r"^%(?P<value>.*)$")

_DIAGRAM_NOTATIONS = frozenset({"text", "diagram", "ascii"})


@dataclass(frozen=True)
class _Segment:
    separator: Separator | None
    first_line: int
    lines: Sequence[str]


def _fence_closer(line: str) -> str | None:
    if (match := _FENCE.match(line)) is None:
        return None
    fence = match.group("fence")
    if fence[0] == "`" and "`" in match.group("info"):
        return None
    return fence


def _closes(line: str, fence: str) -> bool:
    stripped = line.strip()
    indent = len(line) - len(line.lstrip(" "))
    return (
        indent <= 3 and len(stripped) >= len(fence) and set(stripped) == {fence[0]}
    )


def _find_fence_end(lines: Sequence[str], start: int) -> int | None:
    """Index of the line closing the fence opened at `start`, if any."""
    fence = _fence_closer(lines[start])
    if fence is None:
        return None
    for index in range(start + 1, len(lines)):
        if _closes(lines[index], fence):
            return index
    return None


class Parser(ParserProtocol):
    """Build a deck from its source text."""

    def __init__(
        self, separator: str = "---", note_classes: Iterable[str] = ("notes",)
    ) -> None:
        """Initialize an instance with the markup conventions to apply.

        Args:
            separator: Line marking a hard slide break.
            note_classes: Classes of the divs holding speaker notes.
        """
        self._separator = separator
        self._note_classes = frozenset(note_classes)

    def from_path(self, path: Path) -> Deck:
        """Parse the deck source stored in `path`.

        Args:
            path: Path to the deck source.

        Raises:
            MissingInputFileError: Raised if `path` is not an existing file.

        Returns:
            The parsed deck.
        """
        if not path.is_file():
            raise MissingInputFileError(path, "deck source")
        return self.from_str(path.read_text(encoding="utf8"))

    def from_str(self, text: str) -> Deck:
        lines = text.splitlines()
        metadata, offset = self._parse_title_block(lines)
        slides = tuple(
            _SegmentParser(self._note_classes, segment).parse(Ordinal(ordinal))
            for ordinal, segment in enumerate(self._split(lines, offset), start=1)
        )
        return Deck(slides=slides, metadata=metadata)

    def _parse_title_block(self, lines: Sequence[str]) -> tuple[DeckMetadata, int]:
        values: list[str] = []
        for line in lines[:3]:
            if (match := _TITLE_BLOCK.match(line)) is None:
                break
            values.append(match.group("value").strip())
        if not values:
            return DeckMetadata(), 0
        title, authors, date = [*values, "", ""][:3]
        return (
            DeckMetadata(
                title=title or None,
                authors=tuple(
                    author.strip() for author in authors.split(";") if author.strip()
                ),
                date=date or None,
            ),
            len(values),
        )

    def _split(self, lines: Sequence[str], offset: int) -> list[_Segment]:
        segments = []
        separator = None
        first_line = offset
        current: list[str] = []
        fence_end: int | None = None
        for index in range(offset, len(lines)):
            line = lines[index]
            if fence_end is not None:
                current.append(line)
                if index == fence_end:
                    fence_end = None
                continue
            if line.rstrip() == self._separator:
                segments.append(_Segment(separator, first_line, current))
                separator = Separator(SeparatorStyle.Hard, line)
                first_line = index + 1
                current = []
                continue
            fence_end = _find_fence_end(lines, index)
            current.append(line)
        segments.append(_Segment(separator, first_line, current))
        return segments


@dataclass
class _SegmentParser:
    note_classes: frozenset[str]
    segment: _Segment
    fragments: list[Fragment] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    paragraph: list[str] = field(default_factory=list)
    items: list[str] = field(default_factory=list)
    ordered: bool = False

    def parse(self, ordinal: Ordinal) -> SlideBlock:
        lines = self.segment.lines
        heading, heading_level, index = self._parse_heading()
        previous_blank = True
        while index < len(lines):
            line = lines[index]
            blank = not line.strip()
            if blank:
                self._flush_paragraph()
                if self.items and not self._next_is_item(index):
                    self._flush_items()
                index += 1
            elif (end := _find_fence_end(lines, index)) is not None:
                self._flush()
                self._add_fenced_block(lines, index, end)
                index = end + 1
            elif _fence_closer(line) is not None:
                self._degrade(index, "unterminated code block")
                index += 1
            elif (note_end := self._find_note_end(index)) is not None:
                self._flush()
                if note_end < 0:
                    self._degrade(index, "unterminated speaker note")
                    index += 1
                else:
                    self.notes.append("\n".join(lines[index + 1 : note_end]).strip())
                    index = note_end + 1
            elif _DIV_OPEN.match(line) or _DIV_CLOSE.match(line):
                self._flush()
                index += 1
            elif _DASHES.match(line):
                self._flush()
                self.fragments.append(
                    Divider(Separator(SeparatorStyle.Soft, line.rstrip()))
                )
                index += 1
            elif (match := _HEADING.match(line)) is not None:
                self._flush()
                self.fragments.append(
                    Subheading(
                        text=(match.group("text") or "").strip(),
                        level=len(match.group("hashes")),
                    )
                )
                index += 1
            elif (match := _ITEM.match(line)) is not None:
                self._flush_paragraph()
                ordered = match.group("marker")[0].isdigit()
                if self.items and ordered != self.ordered:
                    self._flush_items()
                self.ordered = ordered
                self.items.append(match.group("text").strip())
                index += 1
            elif self.items and (_INDENTED.match(line) or not previous_blank):
                self.items[-1] = f"{self.items[-1]}\n{line.strip()}"
                index += 1
            elif _INDENTED.match(line) and not self.paragraph:
                self._flush()
                index = self._add_indented_block(lines, index)
            else:
                self._flush_items()
                self.paragraph.append(line.strip())
                index += 1
            previous_blank = blank
        self._flush()
        return SlideBlock(
            ordinal=ordinal,
            heading=heading,
            heading_level=heading_level,
            body=tuple(self.fragments),
            speaker_note="\n\n".join(self.notes) if self.notes else None,
            separator=self.segment.separator,
            issues=tuple(self.issues),
        )

    def _parse_heading(self) -> tuple[str | None, int, int]:
        lines = self.segment.lines
        index = 0
        while index < len(lines) and not lines[index].strip():
            index += 1
        if index < len(lines) and (match := _HEADING.match(lines[index])):
            return (
                (match.group("text") or "").strip(),
                len(match.group("hashes")),
                index + 1,
            )
        return None, 1, 0

    def _next_is_item(self, index: int) -> bool:
        for line in self.segment.lines[index + 1 :]:
            if line.strip():
                return _ITEM.match(line) is not None
        return False

    def _find_note_end(self, index: int) -> int | None:
        """Find the line closing the note opened at `index`.

        Returns:
            None if the line doesn't open a note, -1 if the note is never closed, \
            the index of the closing line otherwise.
        """
        lines = self.segment.lines
        line = lines[index]
        if (match := _DIV_OPEN.match(line)) is not None:
            if match.group("name") is not None:
                classes = {match.group("name")}
            else:
                classes = {
                    token[1:]
                    for token in match.group("attributes").split()
                    if token.startswith(".")
                }
            opening, closing = _DIV_OPEN, _DIV_CLOSE
        elif (match := _HTML_DIV_OPEN.match(line)) is not None:
            classes = set(match.group("classes").split())
            opening, closing = _HTML_NESTED_DIV_OPEN, _HTML_DIV_CLOSE
        else:
            return None
        if not classes & self.note_classes:
            return None
        depth = 1
        for end in range(index + 1, len(lines)):
            if opening.match(lines[end]):
                depth += 1
            elif closing.match(lines[end]):
                depth -= 1
                if depth == 0:
                    return end
        return -1

    def _add_fenced_block(self, lines: Sequence[str], start: int, end: int) -> None:
        match = _FENCE.match(lines[start])
        assert match is not None
        content = "\n".join(lines[start + 1 : end])
        notation = _NOTATION.match(match.group("info"))
        if notation is None or notation.group("notation").lower() in _DIAGRAM_NOTATIONS:
            self.fragments.append(Diagram(content))
        else:
            self.fragments.append(
                Listing(content, SourceNotation(notation.group("notation").lower()))
            )

    def _add_indented_block(self, lines: Sequence[str], start: int) -> int:
        block: list[str] = []
        index = start
        while index < len(lines) and (
            _INDENTED.match(lines[index]) or not lines[index].strip()
        ):
            line = lines[index]
            block.append(line[1:] if line.startswith("\t") else line[4:])
            index += 1
        while block and not block[-1].strip():
            block.pop()
        self.fragments.append(Diagram("\n".join(block)))
        return index

    def _degrade(self, index: int, problem: str) -> None:
        line_number = self.segment.first_line + index + 1
        self.issues.append(f"line {line_number}: {problem}, kept as prose")
        self._flush_items()
        self.paragraph.append(self.segment.lines[index].strip())

    def _flush(self) -> None:
        self._flush_paragraph()
        self._flush_items()

    def _flush_paragraph(self) -> None:
        if self.paragraph:
            self.fragments.append(Prose("\n".join(self.paragraph)))
            self.paragraph = []

    def _flush_items(self) -> None:
        if self.items:
            self.fragments.append(BulletList(tuple(self.items), self.ordered))
            self.items = []
