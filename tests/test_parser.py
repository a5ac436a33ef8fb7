from dataclasses import FrozenInstanceError
from pathlib import Path

from pytest import mark, raises

from slidez.components.parser import Parser
from slidez.exceptions import MissingInputFileError
from slidez.models import (
    BulletList,
    DeckMetadata,
    Diagram,
    Divider,
    Listing,
    Prose,
    Separator,
    SeparatorStyle,
    SourceNotation,
    Subheading,
)


def test_title_and_separator() -> None:
    deck = Parser().from_str("# Title\n\nHello\n\n---\n\nBye")

    assert len(deck.slides) == 2
    first, second = deck.slides
    assert first.heading == "Title"
    assert first.body == (Prose("Hello"),)
    assert first.separator is None
    assert second.heading is None
    assert second.body == (Prose("Bye"),)
    assert second.separator == Separator(SeparatorStyle.Hard, "---")


def test_no_separator_gives_one_slide() -> None:
    deck = Parser().from_str("# Only\n\nOne slide\nover two lines")

    assert len(deck.slides) == 1
    assert deck.slides[0].body == (Prose("One slide\nover two lines"),)


def test_empty_source_gives_one_blank_slide() -> None:
    deck = Parser().from_str("")

    assert len(deck.slides) == 1
    assert deck.slides[0].is_blank


@mark.parametrize("separators", [1, 2, 5])
def test_slides_follow_source_order(separators: int) -> None:
    text = "\n---\n".join(f"slide {i}" for i in range(separators + 1))

    deck = Parser().from_str(text)

    assert len(deck.slides) == separators + 1
    assert [slide.ordinal for slide in deck.slides] == list(
        range(1, separators + 2)
    )
    assert [slide.body for slide in deck.slides] == [
        (Prose(f"slide {i}"),) for i in range(separators + 1)
    ]


def test_trailing_separator_gives_blank_slide() -> None:
    deck = Parser().from_str("Content\n---\n")

    assert len(deck.slides) == 2
    assert deck.slides[1].is_blank


def test_separator_inside_code_block_does_not_split() -> None:
    deck = Parser().from_str("```yaml\na: 1\n---\nb: 2\n```\n")

    assert len(deck.slides) == 1
    assert deck.slides[0].body == (Listing("a: 1\n---\nb: 2", SourceNotation("yaml")),)


def test_listing_notation_from_attributes() -> None:
    deck = Parser().from_str("~~~ {.Haskell .numberLines}\nmain = pure ()\n~~~")

    assert deck.slides[0].body == (
        Listing("main = pure ()", SourceNotation("haskell")),
    )


def test_unterminated_code_block_is_kept_as_prose() -> None:
    deck = Parser().from_str("```python\nprint(1)\n---\nnext")

    assert len(deck.slides) == 2
    first, second = deck.slides
    assert first.body == (Prose("```python\nprint(1)"),)
    assert first.issues == ("line 1: unterminated code block, kept as prose",)
    assert second.body == (Prose("next"),)
    assert not second.issues


def test_diagrams() -> None:
    deck = Parser().from_str(
        "```\n+---+\n| a |\n+---+\n```\n\n"
        "```text\nraw\n```\n\n"
        "Intro\n\n    a --> b\n      |\n    c\n\nAfter"
    )

    assert deck.slides[0].body == (
        Diagram("+---+\n| a |\n+---+"),
        Diagram("raw"),
        Prose("Intro"),
        Diagram("a --> b\n  |\nc"),
        Prose("After"),
    )


def test_fenced_div_notes() -> None:
    deck = Parser().from_str("# A\n\nBody\n\n::: notes\nSay hi\n:::\n\nMore")

    slide = deck.slides[0]
    assert slide.speaker_note == "Say hi"
    assert slide.body == (Prose("Body"), Prose("More"))


def test_html_div_and_attribute_notes_are_joined() -> None:
    deck = Parser().from_str(
        '<div class="notes">\nFirst\n</div>\n\n::: {.notes}\nSecond\n:::'
    )

    assert deck.slides[0].speaker_note == "First\n\nSecond"
    assert deck.slides[0].body == ()


def test_nested_divs_stay_in_notes() -> None:
    deck = Parser().from_str(
        "Visible\n\n::: notes\n::: {.columns}\ninner\n:::\nSECRET\n:::\n"
        '\n<div class="notes">\n<div class="aside">\nnested\n</div>\nHIDDEN\n</div>'
    )

    slide = deck.slides[0]
    assert slide.body == (Prose("Visible"),)
    assert slide.speaker_note == (
        "::: {.columns}\ninner\n:::\nSECRET\n\n"
        '<div class="aside">\nnested\n</div>\nHIDDEN'
    )
    assert slide.issues == ()


def test_custom_note_classes() -> None:
    deck = Parser(note_classes=["speaker"]).from_str(
        "::: speaker\nMine\n:::\n::: notes\nNot mine\n:::"
    )

    assert deck.slides[0].speaker_note == "Mine"
    assert deck.slides[0].body == (Prose("Not mine"),)


def test_unterminated_note_is_kept_as_prose() -> None:
    deck = Parser().from_str("Text\n\n::: notes\nSecret\n---\n:::\n")

    first, second = deck.slides
    assert first.speaker_note is None
    assert first.body == (Prose("Text"), Prose("::: notes\nSecret"))
    assert first.issues == ("line 3: unterminated speaker note, kept as prose",)
    assert second.body == ()


def test_soft_divider_stays_in_slide() -> None:
    deck = Parser().from_str("A\n\n----\n\nB")

    assert len(deck.slides) == 1
    assert deck.slides[0].body == (
        Prose("A"),
        Divider(Separator(SeparatorStyle.Soft, "----")),
        Prose("B"),
    )


@mark.parametrize("line", ["---x", "--", "-- -"])
def test_malformed_separators_are_prose(line: str) -> None:
    deck = Parser().from_str(f"A\n{line}\nB")

    assert len(deck.slides) == 1
    assert deck.slides[0].body == (Prose(f"A\n{line}\nB"),)


def test_custom_separator() -> None:
    deck = Parser(separator="----").from_str("A\n---\nB\n----\nC")

    assert len(deck.slides) == 2
    assert deck.slides[0].body == (
        Prose("A"),
        Divider(Separator(SeparatorStyle.Soft, "---")),
        Prose("B"),
    )
    assert deck.slides[1].separator == Separator(SeparatorStyle.Hard, "----")


def test_title_block() -> None:
    deck = Parser().from_str("% My talk\n% Ann; Bob\n% 2026\n\n# Intro\n\nHi")

    assert deck.metadata == DeckMetadata(
        title="My talk", authors=("Ann", "Bob"), date="2026"
    )
    assert len(deck.slides) == 1
    assert deck.slides[0].heading == "Intro"


def test_lists_and_subheadings() -> None:
    deck = Parser().from_str(
        "# T\n\n## Sub\n- a\n- b\n  continued\n\n1. one\n2. two\n\nEnd"
    )

    slide = deck.slides[0]
    assert slide.heading == "T"
    assert slide.body == (
        Subheading("Sub", 2),
        BulletList(("a", "b\ncontinued")),
        BulletList(("one", "two"), ordered=True),
        Prose("End"),
    )


def test_slides_are_immutable() -> None:
    slide = Parser().from_str("Hi").slides[0]

    with raises(FrozenInstanceError):
        slide.heading = "Changed"  # type: ignore[misc]


def test_from_path(tmp_path: Path) -> None:
    source = tmp_path / "slides.md"
    source.write_text("# One\n---\n# Two\n", encoding="utf8")

    deck = Parser().from_path(source)

    assert [slide.heading for slide in deck.slides] == ["One", "Two"]


def test_from_missing_path(tmp_path: Path) -> None:
    with raises(MissingInputFileError):
        Parser().from_path(tmp_path / "missing.md")
