from pathlib import Path

from pytest import fixture, raises

from slidez.components.highlighter import Highlighter
from slidez.components.inliner import AssetsInliner
from slidez.components.parser import Parser
from slidez.components.renderer import Renderer
from slidez.components.writer import HtmlWriter
from slidez.exceptions import AssetNotFoundError, RendererError, TemplateNotFoundError
from slidez.models import Deck

_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<title>{{ metadata.title or "Slides" }}</title>
<link rel="stylesheet" href="style.css">
</head>
<body>
{{ body }}
<script src="nav.js"></script>
</body>
</html>
"""


@fixture
def deck_dir(tmp_path: Path) -> Path:
    deck_dir = tmp_path / "deck"
    deck_dir.mkdir()
    (deck_dir / "template.html").write_text(_TEMPLATE, encoding="utf8")
    (deck_dir / "style.css").write_text("section { color: red; }", encoding="utf8")
    (deck_dir / "nav.js").write_text("if (a && b < c) { go(); }", encoding="utf8")
    return deck_dir


@fixture
def renderer(deck_dir: Path) -> Renderer:
    highlighter = Highlighter("default")
    return Renderer(
        writer=HtmlWriter(highlighter),
        highlighter=highlighter,
        inliner=AssetsInliner([deck_dir]),
        variables={"lang": "en"},
    )


@fixture
def deck() -> Deck:
    return Parser().from_str(
        "% Talk\n\n# Hello\n\nWorld\n\n::: notes\nTOP SECRET NOTE\n:::\n---\nBye"
    )


def test_render_is_self_contained(
    renderer: Renderer, deck_dir: Path, deck: Deck
) -> None:
    html = renderer.render_to_str(deck_dir / "template.html", deck)

    assert "<title>Talk</title>" in html
    assert "<style>section { color: red; }</style>" in html
    assert "<script>if (a && b < c) { go(); }</script>" in html
    assert "style.css" not in html
    assert "nav.js" not in html
    assert '<section id="slide-1" data-ordinal="1">\n<h1>Hello</h1>' in html


def test_render_is_deterministic(
    renderer: Renderer, deck_dir: Path, deck: Deck
) -> None:
    template = deck_dir / "template.html"

    assert renderer.render_to_str(template, deck) == renderer.render_to_str(
        template, deck
    )


def test_notes_stay_out_of_the_body(
    renderer: Renderer, deck_dir: Path, deck: Deck
) -> None:
    html = renderer.render_to_str(deck_dir / "template.html", deck)

    assert deck.slides[0].speaker_note == "TOP SECRET NOTE"
    assert "TOP SECRET NOTE" not in html.split("<body>", 1)[1]


def test_notes_are_available_to_templates(renderer: Renderer, tmp_path: Path) -> None:
    template = tmp_path / "notes.html"
    template.write_text(
        "{% for ordinal, note in notes.items() %}{{ ordinal }}={{ note }};{% endfor %}",
        encoding="utf8",
    )
    deck = Parser().from_str("::: notes\na & b\n:::\n---\nNo note")

    assert renderer.render_to_str(template, deck) == "1=a &amp; b;"


def test_images_are_inlined(renderer: Renderer, deck_dir: Path) -> None:
    (deck_dir / "logo.png").write_bytes(b"not really a png")
    deck = Parser().from_str("![logo](logo.png)")

    html = renderer.render_to_str(deck_dir / "template.html", deck)

    assert 'src="data:image/png;base64,bm90IHJlYWxseSBhIHBuZw=="' in html


def test_stylesheet_references_are_inlined(
    renderer: Renderer, deck_dir: Path
) -> None:
    (deck_dir / "theme").mkdir()
    (deck_dir / "bg.png").write_bytes(b"bg")
    (deck_dir / "theme" / "dot.png").write_bytes(b"dot")
    (deck_dir / "theme" / "base.css").write_text(
        "h1 { background: url('dot.png'); }", encoding="utf8"
    )
    (deck_dir / "style.css").write_text(
        '@import "theme/base.css" print;\nbody { background: url(bg.png); }',
        encoding="utf8",
    )
    deck = Parser().from_str("Hi")

    html = renderer.render_to_str(deck_dir / "template.html", deck)

    assert (
        "<style>@media print {\n"
        'h1 { background: url("data:image/png;base64,ZG90"); }\n}\n'
        'body { background: url("data:image/png;base64,Ymc="); }</style>'
    ) in html
    assert ".png" not in html
    assert ".css" not in html


def test_remote_assets_are_left_untouched(renderer: Renderer, tmp_path: Path) -> None:
    template = tmp_path / "remote.html"
    template.write_text(
        '<script src="https://example.org/x.js"></script>{{ body }}', encoding="utf8"
    )

    html = renderer.render_to_str(template, Parser().from_str("Hi"))

    assert '<script src="https://example.org/x.js"></script>' in html


def test_missing_asset(renderer: Renderer, tmp_path: Path) -> None:
    template = tmp_path / "missing-asset.html"
    template.write_text('<link rel="stylesheet" href="nope.css">', encoding="utf8")

    with raises(AssetNotFoundError):
        renderer.render_to_str(template, Parser().from_str("Hi"))


def test_missing_template(renderer: Renderer, tmp_path: Path, deck: Deck) -> None:
    with raises(TemplateNotFoundError):
        renderer.render_to_str(tmp_path / "nope.html", deck)


def test_broken_templates(renderer: Renderer, tmp_path: Path, deck: Deck) -> None:
    syntax = tmp_path / "syntax.html"
    syntax.write_text("{% if %}", encoding="utf8")
    undefined = tmp_path / "undefined.html"
    undefined.write_text("{{ nothing.here }}", encoding="utf8")

    with raises(RendererError):
        renderer.render_to_str(syntax, deck)
    with raises(RendererError):
        renderer.render_to_str(undefined, deck)


def test_render_to_path(renderer: Renderer, deck_dir: Path, deck: Deck) -> None:
    output = deck_dir / "out" / "slides.html"

    assert renderer.render_to_path(deck_dir / "template.html", output, deck)
    content = output.read_bytes()
    assert not renderer.render_to_path(deck_dir / "template.html", output, deck)
    assert output.read_bytes() == content
    assert [p.name for p in output.parent.iterdir()] == ["slides.html"]


def test_failed_render_leaves_no_file(
    renderer: Renderer, deck_dir: Path, deck: Deck
) -> None:
    output = deck_dir / "out" / "slides.html"
    (deck_dir / "style.css").unlink()

    with raises(AssetNotFoundError):
        renderer.render_to_path(deck_dir / "template.html", output, deck)
    assert not output.exists()
    assert not output.parent.exists() or not list(output.parent.iterdir())


def test_failed_write_leaves_no_file(renderer: Renderer, deck_dir: Path) -> None:
    output = deck_dir / "out" / "slides.html"
    deck = Parser().from_str("Unencodable \ud800")

    with raises(UnicodeEncodeError):
        renderer.render_to_path(deck_dir / "template.html", output, deck)
    assert list(output.parent.iterdir()) == []
