import re
from base64 import b64encode
from collections.abc import Sequence, Set
from logging import getLogger
from mimetypes import guess_type
from pathlib import Path
from urllib.parse import unquote, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Script, Stylesheet, Tag

from ..exceptions import AssetNotFoundError, RendererError
from .protocols import InlinerProtocol

_logger = getLogger(__name__)

_CSS_IMPORT = re.compile(
    r"""@import\s+(?:url\(\s*(?P<quote>["']?)(?P<url_function>[^"')]+)(?P=quote)\s*\)"""
    r"""|(?P<string_quote>["'])(?P<url_string>[^"']+)(?P=string_quote))"""
    r"""\s*(?P<media>[^;]*);"""
)
_CSS_URL = re.compile(r"""url\(\s*(?P<quote>["']?)(?P<url>[^"')]+)(?P=quote)\s*\)""")


class AssetsInliner(InlinerProtocol):
    """Make a rendered page self-contained.

    Stylesheets, scripts and images referenced by the page are read from the asset \
    directories and embedded in the page itself. Stylesheets get their `@import`s \
    inlined and their `url()`s turned into `data:` URIs, both resolved against the \
    directory of the stylesheet. Remote references are left untouched.
    """

    def __init__(self, asset_dirs: Sequence[Path]) -> None:
        """Initialize an instance with the directories to look assets up in.

        Args:
            asset_dirs: Directories against which relative references are resolved, \
                in order of preference.
        """
        self._asset_dirs = tuple(asset_dirs)

    def inline(self, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        for link in soup.find_all("link", rel="stylesheet", href=True):
            self._inline_stylesheet(soup, link)
        for style in soup.find_all("style"):
            if style.string:
                style.string = Stylesheet(
                    self._inline_css(str(style.string), self._asset_dirs, frozenset())
                )
        for script in soup.find_all("script", src=True):
            self._inline_script(script)
        for img in soup.find_all("img", src=True):
            self._inline_image(img)
        return str(soup)

    def _inline_stylesheet(self, soup: BeautifulSoup, link: Tag) -> None:
        path = self._resolve(link["href"], self._asset_dirs)
        if path is None:
            return
        style = soup.new_tag("style")
        if link.get("media"):
            style["media"] = link["media"]
        style.string = Stylesheet(self._read_css(path, frozenset()))
        link.replace_with(style)

    def _read_css(self, path: Path, importers: Set[Path]) -> str:
        resolved = path.resolve()
        if resolved in importers:
            msg = f"stylesheet {path} imports itself"
            raise RendererError(msg)
        return self._inline_css(
            path.read_text(encoding="utf8"), (path.parent,), importers | {resolved}
        )

    def _inline_css(
        self, css: str, base_dirs: Sequence[Path], importers: Set[Path]
    ) -> str:
        def replace_import(match: re.Match[str]) -> str:
            reference = match["url_function"] or match["url_string"]
            path = self._resolve(reference, base_dirs)
            if path is None:
                return match.group(0)
            content = self._read_css(path, importers)
            if media := match["media"].strip():
                return f"@media {media} {{\n{content}\n}}"
            return content

        def replace_url(match: re.Match[str]) -> str:
            path = self._resolve(match["url"].strip(), base_dirs)
            if path is None:
                return match.group(0)
            return f'url("{_data_uri(path)}")'

        return _CSS_URL.sub(replace_url, _CSS_IMPORT.sub(replace_import, css))

    def _inline_script(self, script: Tag) -> None:
        path = self._resolve(script["src"], self._asset_dirs)
        if path is None:
            return
        del script["src"]
        script.string = Script(path.read_text(encoding="utf8"))

    def _inline_image(self, img: Tag) -> None:
        path = self._resolve(img["src"], self._asset_dirs)
        if path is None:
            return
        img["src"] = _data_uri(path)

    def _resolve(self, reference: str, base_dirs: Sequence[Path]) -> Path | None:
        """Find the local file a reference points to.

        Args:
            reference: Value of a `src` or `href` attribute, or of a CSS `url()`.
            base_dirs: Directories against which a relative reference is resolved, \
                in order of preference.

        Raises:
            AssetNotFoundError: Raised if the reference is local but matches no file.

        Returns:
            The path of the asset, None if the reference cannot be inlined.
        """
        parts = urlsplit(reference)
        if parts.scheme == "data" or not parts.path:
            return None
        if parts.netloc or parts.scheme not in ("", "file"):
            _logger.warning(
                f"Not inlining remote asset {reference}, "
                "the output will need network access"
            )
            return None
        path = Path(unquote(parts.path))
        if path.is_absolute():
            candidates = [path]
        else:
            candidates = [base_dir / path for base_dir in base_dirs]
        for candidate in candidates:
            if candidate.is_file():
                return candidate
        raise AssetNotFoundError(reference)


def _data_uri(path: Path) -> str:
    mime_type = guess_type(path.name)[0] or "application/octet-stream"
    data = b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{data}"
