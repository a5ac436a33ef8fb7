from pathlib import Path
from typing import Annotated, Any, Self

from appdirs import user_config_dir as appdirs_user_config_dir
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .. import app_name
from ..exceptions import SettingsError
from ..utils import dirs_hierarchy, find_git_dir, load_yaml, merge_dicts

settings_file_name = f"{app_name}.yml"


def _convert(input_value: Any, info: ValidationInfo) -> Any:
    if isinstance(input_value, str):
        try:
            input_value = Path(input_value.format(**info.data))
        except (KeyError, IndexError) as e:
            msg = f"unknown placeholder {e} in {input_value!r}"
            raise ValueError(msg) from e
    if not isinstance(input_value, Path):
        return input_value
    if not input_value.is_absolute() and "current_dir" in info.data:
        return info.data["current_dir"] / input_value
    return input_value


_Path = Annotated[Path, BeforeValidator(_convert), AfterValidator(Path.resolve)]


def user_config_dir() -> Path:
    return Path(appdirs_user_config_dir(app_name)).resolve()


def _load_settings_file(path: Path) -> dict[str, Any]:
    from yaml import YAMLError

    try:
        document = load_yaml(path)
    except YAMLError as e:
        msg = f"could not read settings file {path}\n{e}"
        raise SettingsError(msg) from e
    if document is None:
        return {}
    if not isinstance(document, dict):
        msg = (
            f"settings file {path} must hold a mapping, "
            f"got {type(document).__name__}"
        )
        raise SettingsError(msg)
    return document


# mypy: ignore-errors
class DeckPaths(BaseModel):
    model_config = ConfigDict(validate_default=True)

    current_dir: _Path
    source: _Path = "{current_dir}/slides.md"
    template: _Path = "{current_dir}/template.html"
    output: _Path = "{current_dir}/slides.html"


class DeckSettings(BaseModel):
    separator: str = "---"
    note_classes: tuple[str, ...] = ("notes",)
    highlight_style: str = "default"
    variables: dict[str, Any] = Field(default_factory=dict)
    paths: DeckPaths

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3 or set(value) != {"-"}:
            msg = f"separator must be a run of at least 3 dashes, got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("highlight_style")
    @classmethod
    def _check_highlight_style(cls, value: str) -> str:
        from pygments.styles import get_all_styles

        if value not in set(get_all_styles()):
            msg = f"unknown highlight style {value!r}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_yaml(cls, path: Path) -> Self:
        """Load the settings of the deck located in `path`.

        Every `slidez.yml` found in the settings hierarchy of `path` is merged, the \
        most specific file winning. See \
        [`dirs_hierarchy`][slidez.utils.dirs_hierarchy] for the order.

        Args:
            path: Directory of the deck.

        Raises:
            SettingsError: Raised if a settings file cannot be read or if the merged \
                settings are invalid.

        Returns:
            The validated settings.
        """
        resolved_path = path.resolve()
        git_dir = find_git_dir(resolved_path)
        content: dict[str, Any] = {}
        for settings_file in (
            d
            for p in dirs_hierarchy(git_dir, user_config_dir(), resolved_path)
            if (d := p / settings_file_name).is_file()
        ):
            content = merge_dicts(content, _load_settings_file(settings_file))
        paths = content.setdefault("paths", {})
        if isinstance(paths, dict) and "current_dir" not in paths:
            paths["current_dir"] = resolved_path
        try:
            return cls.model_validate(content)
        except ValidationError as e:
            msg = f"invalid settings for {resolved_path}\n{e}"
            raise SettingsError(msg) from e
