from pathlib import Path
from typing import Any

from pytest import fixture


@fixture(autouse=True)
def user_config_dir(tmp_path: Path, monkeypatch: Any) -> Path:
    config_dir = tmp_path / "user-config"
    config_dir.mkdir()
    monkeypatch.setattr(
        "slidez.configuring.settings.appdirs_user_config_dir",
        lambda _: str(config_dir),
    )
    return config_dir
