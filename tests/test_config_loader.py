from __future__ import annotations

from pathlib import Path

import pytest

from cecbus.core.config_loader import load_config
from cecbus.core.errors import ConfigLoadError, ConfigValidationError
from cecbus.core.model import CecConfig


def _write_config(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def _isolated_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))


def test_packaged_defaults() -> None:
    loaded = load_config()
    assert loaded.config == CecConfig(adapter="", device_name="cecbus", key_hold_ms=10, queue_size=64)
    assert len(loaded.sources) == 1


def test_user_config_overrides_defaults(tmp_path: Path) -> None:
    _write_config(
        tmp_path / "cfg" / "cecbus" / "config.yaml",
        """
adapter: RPI
key_hold_ms: 40
""",
    )

    loaded = load_config()
    assert loaded.config.adapter == "RPI"
    assert loaded.config.key_hold_ms == 40
    assert loaded.config.device_name == "cecbus"
    assert len(loaded.sources) == 2


def test_explicit_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError):
        load_config(tmp_path / "missing.yaml")


def test_hold_below_minimum_rejected(tmp_path: Path) -> None:
    path = tmp_path / "short.yaml"
    _write_config(path, "key_hold_ms: 5\n")
    with pytest.raises(ConfigValidationError):
        load_config(path)


def test_unknown_key_rejected(tmp_path: Path) -> None:
    path = tmp_path / "unknown.yaml"
    _write_config(path, "adapters: RPI\n")
    with pytest.raises(ConfigValidationError):
        load_config(path)


def test_device_name_length_limited(tmp_path: Path) -> None:
    path = tmp_path / "long.yaml"
    _write_config(path, "device_name: a-very-long-device-name\n")
    with pytest.raises(ConfigValidationError):
        load_config(path)


def test_duplicate_yaml_keys_rejected(tmp_path: Path) -> None:
    path = tmp_path / "dup.yaml"
    _write_config(path, "adapter: RPI\nadapter: usb\n")
    with pytest.raises(ConfigValidationError):
        load_config(path)


def test_non_mapping_rejected(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    _write_config(path, "- RPI\n")
    with pytest.raises(ConfigValidationError):
        load_config(path)


def test_empty_file_keeps_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    _write_config(path, "")
    assert load_config(path).config.queue_size == 64


def test_yes_no_words_stay_strings(tmp_path: Path) -> None:
    path = tmp_path / "words.yaml"
    _write_config(path, "adapter: on\ndevice_name: off\n")
    loaded = load_config(path)
    assert loaded.config.adapter == "on"
    assert loaded.config.device_name == "off"
