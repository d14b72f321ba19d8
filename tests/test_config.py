# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from spa_nav.config import NavigatorConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,loader,expect_exc",
    [
        ("base_url: http://example.com/", load_config, None),
        (json.dumps({"base_url": "http://example.com", "fade_out_ms": 0}), load_config, None),
        ("{}", load_config, ValidationError),
        ("base_url: http://example.com\nunknown: 1", load_config, ValidationError),
        ("base_url: http://example.com\ndim_opacity: 1.5", load_config, ValidationError),
        ("not: a: mapping", load_config, ValueError),
        ("- just\n- a list", load_config, TypeError),
    ],
)
def test_load_config_variants(tmp_path, content, loader, expect_exc):
    # Write YAML or JSON based on content
    suffix = ".yaml" if not content.strip().startswith("{") else ".json"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            loader(cfg_path)
    else:
        cfg = loader(cfg_path)
        assert isinstance(cfg, NavigatorConfig)
        assert cfg.site_root == "http://example.com/"


def test_defaults():
    cfg = NavigatorConfig(base_url="http://example.com")
    assert cfg.entry_page == "index.html"
    assert cfg.default_title == "Music App"
    assert cfg.fade_out_ms == 150
    assert cfg.preload_delay_ms == 2000
    assert cfg.page_loaded_event == "spa:pageload"
    assert cfg.timeout is None
    assert cfg.serialize_navigations is True


def test_invalid_image_pattern():
    with pytest.raises(ValidationError):
        NavigatorConfig(base_url="http://example.com", image_host_pattern="([unclosed")


def test_config_is_frozen():
    cfg = NavigatorConfig(base_url="http://example.com")
    with pytest.raises(ValidationError):
        cfg.fade_out_ms = 10


def test_load_config_default_missing(tmp_path, monkeypatch):
    # Ensure default file missing
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_default_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("base_url: http://localhost:8000\n", encoding="utf-8")
    assert load_config(None).site_root == "http://localhost:8000/"


def test_unsupported_suffix(tmp_path):
    cfg_path = write_file(tmp_path, "base_url = 'x'", ".toml")
    with pytest.raises(ValueError):
        load_config(cfg_path)
