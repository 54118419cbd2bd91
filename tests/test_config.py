from pathlib import Path

import pytest

from ChatMarkdown.config import ConfigError, RenderConfig, config_from_mapping, load_config


def test_missing_file_returns_defaults(tmp_path: Path):
    assert load_config(tmp_path / "absent.yaml") == RenderConfig()
    assert load_config(None) == RenderConfig()


def test_load_yaml_settings(tmp_path: Path):
    path = tmp_path / "render.yaml"
    path.write_text(
        "font_name: Arial\n"
        "font_size_pt: 12\n"
        "heading_sizes_pt: [30, 22]\n"
        "highlight: false\n"
        "pygments_style: monokai\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.font_name == "Arial"
    assert config.font_size_pt == 12
    assert config.heading_sizes_pt == [30.0, 22.0]
    assert config.highlight is False
    assert config.pygments_style == "monokai"
    assert config.code_font_name == RenderConfig().code_font_name


def test_heading_size_clamps_level():
    config = RenderConfig(heading_sizes_pt=[30.0, 22.0])
    assert config.heading_size(1) == 30.0
    assert config.heading_size(6) == 22.0


def test_empty_file_returns_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == RenderConfig()


def test_invalid_yaml_raises(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("font_name: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(path)


def test_unknown_key_raises():
    with pytest.raises(ConfigError, match="unknown setting 'colour'"):
        config_from_mapping({"colour": "red"})


def test_wrong_types_raise():
    with pytest.raises(ConfigError, match="font_size_pt"):
        config_from_mapping({"font_size_pt": "big"})
    with pytest.raises(ConfigError, match="rule_width"):
        config_from_mapping({"rule_width": True})
    with pytest.raises(ConfigError, match="heading_sizes_pt"):
        config_from_mapping({"heading_sizes_pt": []})


def test_root_must_be_mapping():
    with pytest.raises(ValueError, match="mapping"):
        config_from_mapping(["font_name"])
