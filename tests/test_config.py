"""
Tests for display configuration loading.
"""

import pytest

from kbsurvey.config import (
    DEFAULT_SECTION_INTRO,
    DisplayBehavior,
    DisplayConfig,
    display_config_from_dict,
    load_display_config,
)


def test_defaults():
    config = DisplayConfig()
    assert config.prompt.question_pos == (0.0, 0.4)
    assert config.discrete.vertical_spacing == 0.1
    assert config.discrete.behavior is DisplayBehavior.ISOLATE
    assert config.discrete.show_key_and_value is True
    assert config.continuous.color == "yellow"
    assert config.keys.submit_keys == ("return", "enter")
    assert config.section_intro == DEFAULT_SECTION_INTRO


def test_empty_dict_gives_defaults():
    assert display_config_from_dict({}) == DisplayConfig()
    assert display_config_from_dict(None) == DisplayConfig()


def test_partial_override_keeps_other_defaults():
    config = display_config_from_dict({
        "discrete": {"behavior": "HIGHLIGHT", "vertical_spacing": 0},
        "keys": {"continue_keys": ["space"]},
    })
    assert config.discrete.behavior is DisplayBehavior.HIGHLIGHT
    assert config.discrete.vertical_spacing == 0.0
    assert config.discrete.activated_color == "yellow"
    assert config.keys.continue_keys == ("space",)
    assert config.keys.submit_keys == ("return", "enter")


def test_unknown_section():
    with pytest.raises(ValueError, match="sections"):
        display_config_from_dict({"colours": {}})


def test_unknown_key():
    with pytest.raises(ValueError, match="discrete"):
        display_config_from_dict({"discrete": {"spacing": 1}})


def test_bad_behavior():
    with pytest.raises(ValueError):
        display_config_from_dict({"discrete": {"behavior": "blink"}})


def test_load_from_yaml(tmp_path):
    path = tmp_path / "display.yaml"
    path.write_text(
        "prompt:\n"
        "  question_pos: [0, 0.3]\n"
        "section_intro: Survey time.\n",
        encoding="utf-8",
    )
    config = load_display_config(str(path))
    assert config.prompt.question_pos == (0, 0.3)
    assert config.section_intro == "Survey time."


def test_bool_settings_must_be_booleans():
    with pytest.raises(ValueError, match="discrete.show_key_and_value"):
        display_config_from_dict({"discrete": {"show_key_and_value": "false"}})


def test_bool_settings_from_yaml(tmp_path):
    path = tmp_path / "display.yaml"
    path.write_text("discrete:\n  show_key_and_value: no\n", encoding="utf-8")
    assert load_display_config(str(path)).discrete.show_key_and_value is False
