"""
Display and key-binding configuration.

Positions and sizes are in host units (height units by default: the window
height is 1.0, the origin is the screen center). Colors are whatever the
host renderer understands, by default color names.

A configuration file is YAML with any subset of the sections below:

    prompt:
      question_pos: [0, 0.4]
    discrete:
      behavior: highlight
      activated_color: yellow
    keys:
      continue_keys: [space]

Missing values keep their defaults. Unknown keys are an error.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Tuple

import yaml


class DisplayBehavior(Enum):
    """How a discrete input shows the selected option while lingering."""
    HIGHLIGHT = "highlight"  # recolor the choice, keep the others visible
    ISOLATE = "isolate"      # recolor the choice, hide all others


DEFAULT_SECTION_INTRO = (
    "You will now be asked some survey questions.\n"
    "Feel free to take a break at this point.\n"
    "Press Enter to continue when you are ready."
)


@dataclass(frozen=True)
class PromptDisplay:
    question_pos: Tuple[float, float] = (0.0, 0.4)
    instructions_pos: Tuple[float, float] = (0.0, 0.0)
    height: float = 0.05
    wrap_width: float = 1.0
    color: str = "black"


@dataclass(frozen=True)
class DiscreteDisplay:
    horizontal_spacing: float = 0.0
    vertical_spacing: float = 0.1
    initial_pos: Tuple[float, float] = (0.0, 0.0)
    height: float = 0.05
    show_key_and_value: bool = True
    unactivated_color: str = "black"
    activated_color: str = "yellow"
    behavior: DisplayBehavior = DisplayBehavior.ISOLATE
    label_offset: float = -0.4


@dataclass(frozen=True)
class ContinuousDisplay:
    initial_pos: Tuple[float, float] = (0.0, 0.0)
    height: float = 0.05
    color: str = "yellow"


@dataclass(frozen=True)
class SlideDisplay:
    pos: Tuple[float, float] = (0.0, 0.0)
    size: Tuple[float, float] = (1.0, 0.8)


@dataclass(frozen=True)
class KeyBindings:
    continue_keys: Tuple[str, ...] = ("return", "enter")
    submit_keys: Tuple[str, ...] = ("return", "enter")
    delete_key: str = "backspace"
    next_key: str = "n"
    back_key: str = "b"
    finish_key: str = "f"


@dataclass(frozen=True)
class DisplayConfig:
    prompt: PromptDisplay = field(default_factory=PromptDisplay)
    discrete: DiscreteDisplay = field(default_factory=DiscreteDisplay)
    continuous: ContinuousDisplay = field(default_factory=ContinuousDisplay)
    slides: SlideDisplay = field(default_factory=SlideDisplay)
    keys: KeyBindings = field(default_factory=KeyBindings)
    section_intro: str = DEFAULT_SECTION_INTRO


_SECTIONS = {
    "prompt": PromptDisplay,
    "discrete": DiscreteDisplay,
    "continuous": ContinuousDisplay,
    "slides": SlideDisplay,
    "keys": KeyBindings,
}


def _coerce(name: str, default: Any, value: Any) -> Any:
    """Convert a YAML value to the type of the field default."""
    if isinstance(default, Enum):
        return type(default)(str(value).lower())
    if isinstance(default, tuple):
        return tuple(value) if isinstance(value, (list, tuple)) else (value,)
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be true or false, got {value!r}")
        return value
    if isinstance(default, float):
        return float(value)
    return value


def _section_from_dict(cls: type, d: Dict[str, Any], where: str) -> Any:
    base = cls()
    known = {f.name for f in fields(cls)}
    unknown = set(d) - known
    if unknown:
        raise ValueError(f"Unknown {where} settings: {sorted(unknown)}")
    changes = {name: _coerce(f"{where}.{name}", getattr(base, name), value) for name, value in d.items()}
    return replace(base, **changes)


def display_config_from_dict(d: Dict[str, Any] | None) -> DisplayConfig:
    """
    Build a DisplayConfig, starting from defaults.

    Raises:
        ValueError: On unknown sections, unknown keys or bad enum values
    """
    if not d:
        return DisplayConfig()
    unknown = set(d) - set(_SECTIONS) - {"section_intro"}
    if unknown:
        raise ValueError(f"Unknown display config sections: {sorted(unknown)}")
    changes: Dict[str, Any] = {
        name: _section_from_dict(cls, d[name] or {}, name)
        for name, cls in _SECTIONS.items()
        if name in d
    }
    if "section_intro" in d:
        changes["section_intro"] = str(d["section_intro"])
    return replace(DisplayConfig(), **changes)


def load_display_config(filepath: str) -> DisplayConfig:
    """
    Load a DisplayConfig from a YAML file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file has unknown settings
    """
    with open(filepath, "r", encoding="utf-8") as f:
        return display_config_from_dict(yaml.safe_load(f))
