"""
Input widgets: discrete choice and continuous text.

Both variants expose the same capability set:
    selectable_keys()  keys the stepper should poll for
    show() / reset()   visibility and default appearance
    kind               InputKind tag the stepper dispatches on

Selecting an option (discrete) or submitting text (continuous) returns a
Selection describing what was chosen. Recording the answer is the caller's
job; widgets only change visual state.
"""
from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from kbsurvey.config import (
    ContinuousDisplay,
    DiscreteDisplay,
    DisplayBehavior,
    KeyBindings,
)
from kbsurvey.elements import Canvas, TextElement
from kbsurvey.model import (
    InputKind,
    KeyClass,
    OptionSpec,
    SkipSpec,
    SpecifySpec,
)


DIGITS = list(string.digits)
LETTERS = list(string.ascii_lowercase) + ["minus", "space"]

# key name -> character inserted
_LITERAL_KEYS = {"space": " ", "minus": "-"}


@dataclass(frozen=True)
class Selection:
    value: str
    specify: Optional[SpecifySpec] = None
    skip: Optional[SkipSpec] = None


@dataclass(eq=False)
class _BuiltOption:
    option: OptionSpec
    stim: TextElement
    label: Optional[TextElement] = None


class DiscreteInput:
    """One text element per option; a single key press selects an option."""

    kind = InputKind.DISCRETE

    def __init__(self, canvas: Canvas, display: Optional[DiscreteDisplay] = None) -> None:
        self.canvas = canvas
        self.display = display or DiscreteDisplay()
        self._built: Dict[str, _BuiltOption] = {}
        self._specify: Sequence[SpecifySpec] = ()
        self._skips: Sequence[SkipSpec] = ()

    def _release(self) -> None:
        for built in self._built.values():
            self.canvas.remove(built.stim)
            if built.label is not None:
                self.canvas.remove(built.label)
        self._built = {}

    def build(
        self,
        options: Sequence[OptionSpec],
        specify: Sequence[SpecifySpec] = (),
        skips: Sequence[SkipSpec] = (),
    ) -> None:
        """
        Create the option elements, hidden, laid out on the configured grid.

        The grid is centered on ``initial_pos``: the first option sits one
        half-span before it, every next option moves by the spacing, and an
        option with extra wrapped lines pushes the next one further down.
        """
        self._release()
        self._specify = tuple(specify)
        self._skips = tuple(skips)

        d = self.display
        half_span = 1 + (len(options) - 1) / 2
        x = d.initial_pos[0] - d.horizontal_spacing * half_span
        y = d.initial_pos[1] + d.vertical_spacing * half_span
        for option in options:
            x += d.horizontal_spacing
            y -= d.vertical_spacing * (1 + option.additional_lines * 0.2)
            text = f"({option.key}) {option.value}" if d.show_key_and_value else option.value
            stim = self.canvas.text(
                text=text,
                pos=(x, y),
                height=d.height,
                color=d.unactivated_color,
                wrap_width=2.0 if d.vertical_spacing > 0 else None,
                name=f"option_{option.key}",
            )
            label = None
            if option.label:
                label = self.canvas.text(
                    text=option.label,
                    pos=(x + d.label_offset, y),
                    height=d.height,
                    color=d.unactivated_color,
                    name=f"label_{option.key}",
                )
            self._built[option.key] = _BuiltOption(option=option, stim=stim, label=label)

    def selectable_keys(self) -> List[str]:
        return list(self._built)

    def elements(self) -> List[TextElement]:
        found = []
        for built in self._built.values():
            found.append(built.stim)
            if built.label is not None:
                found.append(built.label)
        return found

    def set_visible(self, visible: bool) -> None:
        for element in self.elements():
            element.visible = visible

    def show(self) -> None:
        self.set_visible(True)

    def reset(self) -> None:
        """Back to the unactivated color, everything hidden."""
        for built in self._built.values():
            built.stim.color = self.display.unactivated_color
        self.set_visible(False)

    def select(self, key: str) -> Selection:
        """
        Activate the option for ``key``.

        Raises:
            KeyError: If ``key`` is not a built option
        """
        built = self._built[key]
        if self.display.behavior is DisplayBehavior.ISOLATE:
            self.set_visible(False)
            built.stim.show()
            if built.label is not None:
                built.label.show()
        built.stim.color = self.display.activated_color
        return Selection(
            value=built.option.value,
            specify=next((s for s in self._specify if s.key == key), None),
            skip=next((s for s in self._skips if s.key == key), None),
        )


class ContinuousInput:
    """A single text element the respondent types into."""

    kind = InputKind.CONTINUOUS

    def __init__(
        self,
        canvas: Canvas,
        display: Optional[ContinuousDisplay] = None,
        keys: Optional[KeyBindings] = None,
    ) -> None:
        self.canvas = canvas
        self.display = display or ContinuousDisplay()
        self.keys = keys or KeyBindings()
        self.key_class = KeyClass.MIXED
        self.max_length = 0
        self._specify: Sequence[SpecifySpec] = ()
        self.stim = canvas.text(
            text="",
            pos=self.display.initial_pos,
            height=self.display.height,
            color=self.display.color,
            name="continuous_input",
        )

    @property
    def text(self) -> str:
        return self.stim.text

    def build(
        self,
        key_class: Union[KeyClass, str] = KeyClass.MIXED,
        max_length: int = 10,
        specify: Sequence[SpecifySpec] = (),
    ) -> None:
        self.key_class = KeyClass(key_class)
        self.max_length = max_length
        self._specify = tuple(specify)
        self.stim.text = ""
        self.stim.hide()

    def control_keys(self) -> List[str]:
        return list(self.keys.submit_keys) + [self.keys.delete_key]

    def selectable_keys(self) -> List[str]:
        if self.key_class is KeyClass.DIGITS:
            chars = DIGITS
        elif self.key_class is KeyClass.LETTERS:
            chars = LETTERS
        else:
            chars = DIGITS + LETTERS
        return chars + self.control_keys()

    def is_submit(self, key: str) -> bool:
        return key in self.keys.submit_keys

    def append_key(self, key: str) -> None:
        """Apply one typed key to the text buffer."""
        if key == self.keys.delete_key:
            self.stim.text = self.stim.text[:-1]
            return
        if self.is_submit(key) or len(self.stim.text) >= self.max_length:
            return
        self.stim.text += _LITERAL_KEYS.get(key, key.upper())

    def show(self) -> None:
        self.stim.show()

    def reset(self) -> None:
        self.stim.text = ""
        self.stim.hide()

    def submit(self) -> Selection:
        typed = self.stim.text.casefold()
        return Selection(
            value=self.stim.text,
            specify=next((s for s in self._specify if s.key.casefold() == typed), None),
        )


InputWidget = Union[DiscreteInput, ContinuousInput]
