"""Prompt text shown above the current input."""

from typing import Optional

from kbsurvey.config import PromptDisplay
from kbsurvey.elements import Canvas


class QuestionRenderer:
    """Owns the single prompt element shared by every question of a session."""

    def __init__(self, canvas: Canvas, display: Optional[PromptDisplay] = None) -> None:
        self.display = display or PromptDisplay()
        self.stim = canvas.text(
            text="",
            pos=self.display.question_pos,
            height=self.display.height,
            color=self.display.color,
            wrap_width=self.display.wrap_width,
            name="prompt",
        )

    @property
    def text(self) -> str:
        return self.stim.text

    @property
    def visible(self) -> bool:
        return self.stim.visible

    def set_question(self, prompt: str) -> None:
        self.stim.text = prompt
        self.stim.pos = self.display.question_pos

    def set_instructions(self, text: str) -> None:
        self.stim.text = text
        self.stim.pos = self.display.instructions_pos

    def show(self) -> None:
        self.stim.show()

    def hide(self) -> None:
        self.stim.hide()

    def clear(self) -> None:
        self.stim.text = ""
        self.stim.hide()
