"""
Paged instructions: a linear slide deck walked with back / next / finish.

No branching and no recorded data. The position is bounded by
``[0, len(deck) - 1]``; finishing on the last slide moves it to the DONE
sentinel, which ends the deck.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from kbsurvey.config import KeyBindings, SlideDisplay
from kbsurvey.elements import Canvas
from kbsurvey.host import Keyboard
from kbsurvey.model import SlideDeck, StepResult


logger = logging.getLogger(__name__)

DONE = -1


class PagedInstructions:
    """Step function for one slide deck."""

    def __init__(
        self,
        deck: SlideDeck,
        keyboard: Keyboard,
        canvas: Canvas,
        keys: Optional[KeyBindings] = None,
        display: Optional[SlideDisplay] = None,
    ) -> None:
        if not deck.slides:
            raise ValueError(f"Slide deck '{deck.name}' is empty")
        self.deck = deck
        self.keyboard = keyboard
        self.keys = keys or KeyBindings()
        display = display or SlideDisplay()
        self.image = canvas.image(pos=display.pos, size=display.size, name=f"slides_{deck.name}")
        self.position = 0

    @property
    def finished(self) -> bool:
        return self.position == DONE

    @property
    def last(self) -> int:
        return len(self.deck.slides) - 1

    def rewind(self) -> None:
        self.position = 0

    def handle_key(self, key: str) -> bool:
        """Apply one navigation key; returns True if the position changed."""
        if key == self.keys.next_key and self.position < self.last:
            self.position += 1
        elif key == self.keys.back_key and self.position > 0:
            self.position -= 1
        elif key == self.keys.finish_key and self.position == self.last:
            self.position = DONE
        else:
            return False
        return True

    def step(self) -> StepResult:
        if self.finished:
            self.image.hide()
            return StepResult.ADVANCE

        keys = self.keyboard.get_keys([self.keys.back_key, self.keys.next_key, self.keys.finish_key])
        if keys:
            self.handle_key(keys[0])
            self.keyboard.clear_events()

        if self.finished:
            self.image.hide()
            logger.info("Slide deck %s finished", self.deck.name)
            return StepResult.ADVANCE

        slide = self.deck.slides[self.position]
        self.image.image = slide.path or slide.name
        self.image.show()
        return StepResult.REPEAT


class InstructionsModule:
    """
    Several named decks sharing one keyboard and canvas.

    Each deck keeps its own position, so leaving a deck and coming back to it
    resumes where the respondent was.
    """

    def __init__(self, keyboard: Keyboard, canvas: Canvas, keys: Optional[KeyBindings] = None,
                 display: Optional[SlideDisplay] = None) -> None:
        self.keyboard = keyboard
        self.canvas = canvas
        self.keys = keys
        self.display = display
        self._decks: Dict[str, PagedInstructions] = {}

    def add_instructions(self, deck: SlideDeck, name: Optional[str] = None) -> PagedInstructions:
        name = name or deck.name
        stepper = PagedInstructions(deck, self.keyboard, self.canvas, self.keys, self.display)
        self._decks[name] = stepper
        return stepper

    def get(self, name: str) -> PagedInstructions:
        return self._decks[name]

    def rewind(self, name: str) -> None:
        self._decks[name].rewind()
