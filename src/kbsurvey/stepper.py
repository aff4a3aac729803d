"""
Per-question interaction state machine.

One QuestionStep drives one top-level question from first display to its
finished AnswerRecord:

    NOT_STARTED -> AWAITING_DISCRETE | AWAITING_CONTINUOUS -> DISPLAYING -> DONE
                         ^                                        |
                         +---------- specify follow-up -----------+

A specify follow-up does not recurse. The prompt and widget are rebuilt for
the follow-up question and the machine starts over at NOT_STARTED, so every
answer of the chain lands in the same AnswerRecord.

The host polls ``step()`` once per frame until it returns StepResult.ADVANCE.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional, Union

from kbsurvey.host import Clock, Keyboard
from kbsurvey.inputs import ContinuousInput, InputWidget, Selection
from kbsurvey.model import (
    AnswerRecord,
    ContinuousInputSpec,
    InputKind,
    QuestionSpec,
    SequencerStatus,
    SkipSpec,
    SpecifySpec,
    StepResult,
)
from kbsurvey.renderer import QuestionRenderer


logger = logging.getLogger(__name__)


class StepStage(Enum):
    NOT_STARTED = 0
    AWAITING_DISCRETE = 1
    AWAITING_CONTINUOUS = 2
    DISPLAYING = 3
    DONE = 4


@dataclass
class SurveyRunContext:
    """
    Mutable state of one survey run.

    Each sequencer owns its own context, so runs never share skip status or
    the active record.
    """

    survey_set: str
    status: SequencerStatus = SequencerStatus.CONTINUING
    skip_target: Optional[Union[int, str]] = None
    current_record: Optional[AnswerRecord] = None
    recorded: List[Union[int, str]] = field(default_factory=list)
    skipped: List[Union[int, str]] = field(default_factory=list)

    def reset(self) -> None:
        self.status = SequencerStatus.CONTINUING
        self.skip_target = None
        self.current_record = None
        self.recorded = []
        self.skipped = []

    def begin_skip(self, target_index: Union[int, str]) -> None:
        if self.status is not SequencerStatus.CONTINUING:
            return
        self.status = SequencerStatus.BEGIN_SKIP
        self.skip_target = target_index

    def start_skipping(self) -> None:
        if self.status is SequencerStatus.BEGIN_SKIP:
            self.status = SequencerStatus.SKIPPING

    def resume(self) -> None:
        self.status = SequencerStatus.CONTINUING
        self.skip_target = None


class QuestionStep:
    """Step function for one question and its specify chain."""

    def __init__(
        self,
        question: QuestionSpec,
        context: SurveyRunContext,
        prompt: QuestionRenderer,
        inputs: Mapping[InputKind, InputWidget],
        keyboard: Keyboard,
        clock: Clock,
        linger_seconds: float,
    ) -> None:
        self.question = question
        self.context = context
        self.prompt = prompt
        self.inputs = inputs
        self.keyboard = keyboard
        self.clock = clock
        self.linger_seconds = linger_seconds

        self.stage = StepStage.NOT_STARTED
        self.record: Optional[AnswerRecord] = None
        self.current_question = question
        self.widget: Optional[InputWidget] = None
        self.hops = 0
        self._specify: Optional[SpecifySpec] = None
        self._skip: Optional[SkipSpec] = None

    def begin(self) -> AnswerRecord:
        """Start the question: fresh clock, no pending keys, a new record."""
        self.clock.reset()
        self.keyboard.clear_events()
        self.record = AnswerRecord(
            survey_set=self.context.survey_set,
            question_index=self.question.index,
            prompt=self.question.prompt,
            input_type=self.question.input.kind,
        )
        self.context.current_record = self.record
        self._build(self.question)
        logger.debug("Question %s started", self.question.index)
        return self.record

    def _build(self, question: QuestionSpec) -> None:
        self.current_question = question
        self.prompt.set_question(question.prompt)
        spec = question.input
        widget = self.inputs[spec.kind]
        if isinstance(spec, ContinuousInputSpec):
            widget.build(spec.key_class, spec.max_length, spec.specify)
        else:
            widget.build(spec.options, spec.specify, spec.skips)
        self.widget = widget

    @property
    def done(self) -> bool:
        return self.stage is StepStage.DONE

    def step(self) -> StepResult:
        if self.context.status is SequencerStatus.SKIPPING:
            return StepResult.ADVANCE
        if self.record is None:
            raise RuntimeError("begin() must be called before the question is stepped")

        if self.stage is StepStage.NOT_STARTED:
            self.prompt.show()
            self.widget.show()
            if self.widget.kind is InputKind.CONTINUOUS:
                self.stage = StepStage.AWAITING_CONTINUOUS
            else:
                self.stage = StepStage.AWAITING_DISCRETE

        elif self.stage is StepStage.AWAITING_DISCRETE:
            keys = self.keyboard.get_keys(self.widget.selectable_keys())
            if keys:
                key = keys[0]
                self._capture(key, self.widget.select(key))

        elif self.stage is StepStage.AWAITING_CONTINUOUS:
            self._take_text(self.widget)

        elif self.stage is StepStage.DISPLAYING:
            if self.clock.elapsed() >= self.linger_seconds:
                self.widget.reset()
                if self._specify is not None:
                    follow_up = self._specify.question
                    self._specify = None
                    self.hops += 1
                    self._build(follow_up)
                    self.keyboard.clear_events()
                    self.stage = StepStage.NOT_STARTED
                    logger.debug("Question %s chained into specify hop %d", self.question.index, self.hops)
                else:
                    if self._skip is not None:
                        self.context.begin_skip(self._skip.target_index)
                        logger.debug("Question %s requests skip to %s", self.question.index, self._skip.target_index)
                    self.stage = StepStage.DONE

        if self.stage is StepStage.DONE:
            self.prompt.hide()
            return StepResult.ADVANCE
        return StepResult.REPEAT

    def _take_text(self, widget: ContinuousInput) -> None:
        for key in self.keyboard.get_keys(widget.selectable_keys()):
            if widget.is_submit(key):
                self._capture(None, widget.submit())
                break
            widget.append_key(key)

    def _capture(self, choice: Optional[str], selection: Selection) -> None:
        self.record.add_answer(
            prompt=self.prompt.text,
            choice=choice,
            reaction_time=self.clock.elapsed(),
            value=selection.value,
        )
        self._specify = selection.specify
        if selection.skip is not None:
            self._skip = selection.skip
        self.clock.reset()
        self.keyboard.clear_events()
        self.stage = StepStage.DISPLAYING
        logger.debug("Question %s answered: %r", self.question.index, selection.value)


__all__ = ["QuestionStep", "StepStage", "SurveyRunContext"]
