"""
Survey sequencing: walks a survey's questions in order.

A SurveySequencer is a single step function for a whole survey:

    instructions (once, if any)
    for each question:
        begin   - skip check, new record, build stimuli
        loop    - QuestionStep.step() until ADVANCE
        end     - skip bookkeeping, hand the record to the sink

Skipped questions are still visited (they go through the same begin/loop/end
path) but never interact with the respondent and never produce a record.

SurveySession holds what all surveys of an experiment share: the prompt,
the two input widgets, keyboard, clock, sink and resource lookup.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from kbsurvey.analyzer import validate_survey
from kbsurvey.config import DisplayConfig
from kbsurvey.elements import Canvas
from kbsurvey.host import Clock, Keyboard
from kbsurvey.inputs import ContinuousInput, DiscreteInput, InputWidget
from kbsurvey.model import InputKind, QuestionSpec, SequencerStatus, StepResult, SurveySpec
from kbsurvey.renderer import QuestionRenderer
from kbsurvey.resources import ResourceLookup
from kbsurvey.sinks import DataSink
from kbsurvey.stepper import QuestionStep, SurveyRunContext


logger = logging.getLogger(__name__)


class TextScreen:
    """Shows a block of text until one of ``continue_keys`` is pressed."""

    def __init__(self, prompt: QuestionRenderer, keyboard: Keyboard, text: str, continue_keys: Sequence[str]) -> None:
        self.prompt = prompt
        self.keyboard = keyboard
        self.text = text
        self.continue_keys = list(continue_keys)
        self.started = False
        self.finished = not text

    def step(self) -> StepResult:
        if self.finished:
            return StepResult.ADVANCE
        if not self.started:
            self.prompt.set_instructions(self.text)
            self.prompt.show()
            self.keyboard.clear_events()
            self.started = True
        if self.keyboard.get_keys(self.continue_keys):
            self.prompt.clear()
            self.finished = True
            return StepResult.ADVANCE
        return StepResult.REPEAT


class SurveySequencer:
    """
    Step function running every question of one survey.

    The survey is validated on construction, so a malformed survey raises
    SurveySpecError before its first frame.
    """

    def __init__(
        self,
        survey: SurveySpec,
        prompt: QuestionRenderer,
        inputs: Dict[InputKind, InputWidget],
        keyboard: Keyboard,
        clock: Clock,
        sink: DataSink,
        continue_keys: Sequence[str] = ("return", "enter"),
        context: Optional[SurveyRunContext] = None,
    ) -> None:
        validate_survey(survey)
        self.survey = survey
        self.prompt = prompt
        self.inputs = inputs
        self.keyboard = keyboard
        self.clock = clock
        self.sink = sink
        self.context = context or SurveyRunContext(survey_set=survey.set_name)
        self.context.reset()
        self.instructions = TextScreen(prompt, keyboard, survey.instructions_text, continue_keys)
        self.position = 0
        self.active: Optional[QuestionStep] = None
        self.finished = False
        self._started = False

    @property
    def status(self) -> SequencerStatus:
        return self.context.status

    @property
    def current_question(self) -> Optional[QuestionSpec]:
        if self.position < len(self.survey.questions):
            return self.survey.questions[self.position]
        return None

    def step(self) -> StepResult:
        if self.finished:
            return StepResult.ADVANCE
        if not self._started:
            logger.info("Survey %s started (%d questions)", self.survey.set_name, len(self.survey.questions))
            self._started = True

        if self.instructions.step() is StepResult.REPEAT:
            return StepResult.REPEAT

        while self.position < len(self.survey.questions):
            if self.active is None:
                self.active = self._begin_question(self.survey.questions[self.position])
            if self.active.step() is StepResult.REPEAT:
                return StepResult.REPEAT
            self._end_question(self.active)
            self.active = None
            self.position += 1

        self.finished = True
        logger.info("Survey %s finished: %d recorded, %d skipped",
                    self.survey.set_name, len(self.context.recorded), len(self.context.skipped))
        return StepResult.ADVANCE

    def _begin_question(self, question: QuestionSpec) -> QuestionStep:
        step = QuestionStep(
            question=question,
            context=self.context,
            prompt=self.prompt,
            inputs=self.inputs,
            keyboard=self.keyboard,
            clock=self.clock,
            linger_seconds=self.survey.linger_seconds,
        )
        if self.context.status is SequencerStatus.SKIPPING:
            if question.index != self.context.skip_target:
                logger.debug("Question %s skipped", question.index)
                return step
            self.context.resume()
            logger.debug("Skip target %s reached", question.index)
        step.begin()
        return step

    def _end_question(self, step: QuestionStep) -> None:
        if self.context.status is SequencerStatus.SKIPPING:
            self.context.skipped.append(step.question.index)
            return
        self.context.start_skipping()

        record = step.record
        record.finalized = True
        self.context.current_record = None
        self.context.recorded.append(record.question_index)
        self.sink.record(record.category, record)


class SurveySession:
    """
    Shared stimuli and collaborators for every survey of an experiment.

    Usage, with a host that polls step functions once per frame:

        session = SurveySession(keyboard, clock, sink, library)
        host.add(session.begin_section)
        host.add(session.survey("demographics").step)
    """

    def __init__(
        self,
        keyboard: Keyboard,
        clock: Clock,
        sink: DataSink,
        resources: ResourceLookup,
        canvas: Optional[Canvas] = None,
        display: Optional[DisplayConfig] = None,
    ) -> None:
        self.keyboard = keyboard
        self.clock = clock
        self.sink = sink
        self.resources = resources
        self.canvas = canvas if canvas is not None else Canvas()
        self.display = display or DisplayConfig()
        self.prompt = QuestionRenderer(self.canvas, self.display.prompt)
        self.inputs: Dict[InputKind, InputWidget] = {
            InputKind.DISCRETE: DiscreteInput(self.canvas, self.display.discrete),
            InputKind.CONTINUOUS: ContinuousInput(self.canvas, self.display.continuous, self.display.keys),
        }
        self._intro: Optional[TextScreen] = None

    def begin_section(self) -> StepResult:
        """Step function for the generic intro shown before a block of surveys."""
        if self._intro is None or self._intro.finished:
            self._intro = TextScreen(self.prompt, self.keyboard, self.display.section_intro,
                                     self.display.keys.continue_keys)
        result = self._intro.step()
        if result is StepResult.ADVANCE:
            self._intro = None
        return result

    def survey(self, name: str) -> SurveySequencer:
        """
        Look the survey up and return a fresh sequencer for it.

        Raises:
            ResourceNotFoundError: If the survey does not exist
            SurveySpecError: If the survey is malformed
        """
        survey = self.resources.get_survey(name)
        return SurveySequencer(
            survey=survey,
            prompt=self.prompt,
            inputs=self.inputs,
            keyboard=self.keyboard,
            clock=self.clock,
            sink=self.sink,
            continue_keys=self.display.keys.continue_keys,
        )

    def surveys(self, names: Sequence[str]) -> List[SurveySequencer]:
        """Sequencers for several surveys, all looked up before any is run."""
        return [self.survey(name) for name in names]
