"""
Shared fixtures: a headless host (keyboard, clock, canvas, sink) and small
survey builders.
"""

import pytest

from kbsurvey.elements import Canvas
from kbsurvey.host import BufferedKeyboard, ManualClock
from kbsurvey.model import (
    ContinuousInputSpec,
    DiscreteInputSpec,
    KeyClass,
    OptionSpec,
    QuestionSpec,
    SkipSpec,
    SpecifySpec,
    StepResult,
    SurveySpec,
)
from kbsurvey.sinks import MemoryDataSink
from kbsurvey.stepper import StepStage


@pytest.fixture
def keyboard():
    return BufferedKeyboard()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def canvas():
    return Canvas()


@pytest.fixture
def sink():
    return MemoryDataSink()


def poll(step, times=1):
    """Call a step function ``times`` times and return the last result."""
    result = None
    for _ in range(times):
        result = step()
    return result


def poll_until_advance(step, clock, dt=0.1, max_frames=500):
    """Poll once per simulated frame until ADVANCE; returns the frame count."""
    for frame in range(1, max_frames + 1):
        if step() is StepResult.ADVANCE:
            return frame
        clock.advance(dt)
    raise AssertionError("step function never advanced")


def yes_no(specify=(), skips=()):
    return DiscreteInputSpec(
        options=(OptionSpec(key="y", value="Yes"), OptionSpec(key="n", value="No")),
        specify=tuple(specify),
        skips=tuple(skips),
    )


def followup(prompt="Please elaborate", max_length=10, key_class=KeyClass.MIXED):
    return QuestionSpec(index=None, prompt=prompt,
                        input=ContinuousInputSpec(key_class=key_class, max_length=max_length))


def linear_survey(count=6, linger=0.5, skip_from=None, skip_to=None, instructions=""):
    """Yes/no questions indexed 1..count, optionally skipping on 'n'."""
    questions = []
    for index in range(1, count + 1):
        skips = (SkipSpec(key="n", target_index=skip_to),) if index == skip_from else ()
        questions.append(QuestionSpec(index=index, prompt=f"Question {index}?", input=yes_no(skips=skips)))
    return SurveySpec(
        set_name="linear",
        linger_seconds=linger,
        instructions_text=instructions,
        questions=tuple(questions),
    )


@pytest.fixture
def smoking_question():
    """Discrete y/n whose 'y' chains into a continuous follow-up."""
    return QuestionSpec(
        index=1,
        prompt="Do you smoke?",
        input=yes_no(specify=(SpecifySpec(key="y", question=followup("How many per day?")),)),
    )


def answer_survey(sequencer, keyboard, clock, answers, dt=0.1, max_frames=2000):
    """
    Run a sequencer to completion, one simulated frame at a time.

    Instructions are dismissed with return. Each entry of ``answers`` is used
    for the next question waiting for input: pressed as a single key for
    discrete inputs, typed and submitted for continuous ones.
    """
    answers = list(answers)
    for _ in range(max_frames):
        screen = sequencer.instructions
        active = sequencer.active
        if not keyboard.pending:
            if screen.started and not screen.finished:
                keyboard.press("return")
            elif answers and active is not None and active.stage is StepStage.AWAITING_DISCRETE:
                keyboard.press(answers.pop(0))
            elif answers and active is not None and active.stage is StepStage.AWAITING_CONTINUOUS:
                keyboard.type_text(answers.pop(0))
        if sequencer.step() is StepResult.ADVANCE:
            return
        clock.advance(dt)
    raise AssertionError("survey never finished")
