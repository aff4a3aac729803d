"""
Example survey builders used by the demo script and the tests.

The demographics example exercises every feature: discrete and continuous
inputs, a specify chain ending in a free-text leaf, and a conditional skip.
"""
from kbsurvey.model import (
    ContinuousInputSpec,
    DiscreteInputSpec,
    KeyClass,
    OptionSpec,
    QuestionSpec,
    SkipSpec,
    Slide,
    SlideDeck,
    SpecifySpec,
    SurveySpec,
)


def _elaborate(prompt: str = "Please specify:", max_length: int = 20) -> QuestionSpec:
    return QuestionSpec(
        index=None,
        prompt=prompt,
        input=ContinuousInputSpec(key_class=KeyClass.MIXED, max_length=max_length),
    )


def build_example_demographics_survey(linger: float = 0.5) -> SurveySpec:
    yes_no = (OptionSpec(key="y", value="Yes"), OptionSpec(key="n", value="No"))

    questions = [
        QuestionSpec(
            index=1,
            prompt="Do you currently play a musical instrument?",
            input=DiscreteInputSpec(
                options=yes_no,
                specify=(SpecifySpec(key="y", question=_elaborate("Which instrument?")),),
                skips=(SkipSpec(key="n", target_index=4),),
            ),
        ),
        QuestionSpec(
            index=2,
            prompt="How many years have you played?",
            input=ContinuousInputSpec(key_class=KeyClass.DIGITS, max_length=2),
        ),
        QuestionSpec(
            index=3,
            prompt="How often do you practice?",
            input=DiscreteInputSpec(options=(
                OptionSpec(key="1", value="Daily"),
                OptionSpec(key="2", value="Weekly"),
                OptionSpec(key="3", value="Rarely"),
            )),
        ),
        QuestionSpec(
            index=4,
            prompt="What is your handedness?",
            input=DiscreteInputSpec(
                options=(
                    OptionSpec(key="1", value="Right"),
                    OptionSpec(key="2", value="Left"),
                    OptionSpec(key="3", value="Other"),
                ),
                specify=(SpecifySpec(key="3", question=QuestionSpec(
                    index=None,
                    prompt="Do you write with both hands?",
                    input=DiscreteInputSpec(
                        options=yes_no,
                        specify=(SpecifySpec(key="n", question=_elaborate()),),
                    ),
                )),),
            ),
        ),
        QuestionSpec(
            index=5,
            prompt="Please type your age.",
            input=ContinuousInputSpec(key_class=KeyClass.DIGITS, max_length=3),
        ),
    ]

    return SurveySpec(
        set_name="demographics",
        linger_seconds=linger,
        instructions_text="Answer each question with the keys shown.\nPress Enter to begin.",
        questions=tuple(questions),
    )


def build_example_slides(count: int = 3) -> SlideDeck:
    return SlideDeck(
        name="welcome",
        slides=tuple(Slide(name=f"slide{i}", path=f"instructions/slide{i}.png") for i in range(1, count + 1)),
    )
