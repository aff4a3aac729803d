"""
Core Survey Model Objects

Defines the data structures shared by every layer of the survey engine:
    - Surveys (root container, immutable once loaded)
    - Questions and their input specifications
    - Answer records (one per visited question)
    - Run status and step results for the frame-driven loop

ARCHITECTURAL RULE:
    Spec objects (SurveySpec, QuestionSpec, input specs) are frozen.
    They describe WHAT is asked, never how it is drawn.

    AnswerRecord is the only mutable object here, and only the
    question stepper mutates it while its question is active.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class InputKind(Enum):
    """Tag for the two input variants a question may use."""
    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class KeyClass(Enum):
    """
    Character classes accepted by a continuous (free-text) input.

    DIGITS: 0-9 only
    LETTERS: a-z plus space and a dash substitute
    MIXED: both
    """
    DIGITS = "digits"
    LETTERS = "letters"
    MIXED = "mixed"


class SequencerStatus(Enum):
    """
    Process-wide skip status for one survey run.

    Transitions:
        CONTINUING -> BEGIN_SKIP   (a skip key was chosen)
        BEGIN_SKIP -> SKIPPING     (the triggering question has ended)
        SKIPPING   -> CONTINUING   (the skip target was reached)
    """
    CONTINUING = "continuing"
    SKIPPING = "skipping"
    BEGIN_SKIP = "begin_skip"


class StepResult(Enum):
    """
    Outcome of one poll of a step function.

    ADVANCE: the step is complete, the host moves on.
    REPEAT: poll the same step again on the next frame.
    """
    ADVANCE = "advance"
    REPEAT = "repeat"


@dataclass(frozen=True)
class OptionSpec:
    """
    One selectable option of a discrete question.

    Properties:
        key: Key name that selects this option (e.g. "1", "y")
        value: Text displayed and recorded for this option
        label: Optional text displayed beside the option
        additional_lines: Extra wrapped lines the value occupies;
            pushes the following options further down
    """

    key: str
    value: str
    label: Optional[str] = None
    additional_lines: int = 0


@dataclass(frozen=True)
class SkipSpec:
    """Jump to the question with ``target_index`` when ``key`` is chosen."""

    key: str
    target_index: Union[int, str]


@dataclass(frozen=True)
class SpecifySpec:
    """
    Follow-up question asked when ``key`` is chosen.

    For discrete inputs ``key`` is an option key. For continuous inputs it is
    matched case-insensitively against the submitted text.
    """

    key: str
    question: "QuestionSpec"


@dataclass(frozen=True)
class DiscreteInputSpec:
    """Multiple-choice input: one key press selects one option."""

    options: Tuple[OptionSpec, ...]
    specify: Tuple[SpecifySpec, ...] = ()
    skips: Tuple[SkipSpec, ...] = ()

    @property
    def kind(self) -> InputKind:
        return InputKind.DISCRETE

    def option_keys(self) -> List[str]:
        return [option.key for option in self.options]


@dataclass(frozen=True)
class ContinuousInputSpec:
    """Free-text input typed key by key and submitted with enter."""

    key_class: KeyClass = KeyClass.MIXED
    max_length: int = 10
    specify: Tuple[SpecifySpec, ...] = ()

    @property
    def kind(self) -> InputKind:
        return InputKind.CONTINUOUS


InputSpec = Union[DiscreteInputSpec, ContinuousInputSpec]


@dataclass(frozen=True)
class QuestionSpec:
    """
    A single survey question.

    Properties:
        index:
            Skip-target key, unique within a survey.
            Not necessarily the list position.
            None for specify follow-up questions, which are never
            skip targets themselves.

        prompt:
            Question text shown to the respondent

        input:
            DiscreteInputSpec or ContinuousInputSpec
    """

    index: Optional[Union[int, str]]
    prompt: str
    input: InputSpec


@dataclass(frozen=True)
class SurveySpec:
    """
    Root container for one survey set.

    Properties:
        set_name:
            Survey identifier, prefixes every recorded category

        linger_seconds:
            How long a chosen answer stays on screen before the
            question ends or chains into a specify follow-up

        instructions_text:
            Shown once before the first question when non-empty

        questions:
            Ordered questions

    INVARIANTS (checked by analyzer.validate_survey):
        - Question indexes are unique
        - Every skip target names a later question
        - At most one specify and one skip entry per key
    """

    set_name: str
    linger_seconds: float = 0.0
    instructions_text: str = ""
    questions: Tuple[QuestionSpec, ...] = ()

    def get_question(self, index: Union[int, str]) -> Optional[QuestionSpec]:
        """
        Retrieve a top-level question by its index.

        Returns:
            QuestionSpec or None if not found
        """
        for question in self.questions:
            if question.index == index:
                return question
        return None

    def position_of(self, index: Union[int, str]) -> Optional[int]:
        """List position of the question with ``index``, or None."""
        for position, question in enumerate(self.questions):
            if question.index == index:
                return position
        return None


@dataclass
class SpecifyAnswer:
    """One answer given inside a specify chain."""

    prompt: str
    choice: Optional[str]
    reaction_time: float
    value: str


@dataclass
class AnswerRecord:
    """
    Everything recorded for one visited question.

    The primary answer fills ``choice`` / ``reaction_time`` / ``value``.
    Every further answer in the specify chain is appended to ``specify``.
    Continuous answers have ``choice = None``.
    """

    survey_set: str
    question_index: Optional[Union[int, str]]
    prompt: str
    input_type: InputKind
    choice: Optional[str] = None
    reaction_time: Optional[float] = None
    value: Optional[str] = None
    specify: List[SpecifyAnswer] = field(default_factory=list)
    answered: bool = False
    finalized: bool = False

    @property
    def category(self) -> str:
        """Data sink category, ``{survey_set}_{question_index}``."""
        return f"{self.survey_set}_{self.question_index}"

    def add_answer(self, prompt: str, choice: Optional[str], reaction_time: float, value: str) -> None:
        """
        Record an answer: the first one is the primary answer, later ones
        belong to the specify chain.
        """
        if self.finalized:
            raise RuntimeError(f"Answer record {self.category} was already handed off")
        if not self.answered:
            self.choice = choice
            self.reaction_time = reaction_time
            self.value = value
            self.answered = True
        else:
            self.specify.append(SpecifyAnswer(
                prompt=prompt,
                choice=choice,
                reaction_time=reaction_time,
                value=value,
            ))


@dataclass(frozen=True)
class Slide:
    """One page of a paged-instructions deck."""

    name: str
    path: Optional[str] = None


@dataclass(frozen=True)
class SlideDeck:
    """Ordered slides shown by the paged instructions stepper."""

    name: str
    slides: Tuple[Slide, ...] = ()

    def __len__(self) -> int:
        return len(self.slides)
