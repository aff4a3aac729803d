"""
Tests for the core model objects.

These tests verify:
    - Spec objects are immutable and expose their input kind
    - Question lookup by index
    - AnswerRecord primary / specify bookkeeping
"""

import dataclasses

import pytest

from kbsurvey.model import (
    AnswerRecord,
    ContinuousInputSpec,
    DiscreteInputSpec,
    InputKind,
    KeyClass,
    OptionSpec,
    QuestionSpec,
    SlideDeck,
    Slide,
    SurveySpec,
)


class TestInputSpecs:
    """Test the tagged input variants."""

    def test_discrete_kind(self):
        spec = DiscreteInputSpec(options=(OptionSpec(key="1", value="One"),))
        assert spec.kind is InputKind.DISCRETE
        assert spec.option_keys() == ["1"]

    def test_continuous_defaults(self):
        spec = ContinuousInputSpec()
        assert spec.kind is InputKind.CONTINUOUS
        assert spec.key_class is KeyClass.MIXED
        assert spec.max_length == 10
        assert spec.specify == ()

    def test_specs_are_frozen(self):
        option = OptionSpec(key="1", value="One")
        with pytest.raises(dataclasses.FrozenInstanceError):
            option.value = "Two"


class TestSurveySpec:
    """Test lookup helpers on SurveySpec."""

    def _survey(self):
        continuous = ContinuousInputSpec()
        return SurveySpec(
            set_name="s",
            questions=(
                QuestionSpec(index=10, prompt="A", input=continuous),
                QuestionSpec(index=20, prompt="B", input=continuous),
            ),
        )

    def test_get_question(self):
        survey = self._survey()
        assert survey.get_question(20).prompt == "B"
        assert survey.get_question(99) is None

    def test_position_of(self):
        survey = self._survey()
        assert survey.position_of(10) == 0
        assert survey.position_of(20) == 1
        assert survey.position_of(30) is None


class TestAnswerRecord:
    """Test answer bookkeeping."""

    def _record(self):
        return AnswerRecord(survey_set="demo", question_index=3, prompt="Q?", input_type=InputKind.DISCRETE)

    def test_category(self):
        assert self._record().category == "demo_3"

    def test_first_answer_is_primary(self):
        record = self._record()
        record.add_answer(prompt="Q?", choice="y", reaction_time=1.25, value="Yes")
        assert record.choice == "y"
        assert record.reaction_time == 1.25
        assert record.value == "Yes"
        assert record.specify == []

    def test_later_answers_go_to_specify(self):
        record = self._record()
        record.add_answer(prompt="Q?", choice="y", reaction_time=1.0, value="Yes")
        record.add_answer(prompt="Which?", choice=None, reaction_time=2.0, value="OK")
        assert record.value == "Yes"
        assert len(record.specify) == 1
        assert record.specify[0].prompt == "Which?"
        assert record.specify[0].choice is None
        assert record.specify[0].value == "OK"

    def test_continuous_primary_is_not_overwritten(self):
        """A primary answer with choice None still counts as answered."""
        record = AnswerRecord(survey_set="demo", question_index=1, prompt="Q?", input_type=InputKind.CONTINUOUS)
        record.add_answer(prompt="Q?", choice=None, reaction_time=1.0, value="ABC")
        record.add_answer(prompt="More?", choice=None, reaction_time=1.0, value="DEF")
        assert record.value == "ABC"
        assert [a.value for a in record.specify] == ["DEF"]

    def test_finalized_record_rejects_answers(self):
        record = self._record()
        record.finalized = True
        with pytest.raises(RuntimeError):
            record.add_answer(prompt="Q?", choice="y", reaction_time=1.0, value="Yes")


def test_slide_deck_length():
    deck = SlideDeck(name="d", slides=(Slide(name="a"), Slide(name="b")))
    assert len(deck) == 2
