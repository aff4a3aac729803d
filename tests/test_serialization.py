"""
Tests for loading and dumping surveys, slide decks and answer records.
"""

import json

import pytest

from kbsurvey.analyzer import SurveySpecError
from kbsurvey.examples import build_example_demographics_survey
from kbsurvey.model import (
    AnswerRecord,
    ContinuousInputSpec,
    DiscreteInputSpec,
    InputKind,
    KeyClass,
)
from kbsurvey.serialization import (
    answer_record_to_dict,
    answer_record_to_json,
    slide_deck_from_dict,
    survey_from_dict,
    survey_from_json,
    survey_from_yaml,
    survey_to_dict,
    survey_to_json,
    survey_to_yaml,
)


SURVEY_YAML = """
set: smoking
linger: 0.5
instructions: Press Enter to begin.
questions:
  - index: 1
    question: Do you smoke?
    input:
      type: discrete
      options:
        - {key: y, value: "Yes"}
        - {key: n, value: "No", label: never}
      specify:
        - key: y
          question: How many per day?
          input: {type: continuous, key_class: digits, max_length: 3}
      skips:
        - {key: n, index: 3}
  - index: 2
    question: Brand?
    input: {type: continuous, key_class: letters}
  - index: 3
    question: Age?
    input:
      type: DISCRETE
      options:
        - {key: 1, value: "Under 30"}
        - {key: 2, value: "30 or over"}
"""


class TestSurveyLoading:
    """Test building SurveySpec objects from dicts and text."""

    def test_from_yaml(self):
        survey = survey_from_yaml(SURVEY_YAML)
        assert survey.set_name == "smoking"
        assert survey.linger_seconds == 0.5
        assert survey.instructions_text == "Press Enter to begin."
        assert [q.index for q in survey.questions] == [1, 2, 3]

        first = survey.questions[0].input
        assert isinstance(first, DiscreteInputSpec)
        assert first.options[1].label == "never"
        assert first.skips[0].target_index == 3
        followup = first.specify[0].question
        assert followup.index is None
        assert followup.prompt == "How many per day?"
        assert followup.input == ContinuousInputSpec(key_class=KeyClass.DIGITS, max_length=3)

    def test_continuous_defaults(self):
        survey = survey_from_yaml(SURVEY_YAML)
        brand = survey.questions[1].input
        assert brand.key_class is KeyClass.LETTERS
        assert brand.max_length == 10

    def test_option_keys_become_strings(self):
        survey = survey_from_yaml(SURVEY_YAML)
        assert survey.questions[2].input.option_keys() == ["1", "2"]

    def test_type_is_case_insensitive(self):
        survey = survey_from_yaml(SURVEY_YAML)
        assert survey.questions[2].input.kind is InputKind.DISCRETE

    def test_missing_questions(self):
        with pytest.raises(SurveySpecError, match="questions"):
            survey_from_dict({"set": "x"})

    def test_missing_set_name(self):
        with pytest.raises(SurveySpecError, match="set"):
            survey_from_dict({"questions": []})

    def test_missing_input_type(self):
        with pytest.raises(SurveySpecError, match="type"):
            survey_from_dict({"set": "x", "questions": [{"index": 1, "question": "Q", "input": {}}]})

    def test_unknown_input_type(self):
        with pytest.raises(SurveySpecError, match="unknown input type"):
            survey_from_dict({"set": "x", "questions": [
                {"index": 1, "question": "Q", "input": {"type": "slider"}},
            ]})

    def test_unknown_key_class(self):
        with pytest.raises(SurveySpecError, match="unknown key class"):
            survey_from_dict({"set": "x", "questions": [
                {"index": 1, "question": "Q", "input": {"type": "continuous", "key_class": "emoji"}},
            ]})

    def test_discrete_needs_options(self):
        with pytest.raises(SurveySpecError, match="options"):
            survey_from_dict({"set": "x", "questions": [
                {"index": 1, "question": "Q", "input": {"type": "discrete"}},
            ]})

    def test_structure_is_validated_on_load(self):
        with pytest.raises(SurveySpecError, match="skip target 9"):
            survey_from_dict({"set": "x", "questions": [
                {"index": 1, "question": "Q", "input": {
                    "type": "discrete",
                    "options": [{"key": "a", "value": "A"}, {"key": "b", "value": "B"}],
                    "skips": [{"key": "a", "index": 9}],
                }},
            ]})

    def test_validation_can_be_deferred(self):
        survey = survey_from_dict({"set": "x", "questions": [
            {"index": 1, "question": "Q", "input": {"type": "continuous", "max_length": 0}},
        ]}, validate=False)
        assert survey.questions[0].input.max_length == 0


class TestSurveyDumping:
    """Dumped surveys load back to the same structure."""

    def test_json_roundtrip(self):
        survey = build_example_demographics_survey()
        restored = survey_from_json(survey_to_json(survey))
        assert survey_to_dict(restored) == survey_to_dict(survey)

    def test_yaml_roundtrip(self):
        survey = build_example_demographics_survey()
        assert survey_from_yaml(survey_to_yaml(survey)) == survey


class TestSlideDecks:

    def test_from_mapping(self):
        deck = slide_deck_from_dict({"name": "intro", "slides": [{"name": "a", "path": "a.png"}, {"name": "b"}]})
        assert deck.name == "intro"
        assert [s.name for s in deck.slides] == ["a", "b"]
        assert deck.slides[1].path is None

    def test_from_bare_list(self):
        deck = slide_deck_from_dict([{"name": "a"}], name="intro")
        assert deck.name == "intro"
        assert len(deck) == 1

    def test_empty_deck(self):
        with pytest.raises(SurveySpecError):
            slide_deck_from_dict({"name": "intro", "slides": []})


class TestAnswerRecords:

    def test_to_dict(self):
        record = AnswerRecord(survey_set="smoking", question_index=1, prompt="Do you smoke?",
                              input_type=InputKind.DISCRETE)
        record.add_answer(prompt="Do you smoke?", choice="y", reaction_time=1.5, value="Yes")
        record.add_answer(prompt="How many per day?", choice=None, reaction_time=2.0, value="10")

        d = answer_record_to_dict(record)
        assert d == {
            "survey": "smoking",
            "question_index": 1,
            "question": "Do you smoke?",
            "question_type": "discrete",
            "choice": "y",
            "rt": 1.5,
            "value": "Yes",
            "specify": [{"question": "How many per day?", "choice": None, "rt": 2.0, "value": "10"}],
        }
        assert json.loads(answer_record_to_json(record)) == d
