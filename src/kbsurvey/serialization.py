"""
Serialization helpers for survey objects (SurveySpec, QuestionSpec, AnswerRecord, SlideDeck).

Surveys are declared as plain dicts (usually JSON or YAML files):

    set: demographics
    linger: 0.5
    instructions: "Answer with the number keys."
    questions:
      - index: 1
        question: "Do you smoke?"
        input:
          type: discrete
          options:
            - {key: y, value: "Yes"}
            - {key: n, value: "No"}
          specify:
            - key: y
              question: "How many per day?"
              input: {type: continuous, key_class: digits, max_length: 3}
          skips:
            - {key: n, index: 5}

Loading is strict: missing required fields raise SurveySpecError.
Structural checks (duplicates, skip targets) live in kbsurvey.analyzer.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List

import yaml

from kbsurvey.analyzer import SurveySpecError, validate_survey
from kbsurvey.model import (
    AnswerRecord,
    ContinuousInputSpec,
    DiscreteInputSpec,
    InputKind,
    InputSpec,
    KeyClass,
    OptionSpec,
    QuestionSpec,
    SkipSpec,
    Slide,
    SlideDeck,
    SpecifyAnswer,
    SpecifySpec,
    SurveySpec,
)


def _require(d: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(d, dict):
        raise SurveySpecError(f"{where}: expected a mapping, got {type(d).__name__}")
    if key not in d or d[key] is None:
        raise SurveySpecError(f"{where}: missing required field '{key}'")
    return d[key]


def _as_list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SurveySpecError(f"{where}: expected a list, got {type(value).__name__}")
    return value


def option_from_dict(d: Dict[str, Any], where: str = "option") -> OptionSpec:
    return OptionSpec(
        key=str(_require(d, "key", where)),
        value=str(_require(d, "value", where)),
        label=d.get("label"),
        additional_lines=int(d.get("additional_lines", 0)),
    )


def option_to_dict(o: OptionSpec) -> Dict[str, Any]:
    return {"key": o.key, "value": o.value, "label": o.label, "additional_lines": o.additional_lines}


def skip_from_dict(d: Dict[str, Any], where: str = "skip") -> SkipSpec:
    return SkipSpec(key=str(_require(d, "key", where)), target_index=_require(d, "index", where))


def skip_to_dict(s: SkipSpec) -> Dict[str, Any]:
    return {"key": s.key, "index": s.target_index}


def specify_from_dict(d: Dict[str, Any], where: str = "specify") -> SpecifySpec:
    key = str(_require(d, "key", where))
    question = QuestionSpec(
        index=None,
        prompt=str(_require(d, "question", where)),
        input=input_from_dict(_require(d, "input", where), f"{where} '{key}'"),
    )
    return SpecifySpec(key=key, question=question)


def specify_to_dict(s: SpecifySpec) -> Dict[str, Any]:
    return {"key": s.key, "question": s.question.prompt, "input": input_to_dict(s.question.input)}


def input_from_dict(d: Dict[str, Any], where: str = "input") -> InputSpec:
    raw_type = str(_require(d, "type", where)).lower()
    try:
        kind = InputKind(raw_type)
    except ValueError:
        raise SurveySpecError(f"{where}: unknown input type '{raw_type}'")

    specify = tuple(
        specify_from_dict(entry, f"{where} specify")
        for entry in _as_list(d.get("specify"), f"{where} specify")
    )

    if kind is InputKind.DISCRETE:
        options = tuple(
            option_from_dict(entry, f"{where} option")
            for entry in _as_list(_require(d, "options", where), f"{where} options")
        )
        skips = tuple(
            skip_from_dict(entry, f"{where} skip")
            for entry in _as_list(d.get("skips"), f"{where} skips")
        )
        return DiscreteInputSpec(options=options, specify=specify, skips=skips)

    raw_class = str(d.get("key_class", KeyClass.MIXED.value)).lower()
    try:
        key_class = KeyClass(raw_class)
    except ValueError:
        raise SurveySpecError(f"{where}: unknown key class '{raw_class}'")
    try:
        max_length = int(d.get("max_length", 10))
    except (TypeError, ValueError):
        raise SurveySpecError(f"{where}: max_length must be an integer, got {d.get('max_length')!r}")
    return ContinuousInputSpec(key_class=key_class, max_length=max_length, specify=specify)


def input_to_dict(spec: InputSpec) -> Dict[str, Any]:
    d: Dict[str, Any] = {"type": spec.kind.value}
    if isinstance(spec, DiscreteInputSpec):
        d["options"] = [option_to_dict(o) for o in spec.options]
        d["skips"] = [skip_to_dict(s) for s in spec.skips]
    else:
        d["key_class"] = spec.key_class.value
        d["max_length"] = spec.max_length
    d["specify"] = [specify_to_dict(s) for s in spec.specify]
    return d


def question_from_dict(d: Dict[str, Any]) -> QuestionSpec:
    index = _require(d, "index", "question")
    where = f"question {index}"
    return QuestionSpec(
        index=index,
        prompt=str(_require(d, "question", where)),
        input=input_from_dict(_require(d, "input", where), where),
    )


def question_to_dict(q: QuestionSpec) -> Dict[str, Any]:
    return {"index": q.index, "question": q.prompt, "input": input_to_dict(q.input)}


def survey_from_dict(d: Dict[str, Any], validate: bool = True) -> SurveySpec:
    """
    Build a SurveySpec from its dict form.

    Raises:
        SurveySpecError: If a required field is missing or the structure is invalid
    """
    set_name = str(_require(d, "set", "survey"))
    try:
        linger = float(d.get("linger", 0.0))
    except (TypeError, ValueError):
        raise SurveySpecError(f"survey {set_name}: linger must be a number, got {d.get('linger')!r}")
    survey = SurveySpec(
        set_name=set_name,
        linger_seconds=linger,
        instructions_text=d.get("instructions") or "",
        questions=tuple(
            question_from_dict(q)
            for q in _as_list(_require(d, "questions", f"survey {set_name}"), f"survey {set_name}")
        ),
    )
    if validate:
        validate_survey(survey)
    return survey


def survey_to_dict(s: SurveySpec) -> Dict[str, Any]:
    return {
        "set": s.set_name,
        "linger": s.linger_seconds,
        "instructions": s.instructions_text,
        "questions": [question_to_dict(q) for q in s.questions],
    }


def survey_to_json(s: SurveySpec) -> str:
    return json.dumps(survey_to_dict(s), sort_keys=True)


def survey_from_json(s: str) -> SurveySpec:
    d = json.loads(s)
    return survey_from_dict(d)


def survey_to_yaml(s: SurveySpec) -> str:
    return yaml.safe_dump(survey_to_dict(s), sort_keys=False)


def survey_from_yaml(s: str) -> SurveySpec:
    d = yaml.safe_load(s)
    return survey_from_dict(d)


def slide_deck_from_dict(d: Any, name: str = "") -> SlideDeck:
    """
    Build a SlideDeck from either ``{"name": ..., "slides": [...]}`` or a bare
    list of ``{"name": ..., "path": ...}`` entries.
    """
    if isinstance(d, list):
        entries = d
    else:
        name = str(d.get("name", name)) if isinstance(d, dict) else name
        entries = _as_list(_require(d, "slides", f"slides {name}"), f"slides {name}")
    slides = tuple(
        Slide(name=str(_require(e, "name", f"slides {name}")), path=e.get("path"))
        for e in entries
    )
    if not slides:
        raise SurveySpecError(f"slides {name}: a deck needs at least one slide")
    return SlideDeck(name=name, slides=slides)


def slide_deck_to_dict(deck: SlideDeck) -> Dict[str, Any]:
    return {"name": deck.name, "slides": [{"name": s.name, "path": s.path} for s in deck.slides]}


def specify_answer_to_dict(a: SpecifyAnswer) -> Dict[str, Any]:
    return {"question": a.prompt, "choice": a.choice, "rt": a.reaction_time, "value": a.value}


def answer_record_to_dict(r: AnswerRecord) -> Dict[str, Any]:
    return {
        "survey": r.survey_set,
        "question_index": r.question_index,
        "question": r.prompt,
        "question_type": r.input_type.value,
        "choice": r.choice,
        "rt": r.reaction_time,
        "value": r.value,
        "specify": [specify_answer_to_dict(a) for a in r.specify],
    }


def answer_record_to_json(r: AnswerRecord) -> str:
    return json.dumps(answer_record_to_dict(r), sort_keys=True)
