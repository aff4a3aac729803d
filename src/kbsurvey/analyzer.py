"""
Survey Analyzer: structure inventory and fail-fast validation.

This module inspects SurveySpec objects before any interaction begins:
    - Question, option, specify and skip inventory
    - Specify chain depth
    - Skip targets (existence and direction)
    - Key uniqueness per question

Fatal problems raise SurveySpecError from validate_survey().
Everything else is reported as a warning.

IMPORTANT: It does NOT modify the survey.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from kbsurvey.model import (
    ContinuousInputSpec,
    DiscreteInputSpec,
    QuestionSpec,
    SurveySpec,
)


MAX_RECOMMENDED_CHAIN_DEPTH = 3


class SurveySpecError(ValueError):
    """Raised when a survey definition is malformed."""
    pass


@dataclass
class SurveyReport:
    """Analysis report for a survey."""

    survey_name: str
    total_questions: int = 0
    discrete_questions: int = 0
    continuous_questions: int = 0
    total_options: int = 0
    total_specify: int = 0
    total_skips: int = 0
    max_chain_depth: int = 0

    # question index -> skip target indexes declared anywhere in its chain
    skip_edges: Dict[str, List[str]] = field(default_factory=dict)

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, msg: str) -> None:
        if msg not in self.errors:
            self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _duplicates(keys: List[str]) -> List[str]:
    seen = set()
    dupes = []
    for key in keys:
        if key in seen and key not in dupes:
            dupes.append(key)
        seen.add(key)
    return dupes


def _walk_chain(question: QuestionSpec, depth: int = 0) -> List[Tuple[QuestionSpec, int]]:
    """Flatten a question and its specify follow-ups into (question, depth) pairs."""
    found = [(question, depth)]
    for entry in question.input.specify:
        found.extend(_walk_chain(entry.question, depth + 1))
    return found


def _check_input(report: SurveyReport, label: str, question: QuestionSpec) -> None:
    spec = question.input
    specify_keys = [entry.key for entry in spec.specify]
    for key in _duplicates(specify_keys):
        report.add_error(f"{label}: more than one specify entry for key '{key}'")

    if isinstance(spec, DiscreteInputSpec):
        report.discrete_questions += 1
        report.total_options += len(spec.options)
        option_keys = spec.option_keys()
        if not option_keys:
            report.add_error(f"{label}: discrete input has no options")
        elif len(option_keys) == 1:
            report.add_warning(f"{label}: discrete input has a single option")
        for key in _duplicates(option_keys):
            report.add_error(f"{label}: duplicate option key '{key}'")

        skip_keys = [skip.key for skip in spec.skips]
        for key in _duplicates(skip_keys):
            report.add_error(f"{label}: more than one skip entry for key '{key}'")
        for key in specify_keys + skip_keys:
            if key not in option_keys:
                report.add_error(f"{label}: key '{key}' is not one of the options")

    elif isinstance(spec, ContinuousInputSpec):
        report.continuous_questions += 1
        if spec.max_length < 1:
            report.add_error(f"{label}: max_length must be at least 1, got {spec.max_length}")
    else:
        report.add_error(f"{label}: unsupported input type {type(spec).__name__}")


def analyze_survey(survey: SurveySpec) -> SurveyReport:
    """
    Perform a structural analysis of a SurveySpec.

    Checks for:
    - Unique question indexes
    - Duplicate option / specify / skip keys
    - Specify and skip keys that are not options
    - Skip targets that are missing or not after their question
    - Specify chain depth

    Returns a SurveyReport with errors and warnings.
    """
    report = SurveyReport(survey_name=survey.set_name)
    report.total_questions = len(survey.questions)

    if survey.linger_seconds < 0:
        report.add_error(f"linger must not be negative, got {survey.linger_seconds}")

    indexes = [question.index for question in survey.questions]
    for index in indexes:
        if index is None:
            report.add_error("Every top-level question needs an index")
    for index in _duplicates([i for i in indexes if i is not None]):
        report.add_error(f"Duplicate question index: {index}")

    positions = {index: position for position, index in enumerate(indexes)}

    for position, question in enumerate(survey.questions):
        targets: List[str] = []
        for node, depth in _walk_chain(question):
            label = f"question {question.index}" if depth == 0 else f"question {question.index} (specify depth {depth})"
            _check_input(report, label, node)
            report.total_specify += len(node.input.specify)
            report.max_chain_depth = max(report.max_chain_depth, depth)

            if not isinstance(node.input, DiscreteInputSpec):
                continue
            for skip in node.input.skips:
                report.total_skips += 1
                targets.append(str(skip.target_index))
                target_position: Optional[int] = positions.get(skip.target_index)
                if target_position is None:
                    report.add_error(f"{label}: skip target {skip.target_index} is not in the survey")
                elif target_position <= position:
                    report.add_error(
                        f"{label}: skip target {skip.target_index} must come after the question"
                    )
                elif target_position == position + 1:
                    report.add_warning(
                        f"{label}: skip target {skip.target_index} is the next question, the skip has no effect"
                    )
        if targets:
            report.skip_edges[str(question.index)] = targets

    if report.max_chain_depth > MAX_RECOMMENDED_CHAIN_DEPTH:
        report.add_warning(f"Deep specify chain: depth {report.max_chain_depth}")

    return report


def validate_survey(survey: SurveySpec) -> SurveyReport:
    """
    Fail fast on a malformed survey.

    Warnings are emitted through the warnings module.

    Raises:
        SurveySpecError: If the survey has any structural error
    """
    report = analyze_survey(survey)
    for msg in report.warnings:
        warnings.warn(f"{survey.set_name}: {msg}", UserWarning)
    if report.errors:
        raise SurveySpecError(f"Invalid survey '{survey.set_name}': " + "; ".join(report.errors))
    return report
