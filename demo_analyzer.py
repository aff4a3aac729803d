"""
Demo: Run analyzer on the example demographics survey and output the report.
"""

from kbsurvey.examples import build_example_demographics_survey
from kbsurvey.analyzer import analyze_survey
from kbsurvey.serialization import survey_to_yaml


def print_report(report):
    """Pretty-print a SurveyReport."""
    print()
    print("=" * 70)
    print(f"SURVEY ANALYSIS REPORT: {report.survey_name}")
    print("=" * 70)
    print()

    print("BASIC METRICS")
    print(f"  Total Questions:       {report.total_questions}")
    print(f"  Discrete Inputs:       {report.discrete_questions}")
    print(f"  Continuous Inputs:     {report.continuous_questions}")
    print(f"  Options:               {report.total_options}")
    print(f"  Specify Entries:       {report.total_specify}")
    print(f"  Skips:                 {report.total_skips}")
    print(f"  Max Chain Depth:       {report.max_chain_depth}")
    print()

    if report.skip_edges:
        print("SKIPS")
        for source, targets in report.skip_edges.items():
            print(f"  {source} -> {', '.join(targets)}")
        print()

    if report.errors:
        print(f"ERRORS ({len(report.errors)})")
        for msg in report.errors:
            print(f"  - {msg}")
        print()

    if report.warnings:
        print(f"WARNINGS ({len(report.warnings)})")
        for msg in report.warnings:
            print(f"  - {msg}")
        print()

    print("=" * 70)


def main():
    survey = build_example_demographics_survey()
    print_report(analyze_survey(survey))

    print()
    print("SURVEY AS YAML")
    print("-" * 70)
    print(survey_to_yaml(survey))


if __name__ == "__main__":
    main()
