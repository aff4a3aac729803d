#!/usr/bin/env python3
"""
Demo: Run the example survey headless with scripted key presses.

Shows the full frame loop without a window:
1. Page through the welcome slides
2. Show the survey-section intro
3. Answer the demographics survey, following two specify chains
4. Print the recorded answers
"""

import json
import logging

from kbsurvey.elements import Canvas
from kbsurvey.examples import build_example_demographics_survey, build_example_slides
from kbsurvey.host import BufferedKeyboard, ManualClock
from kbsurvey.instructions import PagedInstructions
from kbsurvey.model import StepResult
from kbsurvey.resources import SurveyLibrary
from kbsurvey.sequencer import SurveySession
from kbsurvey.sinks import MemoryDataSink


FRAME = 1 / 60

# frame number -> keys pressed on that frame
SCRIPT = {
    5: ["n"], 10: ["n"], 15: ["f"],      # slides
    20: ["return"],                      # section intro
    25: ["return"],                      # survey instructions
    30: ["y"],                           # Q1: yes -> specify
    90: ["c", "e", "l", "l", "o", "return"],
    150: ["1", "2", "return"],           # Q2
    210: ["2"],                          # Q3
    270: ["3"],                          # Q4: other -> both hands?
    330: ["n"],                          #   no -> please specify
    390: ["f", "e", "e", "t", "return"],
    450: ["3", "4", "return"],           # Q5
}


def run(steps, keyboard, clock, max_frames=2000):
    """Poll each step function once per frame until it advances, like a host would."""
    frame = 0
    for step in steps:
        while frame < max_frames:
            keyboard.press(*SCRIPT.get(frame, []))
            result = step()
            clock.advance(FRAME)
            frame += 1
            if result is StepResult.ADVANCE:
                break
    return frame


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    keyboard = BufferedKeyboard()
    clock = ManualClock()
    canvas = Canvas()
    sink = MemoryDataSink()
    library = SurveyLibrary()
    library.add_survey(build_example_demographics_survey(linger=0.5))

    slides = PagedInstructions(build_example_slides(), keyboard, canvas)
    session = SurveySession(keyboard, clock, sink, library, canvas=canvas)
    survey = session.survey("demographics")

    frames = run([slides.step, session.begin_section, survey.step], keyboard, clock)

    print("=" * 80)
    print(f"Finished after {frames} frames; skipped questions: {survey.context.skipped}")
    print("=" * 80)
    print(json.dumps(sink.as_dicts(), indent=2))


if __name__ == "__main__":
    main()
