"""
Keyboard Survey Engine (kbsurvey)

Runs declaratively specified surveys inside a frame-driven presentation loop.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - How elements are drawn
    - Which frame loop calls the step functions
    - Where recorded answers end up

Every interaction is a step function returning StepResult.ADVANCE or
StepResult.REPEAT. The host polls, draws the visible elements of the Canvas
and provides the keyboard, clock and data sink.
"""

__version__ = "0.1.0"
