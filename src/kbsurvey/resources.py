"""
Resource lookup for surveys and slide decks.

Everything is loaded and validated before the first frame of a survey, so a
malformed or missing survey never shows up half-presented.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional, Protocol

import yaml

from kbsurvey.model import SlideDeck, SurveySpec
from kbsurvey.serialization import slide_deck_from_dict, survey_from_dict


logger = logging.getLogger(__name__)

SURVEY_EXTENSIONS = (".yaml", ".yml", ".json")


class ResourceNotFoundError(LookupError):
    """Raised when a survey or slide deck cannot be found."""
    pass


class ResourceLookup(Protocol):
    def get_survey(self, name: str) -> SurveySpec:
        ...

    def get_slides(self, name: str) -> SlideDeck:
        ...


def _read_file(filepath: str) -> Any:
    with open(filepath, "r", encoding="utf-8") as f:
        if filepath.endswith(".json"):
            return json.load(f)
        return yaml.safe_load(f)


class SurveyLibrary:
    """
    Surveys and slide decks by name.

    Resources can be registered directly or read from ``directory``:
        <directory>/<name>.yaml|.yml|.json         surveys
        <directory>/slides/<name>.yaml|.yml|.json  slide decks

    Files are parsed and validated on first lookup, then cached.
    """

    def __init__(self, directory: Optional[str] = None) -> None:
        self.directory = directory
        self._surveys: Dict[str, SurveySpec] = {}
        self._decks: Dict[str, SlideDeck] = {}

    def add_survey(self, survey: SurveySpec, name: Optional[str] = None) -> None:
        self._surveys[name or survey.set_name] = survey

    def add_slides(self, deck: SlideDeck, name: Optional[str] = None) -> None:
        self._decks[name or deck.name] = deck

    def _find(self, subdir: str, name: str) -> Optional[str]:
        if self.directory is None:
            return None
        for ext in SURVEY_EXTENSIONS:
            path = os.path.join(self.directory, subdir, name + ext)
            if os.path.isfile(path):
                return path
        return None

    def get_survey(self, name: str) -> SurveySpec:
        """
        Raises:
            ResourceNotFoundError: If no survey is registered or stored under ``name``
            SurveySpecError: If the stored survey is malformed
        """
        if name not in self._surveys:
            path = self._find("", name)
            if path is None:
                raise ResourceNotFoundError(f"Survey not found: {name}")
            logger.info("Loading survey %s from %s", name, path)
            self._surveys[name] = survey_from_dict(_read_file(path))
        return self._surveys[name]

    def get_slides(self, name: str) -> SlideDeck:
        """
        Raises:
            ResourceNotFoundError: If no slide deck is registered or stored under ``name``
        """
        if name not in self._decks:
            path = self._find("slides", name)
            if path is None:
                raise ResourceNotFoundError(f"Slide deck not found: {name}")
            logger.info("Loading slide deck %s from %s", name, path)
            self._decks[name] = slide_deck_from_dict(_read_file(path), name=name)
        return self._decks[name]
