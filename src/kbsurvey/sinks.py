"""
Data sinks receive one finished AnswerRecord per visited question.

A sink failure is fatal for the session: errors propagate to the host
untouched, nothing is buffered or retried.
"""
from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional, Protocol, Tuple

from kbsurvey.model import AnswerRecord
from kbsurvey.serialization import answer_record_to_dict


logger = logging.getLogger(__name__)


class DataSink(Protocol):
    def record(self, category: str, record: AnswerRecord) -> None:
        ...


class MemoryDataSink:
    """Keeps every record in hand-off order."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, AnswerRecord]] = []

    def record(self, category: str, record: AnswerRecord) -> None:
        self.records.append((category, record))

    @property
    def categories(self) -> List[str]:
        return [category for category, _ in self.records]

    def get(self, category: str) -> Optional[AnswerRecord]:
        for name, record in self.records:
            if name == category:
                return record
        return None

    def as_dicts(self) -> Dict[str, dict]:
        return {category: answer_record_to_dict(record) for category, record in self.records}


class JsonLinesDataSink:
    """Appends one JSON object per record to a file."""

    def __init__(self, filepath: str) -> None:
        self.filepath = filepath

    def record(self, category: str, record: AnswerRecord) -> None:
        line = json.dumps({"category": category, **answer_record_to_dict(record)})
        with open(self.filepath, "a", encoding="utf-8") as f:
            f.write(line + "\n")
        logger.debug("Wrote %s to %s", category, self.filepath)
