"""Condition/attitude tallies from audit classification payloads.

Stored payloads come in several shapes depending on the form version that
wrote them. Each payload is tagged with one `Shape` and handed to that
shape's visitor; every visitor returns a `ClassificationTally` or None
(no contribution) and never mutates shared state.

  json-text   serialized JSON, decoded then visited again
  sequence    list of anything, children summed
  summary     pre-aggregated counts (a total, or numbers with no boolean-like flag)
  record      one answer with boolean-like condicion/actitud flags
  container   mapping without flags, nested lists/mappings visited
  unknown     anything else
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional

from ..common.coercion import is_number, is_truthy_flag
from .model import AuditRecord

logger = logging.getLogger(__name__)

CONDITION_KEYS = ("condicion", "condición", "Condicion", "Condición")
ATTITUDE_KEYS = ("actitud", "Actitud")
SUMMARY_LABEL_KEYS = ("condición", "Condicion", "Condición", "Actitud")


@dataclass(frozen=True)
class ClassificationTally:
    condition: float = 0
    attitude: float = 0

    @property
    def total(self) -> float:
        return self.condition + self.attitude

    def __add__(self, other: "ClassificationTally") -> "ClassificationTally":
        return ClassificationTally(self.condition + other.condition, self.attitude + other.attitude)

    def __bool__(self) -> bool:
        return self.total != 0

    def to_dict(self) -> dict:
        return {"condicion": self.condition, "actitud": self.attitude, "total": self.total}


EMPTY_TALLY = ClassificationTally()


class Shape(str, Enum):
    JSON_TEXT = "json-text"
    SEQUENCE = "sequence"
    SUMMARY = "summary"
    RECORD = "record"
    CONTAINER = "container"
    UNKNOWN = "unknown"


def _first_present(payload: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _flag_values(payload: Mapping[str, Any]) -> list[Any]:
    return [payload[key] for key in CONDITION_KEYS + ATTITUDE_KEYS if key in payload]


def _is_summary(payload: Mapping[str, Any]) -> bool:
    if "total" in payload:
        return True
    values = _flag_values(payload)
    # A boolean-like flag means a single answer, whatever its keys look like.
    if any(isinstance(v, bool) or (isinstance(v, str) and is_truthy_flag(v)) for v in values):
        return False
    if any(key in payload for key in SUMMARY_LABEL_KEYS):
        return True
    return any(is_number(v) and v > 1 for v in values)


def shape_of(payload: Any) -> Shape:
    if isinstance(payload, str):
        return Shape.JSON_TEXT
    if isinstance(payload, (list, tuple)):
        return Shape.SEQUENCE
    if isinstance(payload, Mapping):
        if _is_summary(payload):
            return Shape.SUMMARY
        if _flag_values(payload):
            return Shape.RECORD
        return Shape.CONTAINER
    return Shape.UNKNOWN


def _combine(tallies: Iterable[Optional[ClassificationTally]]) -> Optional[ClassificationTally]:
    found = [t for t in tallies if t is not None]
    if not found:
        return None
    total = EMPTY_TALLY
    for tally in found:
        total = total + tally
    return total


def _nested(payload: Mapping[str, Any], skip: tuple[str, ...] = ()) -> Optional[ClassificationTally]:
    return _combine(
        visit(value)
        for key, value in payload.items()
        if key not in skip and isinstance(value, (list, tuple, Mapping))
    )


def _visit_json_text(payload: str) -> Optional[ClassificationTally]:
    text = payload.strip()
    if not text:
        return None
    try:
        decoded = json.loads(text)
    except ValueError:
        logger.debug("classification payload is not valid JSON; ignored")
        return None
    if isinstance(decoded, str):
        return None
    return visit(decoded)


def _visit_sequence(payload: Any) -> Optional[ClassificationTally]:
    return _combine(visit(item) for item in payload)


def _visit_summary(payload: Mapping[str, Any]) -> Optional[ClassificationTally]:
    condition = _first_present(payload, CONDITION_KEYS)
    attitude = _first_present(payload, ATTITUDE_KEYS)
    return ClassificationTally(
        condition=condition if is_number(condition) else 0,
        attitude=attitude if is_number(attitude) else 0,
    )


def _visit_record(payload: Mapping[str, Any]) -> Optional[ClassificationTally]:
    own = ClassificationTally(
        condition=1 if is_truthy_flag(_first_present(payload, CONDITION_KEYS)) else 0,
        attitude=1 if is_truthy_flag(_first_present(payload, ATTITUDE_KEYS)) else 0,
    )
    return _combine([own, _nested(payload, skip=CONDITION_KEYS + ATTITUDE_KEYS)])


def _visit_container(payload: Mapping[str, Any]) -> Optional[ClassificationTally]:
    return _nested(payload)


def _visit_unknown(payload: Any) -> Optional[ClassificationTally]:
    return None


_VISITORS: dict[Shape, Callable[[Any], Optional[ClassificationTally]]] = {
    Shape.JSON_TEXT: _visit_json_text,
    Shape.SEQUENCE: _visit_sequence,
    Shape.SUMMARY: _visit_summary,
    Shape.RECORD: _visit_record,
    Shape.CONTAINER: _visit_container,
    Shape.UNKNOWN: _visit_unknown,
}


def visit(payload: Any) -> Optional[ClassificationTally]:
    return _VISITORS[shape_of(payload)](payload)


def tally_audit(audit: AuditRecord) -> ClassificationTally:
    """Tally for one audit; the stored summary is used only when nothing else counts."""
    primary = _combine(visit(payload) for payload in audit.classifications)
    if primary:
        return primary
    if audit.classification_summary is not None:
        fallback = visit(audit.classification_summary)
        if fallback:
            return fallback
    return primary or EMPTY_TALLY


def tally_audits(audits: Iterable[AuditRecord]) -> ClassificationTally:
    total = EMPTY_TALLY
    for audit in audits:
        total = total + tally_audit(audit)
    return total
