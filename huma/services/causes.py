from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Iterable, Type

logger = logging.getLogger(__name__)


class CheckinCause(str, Enum):
    WORKLOAD = "WORKLOAD"
    RELATIONS = "RELATIONS"
    MOTIVATION = "MOTIVATION"
    CLARITY = "CLARITY"
    RECOGNITION = "RECOGNITION"
    BALANCE = "BALANCE"


class FeedbackCategory(str, Enum):
    WORKLOAD = "WORKLOAD"
    RELATIONS = "RELATIONS"
    MOTIVATION = "MOTIVATION"
    ORGANIZATION = "ORGANIZATION"
    RECOGNITION = "RECOGNITION"
    WORK_LIFE_BALANCE = "WORK_LIFE_BALANCE"
    FACILITIES = "FACILITIES"


def parse_causes(raw: Any) -> list:
    """
    Decode the causes column. It is stored as a JSON array string but may be
    missing, already decoded, or garbage; garbage decodes to [].
    """
    if not raw:
        return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("Ignoring malformed causes value: %r", raw)
        return []
    return parsed if isinstance(parsed, list) else []


def filter_known_causes(causes: Iterable[Any], vocabulary: Type[Enum] = CheckinCause) -> list[str]:
    """
    Keep only tags from `vocabulary`, in input order.
    """
    known = {member.value for member in vocabulary}
    return [c for c in causes if isinstance(c, str) and c in known]
