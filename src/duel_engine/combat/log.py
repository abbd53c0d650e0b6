from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Event types that are forwarded at INFO rather than DEBUG.
_INFO_EVENTS = frozenset({"defeat", "victory", "luck"})


@dataclass(frozen=True)
class CombatEvent:
    """A narrated event emitted during combat.

    Common event types: "round", "order", "attack", "luck", "defeat",
    "victory".
    """

    type: str
    message: str
    round: int = 0
    data: Optional[Dict[str, Any]] = None


class CombatLog:
    """Round-by-round battle narration, in the order things happened.

    Every entry is also mirrored to this module's logger: outcomes and luck
    at INFO, the play-by-play at DEBUG.
    """

    def __init__(self) -> None:
        self._events: List[CombatEvent] = []

    def add(self, event_type: str, message: str, round: int = 0, **data: Any) -> CombatEvent:
        event = CombatEvent(type=event_type, message=message, round=round, data=data or None)
        self._events.append(event)
        level = logging.INFO if event_type in _INFO_EVENTS else logging.DEBUG
        logger.log(level, "[round %d] %s", round, message)
        return event

    def events(self) -> List[CombatEvent]:
        return list(self._events)

    def for_round(self, round: int) -> List[CombatEvent]:
        return [e for e in self._events if e.round == round]

    def of_type(self, event_type: str) -> List[CombatEvent]:
        return [e for e in self._events if e.type == event_type]

    def messages(self) -> List[str]:
        return [e.message for e in self._events]

    def __len__(self) -> int:
        return len(self._events)
