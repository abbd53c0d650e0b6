import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Type, TypeVar

if TYPE_CHECKING:
    from .combat.round import RoundResult
    from .progression import BattleReward

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventBus:
    """Simple thread-safe in-process event bus for battle events.

    Subscribers are keyed by event class; events are emitted by instance.
    This is intentionally lightweight and synchronous to keep determinism for tests.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._subscribers: Dict[Type[Any], List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(handler)  # type: ignore[arg-type]

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        with self._lock:
            handlers = self._subscribers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                if not handlers:
                    self._subscribers.pop(event_type, None)

    def emit(self, event: Any) -> None:
        with self._lock:
            targets = [
                h
                for event_type, handlers in self._subscribers.items()
                if isinstance(event, event_type)
                for h in handlers
            ]
        logger.debug("Emitting %s to %d handlers", type(event).__name__, len(targets))
        for h in targets:
            h(event)


@dataclass(frozen=True)
class BattleStarted:
    enemy_name: str
    player_hp: int
    enemy_hp: int


@dataclass(frozen=True)
class RoundResolved:
    result: "RoundResult"


@dataclass(frozen=True)
class BattleWon:
    reward: "BattleReward"
    rounds: int


@dataclass(frozen=True)
class BattleLost:
    enemy_name: str
    rounds: int
