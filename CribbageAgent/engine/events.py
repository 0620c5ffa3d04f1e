from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class EventKind(str, Enum):
    PLAY = "play"
    SCORE = "score"
    GO = "go"
    RESET = "reset"
    STARTER = "starter"
    PEGGING_STARTED = "pegging_started"
    SHOW = "show"
    ROUND_COMPLETE = "round_complete"
    NEW_ROUND = "new_round"
    GAME_OVER = "game_over"


@dataclass
class GameEvent:
    kind: EventKind
    player: Optional[int] = None
    amount: int = 0
    desc: str = ""
    data: Dict[str, Any] = field(default_factory=dict)


def serialize_event(event: GameEvent) -> Dict[str, Any]:
    return {
        "kind": event.kind.value,
        "player": event.player,
        "amount": event.amount,
        "desc": event.desc,
        "data": event.data,
    }
