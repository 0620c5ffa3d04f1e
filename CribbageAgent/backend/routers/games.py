from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Optional, Dict, Any
import logging

from CribbageAgent.config import INITIAL_DEALER, PLAYERS
from CribbageAgent.backend.sessions import UnknownGame, create_game, drop_game, get_game
from CribbageAgent.engine.cards import Card, Suit, Rank
from CribbageAgent.engine.errors import CribbageError, IllegalPlay
from CribbageAgent.engine.events import GameEvent, serialize_event
from CribbageAgent.engine.game import CribbageGame, serialize_game_state

logger = logging.getLogger(__name__)

router = APIRouter()


# Data models for request/response
class CardModel(BaseModel):
    suit: str
    rank: str


class NewGameRequest(BaseModel):
    dealer: int = INITIAL_DEALER


class DiscardRequest(BaseModel):
    player: int
    cards: List[CardModel]


class PlayRequest(BaseModel):
    player: int
    card: CardModel


class ActionResponse(BaseModel):
    state: Dict[str, Any]
    events: List[Dict[str, Any]] = []


SUIT_ALIASES = {
    "HEARTS": "H", "♥": "H",
    "DIAMONDS": "D", "♦": "D",
    "CLUBS": "C", "♣": "C",
    "SPADES": "S", "♠": "S",
}

RANK_ALIASES = {
    "ACE": "A", "1": "A",
    "T": "10",
    "JACK": "J", "QUEEN": "Q", "KING": "K",
}


def to_engine_card(model: CardModel) -> Card:
    """Accept the frontend's suit names and symbols as well as H/D/C/S."""
    s = model.suit.strip().upper()
    r = model.rank.strip().upper()
    try:
        return Card(suit=Suit(SUIT_ALIASES.get(s, s)), rank=Rank(RANK_ALIASES.get(r, r)))
    except ValueError as e:
        logger.warning(f"Card Conversion Error: {e}")
        raise HTTPException(status_code=400, detail=f"Invalid card format: {e}")


def _response(game: CribbageGame, events: List[GameEvent]) -> Dict[str, Any]:
    return {
        "state": serialize_game_state(game),
        "events": [serialize_event(e) for e in events],
    }


def _lookup(game_id: str) -> CribbageGame:
    try:
        return get_game(game_id)
    except UnknownGame as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/games", response_model=ActionResponse)
async def new_game(request: Optional[NewGameRequest] = None):
    dealer = request.dealer if request else INITIAL_DEALER
    if dealer not in PLAYERS:
        raise HTTPException(status_code=400, detail=f"Invalid dealer: {dealer}")
    game = create_game(dealer)
    return {"state": serialize_game_state(game), "events": []}


@router.get("/games/{game_id}", response_model=ActionResponse)
async def get_state(game_id: str):
    return _response(_lookup(game_id), [])


@router.post("/games/{game_id}/discard", response_model=ActionResponse)
async def discard(game_id: str, request: DiscardRequest):
    game = _lookup(game_id)
    cards = [to_engine_card(c) for c in request.cards]
    try:
        events = game.discard(request.player, cards)
    except CribbageError as e:
        logger.warning(f"Rejected discard in game {game_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return _response(game, events)


@router.post("/games/{game_id}/play", response_model=ActionResponse)
async def play(game_id: str, request: PlayRequest):
    game = _lookup(game_id)
    card = to_engine_card(request.card)
    try:
        events = game.play_card(request.player, card)
    except IllegalPlay as e:
        logger.warning(f"Rejected play in game {game_id}: {e}")
        raise HTTPException(status_code=400, detail={
            "error": str(e),
            "events": [serialize_event(ev) for ev in e.events],
            "state": serialize_game_state(game),
        })
    return _response(game, events)


@router.delete("/games/{game_id}")
async def delete_game(game_id: str):
    if drop_game(game_id) is None:
        raise HTTPException(status_code=404, detail=f"No game with id {game_id}")
    return {"status": "deleted"}
