from typing import Dict, List, Optional
import logging

from CribbageAgent.config import MAX_GAMES
from CribbageAgent.engine.errors import CribbageError
from CribbageAgent.engine.game import CribbageGame, new_game

logger = logging.getLogger(__name__)

# Tables live only as long as the process; insertion order is creation order
_games: Dict[str, CribbageGame] = {}


class UnknownGame(CribbageError):
    """No table registered under that id"""
    pass


def evict_games(limit: int = MAX_GAMES) -> List[str]:
    """Make room for one more table: drop finished games, then the oldest ones."""
    evicted = [gid for gid, game in _games.items() if game.game_over]
    for gid in evicted:
        del _games[gid]
    while _games and len(_games) >= limit:
        gid = next(iter(_games))
        del _games[gid]
        evicted.append(gid)
    if evicted:
        logger.info("Evicted %d game(s)", len(evicted))
    return evicted


def create_game(dealer: int) -> CribbageGame:
    game = new_game(dealer=dealer)
    evict_games()
    _games[game.id] = game
    logger.info("Created game %s (dealer %d)", game.id, dealer)
    return game


def get_game(game_id: str) -> CribbageGame:
    game = _games.get(game_id)
    if game is None:
        raise UnknownGame(f"No game with id {game_id}")
    return game


def drop_game(game_id: str) -> Optional[CribbageGame]:
    return _games.pop(game_id, None)


def list_games() -> List[str]:
    return list(_games.keys())


def clear_games() -> None:
    _games.clear()
