from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Dict, Optional, Sequence
from uuid import uuid4
import logging
import random

from CribbageAgent.config import (
    WINNING_SCORE,
    PEG_LIMIT,
    FIFTEEN,
    HAND_SIZE,
    DISCARD_COUNT,
    PLAYERS,
    INITIAL_DEALER,
    AUTO_PASS_MAX_STEPS,
)
from CribbageAgent.engine.cards import Card, Deck
from CribbageAgent.engine.errors import IllegalDiscard, IllegalPlay, InvalidDiscardCount
from CribbageAgent.engine.events import EventKind, GameEvent
from CribbageAgent.engine.scoring import (
    exactly_equals,
    pair_triple_quad,
    run_during_play,
    score_show,
)

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    DISCARD = "discard"
    PEGGING = "pegging"
    GAME_OVER = "game_over"


def other_player(player: int) -> int:
    return 2 if player == 1 else 1


@dataclass
class PeggingState:
    """Running count for the current sequence of plays (reset on GO or 31)."""
    current_player: int = 1
    pile: List[Card] = field(default_factory=list)
    total: int = 0
    consecutive_passes: int = 0
    last_player: Optional[int] = None

    def reset(self) -> None:
        self.pile = []
        self.total = 0
        self.consecutive_passes = 0
        self.last_player = None


class CribbageGame:
    """
    One two-player table.
    Every mutating call runs to completion, cascading GOs, resets and the
    show included, and returns the events it produced in order.
    Once a player reaches the winning score the table is frozen and all
    mutating calls return an empty list.
    """

    def __init__(self, dealer: int = INITIAL_DEALER, deck_factory: Optional[Callable[[], Deck]] = None,
                 rng: Optional[random.Random] = None, game_id: Optional[str] = None):
        if dealer not in PLAYERS:
            raise ValueError(f"Invalid dealer: {dealer}")
        self.id = game_id or str(uuid4())
        self.dealer = dealer
        self.scores: Dict[int, int] = {p: 0 for p in PLAYERS}
        self.winner: Optional[int] = None
        self.round_number = 0
        self._rng = rng or random.Random()
        self._deck_factory = deck_factory or self._shuffled_deck

        self.deck: Optional[Deck] = None
        self.hands: Dict[int, List[Card]] = {p: [] for p in PLAYERS}
        self.show_hands: Dict[int, List[Card]] = {p: [] for p in PLAYERS}
        self.crib: List[Card] = []
        self.starter: Optional[Card] = None
        self.discarded = set()
        self.phase = Phase.DISCARD
        self.pegging = PeggingState()
        self.show_done = False

    @property
    def game_over(self) -> bool:
        return self.winner is not None

    def _shuffled_deck(self) -> Deck:
        deck = Deck(rng=self._rng)
        deck.shuffle()
        return deck

    # ---------- Round lifecycle ----------

    def start_round(self) -> List[GameEvent]:
        """Deal six cards to each player, alternating, player 1 first."""
        if self.game_over:
            return []
        self.round_number += 1
        self.deck = self._deck_factory()
        self.hands = {p: [] for p in PLAYERS}
        self.show_hands = {p: [] for p in PLAYERS}
        self.crib = []
        self.starter = None
        self.discarded = set()
        self.pegging = PeggingState(current_player=other_player(self.dealer))
        self.show_done = False
        self.phase = Phase.DISCARD

        for _ in range(HAND_SIZE):
            for p in PLAYERS:
                self.hands[p].append(self.deck.draw())

        logger.info("Game %s round %d: dealer is player %d", self.id, self.round_number, self.dealer)
        return [GameEvent(
            EventKind.NEW_ROUND,
            player=self.dealer,
            desc=f"Round {self.round_number}. Dealer is player {self.dealer}.",
            data={"round": self.round_number, "dealer": self.dealer},
        )]

    def discard(self, player: int, cards: Sequence[Card]) -> List[GameEvent]:
        """Move exactly two cards from a player's hand into the crib."""
        if self.game_over:
            return []
        if self.phase != Phase.DISCARD:
            raise IllegalDiscard("Not in the discard phase")
        if player not in PLAYERS:
            raise IllegalDiscard(f"Unknown player: {player}")
        if player in self.discarded:
            raise IllegalDiscard(f"Player {player} has already discarded")
        if len(cards) != DISCARD_COUNT:
            raise InvalidDiscardCount(f"Select exactly {DISCARD_COUNT} cards to discard.")
        hand = self.hands[player]
        if len(set(cards)) != len(cards) or any(c not in hand for c in cards):
            raise IllegalDiscard(f"Player {player} does not hold those cards")

        for card in cards:
            hand.remove(card)
            self.crib.append(card)
        self.discarded.add(player)

        if len(self.discarded) < len(PLAYERS):
            return []
        return self._start_pegging()

    def _start_pegging(self) -> List[GameEvent]:
        events: List[GameEvent] = []
        # The show counts the four kept cards, not what is left after pegging
        self.show_hands = {p: list(self.hands[p]) for p in PLAYERS}

        self.deck.cut()
        self.starter = self.deck.draw()
        events.append(GameEvent(EventKind.STARTER, desc=f"Starter is {self.starter}",
                                data={"card": str(self.starter)}))

        self.phase = Phase.PEGGING
        self.pegging = PeggingState(current_player=other_player(self.dealer))
        events.append(GameEvent(
            EventKind.PEGGING_STARTED,
            player=self.pegging.current_player,
            desc=f"Pegging begins. Player {self.pegging.current_player} leads.",
        ))
        self._auto_pass(events)
        return events

    # ---------- Pegging ----------

    def playable_cards(self, player: int) -> List[Card]:
        return [c for c in self.hands[player] if self.pegging.total + c.value <= PEG_LIMIT]

    def play_card(self, player: int, card: Card) -> List[GameEvent]:
        if self.game_over:
            return []
        if self.phase != Phase.PEGGING:
            raise IllegalPlay("Not in the pegging phase")
        peg = self.pegging
        if player != peg.current_player:
            raise IllegalPlay(f"It is player {peg.current_player}'s turn")
        hand = self.hands[player]
        if card not in hand:
            raise IllegalPlay(f"Player {player} does not hold {card}")
        if peg.total + card.value > PEG_LIMIT:
            # Empty in normal play: every state change already ends in an auto-pass check.
            # Non-empty only when the table was changed from outside this class.
            events: List[GameEvent] = []
            self._auto_pass(events)
            raise IllegalPlay(f"Cannot play {card} (over {PEG_LIMIT}).", events)

        events = []
        hand.remove(card)
        peg.pile.append(card)
        peg.total += card.value
        peg.last_player = player
        peg.consecutive_passes = 0
        events.append(GameEvent(EventKind.PLAY, player=player, desc=f"Player {player} plays {card}",
                                data={"card": str(card), "total": peg.total}))

        for result in (exactly_equals(peg.pile, FIFTEEN), pair_triple_quad(peg.pile), run_during_play(peg.pile)):
            if result["score"] > 0:
                self._award(player, result["score"], result["desc"], events)
                if self.game_over:
                    return events

        if peg.total == PEG_LIMIT:
            self._award(player, 2, f"Reached {PEG_LIMIT}", events)
            if self.game_over:
                return events
            self._reset_count(events)
        # Also after 31: the other player leads the new count
        peg.current_player = other_player(player)

        self._auto_pass(events)
        events.extend(self.check_pegging_complete())
        return events

    def _auto_pass(self, events: List[GameEvent]) -> None:
        """Say GO for the current player as long as they hold nothing playable."""
        peg = self.pegging
        for _ in range(AUTO_PASS_MAX_STEPS):
            if self.game_over or self.phase != Phase.PEGGING:
                return
            if not any(self.hands[p] for p in PLAYERS):
                return
            if self.playable_cards(peg.current_player):
                return

            peg.consecutive_passes += 1
            events.append(GameEvent(EventKind.GO, player=peg.current_player,
                                    desc=f"Player {peg.current_player} says GO."))
            peg.current_player = other_player(peg.current_player)

            if peg.consecutive_passes >= 2:
                if peg.total > 0 and peg.last_player is not None:
                    self._award(peg.last_player, 1, "Last card (GO)", events)
                    if self.game_over:
                        return
                leader = peg.last_player if peg.last_player is not None else peg.current_player
                self._reset_count(events)
                peg.current_player = leader
        logger.warning("Game %s: auto-pass stopped after %d steps", self.id, AUTO_PASS_MAX_STEPS)

    def _reset_count(self, events: List[GameEvent]) -> None:
        self.pegging.reset()
        events.append(GameEvent(EventKind.RESET, desc="Count resets to 0."))

    def check_pegging_complete(self) -> List[GameEvent]:
        """Once both hands are empty: last-card point, then the show (once per round)."""
        events: List[GameEvent] = []
        if self.show_done or self.game_over or self.phase != Phase.PEGGING:
            return events
        if any(self.hands[p] for p in PLAYERS):
            return events

        self.show_done = True
        peg = self.pegging
        if peg.total > 0 and peg.last_player is not None:
            self._award(peg.last_player, 1, "Last card", events)
            if self.game_over:
                return events
        self.pegging.reset()
        self._score_show(events)
        return events

    # ---------- Show ----------

    def _score_show(self, events: List[GameEvent]) -> None:
        non_dealer = other_player(self.dealer)
        steps = [
            (non_dealer, self.show_hands[non_dealer], "hand"),
            (self.dealer, self.show_hands[self.dealer], "hand"),
            (self.dealer, self.crib, "crib"),
        ]
        for player, cards, label in steps:
            result = score_show(cards, self.starter)
            events.append(GameEvent(
                EventKind.SHOW,
                player=player,
                amount=result["total"],
                desc=f"Player {player} {label}: {result['total']} "
                     f"(15s={result['fifteens']}, runs={result['runs']}, pairs={result['pairs']})",
                data={
                    "label": label,
                    "cards": [str(c) for c in cards],
                    "starter": str(self.starter),
                    "fifteens": result["fifteens"],
                    "runs": result["runs"],
                    "pairs": result["pairs"],
                    "total": result["total"],
                },
            ))
            self._award(player, result["total"], f"Show ({label})", events)
            if self.game_over:
                return

        events.append(GameEvent(
            EventKind.ROUND_COMPLETE,
            desc=f"End of round. Totals: Player 1 = {self.scores[1]}, Player 2 = {self.scores[2]}.",
            data={"scores": {str(p): s for p, s in self.scores.items()}},
        ))
        self.dealer = other_player(self.dealer)
        events.extend(self.start_round())

    # ---------- Scores ----------

    def _award(self, player: int, points: int, desc: str, events: List[GameEvent]) -> None:
        if points <= 0 or self.game_over:
            return
        self.scores[player] += points
        logger.debug("Game %s: player %d scores %d (%s), total %d",
                     self.id, player, points, desc, self.scores[player])
        events.append(GameEvent(EventKind.SCORE, player=player, amount=points, desc=desc,
                                data={"score": self.scores[player]}))

        if self.scores[player] >= WINNING_SCORE:
            self.winner = player
            self.phase = Phase.GAME_OVER
            logger.info("Game %s: player %d wins with %d", self.id, player, self.scores[player])
            events.append(GameEvent(EventKind.GAME_OVER, player=player, desc=f"Player {player} wins!",
                                    data={"scores": {str(p): s for p, s in self.scores.items()}}))


def new_game(dealer: int = INITIAL_DEALER, deck_factory: Optional[Callable[[], Deck]] = None,
             rng: Optional[random.Random] = None) -> CribbageGame:
    game = CribbageGame(dealer=dealer, deck_factory=deck_factory, rng=rng)
    game.start_round()
    return game


def serialize_card(card: Card) -> Dict[str, str]:
    return {"suit": card.suit.value, "rank": card.rank.value}


def serialize_game_state(game: CribbageGame) -> Dict:
    peg = game.pegging
    return {
        "id": game.id,
        "round": game.round_number,
        "phase": game.phase.value,
        "dealer": game.dealer,
        "scores": {str(p): s for p, s in game.scores.items()},
        "winner": game.winner,
        "hands": {
            str(p): [serialize_card(c) for c in cards]
            for p, cards in game.hands.items()
        },
        "discarded": sorted(game.discarded),
        "crib_size": len(game.crib),
        "starter": serialize_card(game.starter) if game.starter else None,
        "pegging": {
            "pile": [serialize_card(c) for c in peg.pile],
            "total": peg.total,
            "current_player": peg.current_player,
            "consecutive_passes": peg.consecutive_passes,
            "last_player": peg.last_player,
        },
    }
