from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import random


class Suit(str, Enum):
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"
    SPADES = "S"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


class Rank(str, Enum):
    A = "A"
    R2 = "2"
    R3 = "3"
    R4 = "4"
    R5 = "5"
    R6 = "6"
    R7 = "7"
    R8 = "8"
    R9 = "9"
    R10 = "10"
    J = "J"
    Q = "Q"
    K = "K"

    @property
    def order(self) -> int:
        return RANK_ORDER[self]

    @property
    def points(self) -> int:
        return min(RANK_ORDER[self], 10)


SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

# Ace low, King high; used for runs
RANK_ORDER = {rank: i + 1 for i, rank in enumerate(Rank)}


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank

    @property
    def value(self) -> int:
        """Point value used for fifteens and the running count."""
        return self.rank.points

    @property
    def order(self) -> int:
        return self.rank.order

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"


def standard_deck() -> List[Card]:
    return [Card(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def parse_card(text: str) -> Card:
    """Parse short notation such as "10H", "QS" or "A♦"."""
    text = text.strip().upper()
    if len(text) < 2:
        raise ValueError(f"Invalid card: {text!r}")
    rank_str, suit_str = text[:-1], text[-1]
    for suit, symbol in SUIT_SYMBOLS.items():
        if suit_str == symbol:
            suit_str = suit.value
    return Card(suit=Suit(suit_str), rank=Rank(rank_str))


class Deck:
    """Ordered pile of cards; draw() takes from the end."""

    def __init__(self, cards: Optional[List[Card]] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        if cards is None:
            cards = standard_deck()
        elif len(set(cards)) != len(cards):
            raise ValueError("Deck contains duplicate cards")
        self._cards = list(cards)

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        if not self._cards:
            raise RuntimeError("Deck is empty")
        return self._cards.pop()

    def cut(self, cut_point: Optional[int] = None) -> None:
        """Move the top `cut_point` cards underneath the rest."""
        if cut_point is None:
            cut_point = self._rng.randrange(len(self._cards)) if self._cards else 0
        self._cards = self._cards[cut_point:] + self._cards[:cut_point]

    def size(self) -> int:
        return len(self._cards)

    def cards(self) -> List[Card]:
        return list(self._cards)
