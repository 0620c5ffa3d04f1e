from itertools import combinations as _combinations
from collections import Counter
from typing import List, Dict, Any, Sequence

from CribbageAgent.config import FIFTEEN
from CribbageAgent.engine.cards import Card

# Points for a group of equal ranks, keyed by group size
GROUP_POINTS = {2: 2, 3: 6, 4: 12}

GROUP_NAMES = {2: "Pair", 3: "Pair Royal", 4: "Double Pair Royal"}


def combinations(cards: Sequence[Any], size: int) -> List[List[Any]]:
    """
    All subsets of `size` items, each kept in input order.
    Items are told apart by position, so equal cards still give distinct subsets.
    """
    if size < 0:
        return []
    return [list(combo) for combo in _combinations(cards, size)]


def total_value(cards: Sequence[Card]) -> int:
    return sum(c.value for c in cards)


def is_run(cards: Sequence[Card]) -> bool:
    """Distinct ranks with no gap, at least three cards."""
    if len(cards) < 3:
        return False
    orders = [c.order for c in cards]
    return len(set(orders)) == len(cards) and max(orders) - min(orders) + 1 == len(cards)


# ---------- Pegging ----------

def exactly_equals(pile: Sequence[Card], n: int = FIFTEEN) -> Dict[str, Any]:
    """2 points when the pile's running count is exactly n."""
    score = 2 if total_value(pile) == n else 0
    return {"score": score, "desc": f"{n} count" if score else ""}


def pair_triple_quad(pile: Sequence[Card]) -> Dict[str, Any]:
    """
    Score the same-rank group that ends at the most recent card.
    Looks at up to the last four plays, shrinking the window from the oldest end.
    """
    same = 0
    window = list(reversed(pile[-4:]))
    while same == 0 and window:
        if all(c.rank == window[0].rank for c in window):
            same = len(window)
        window.pop()

    score = GROUP_POINTS.get(same, 0)
    if not score:
        return {"score": 0, "desc": ""}
    return {"score": score, "desc": f"{GROUP_NAMES[same]} ({pile[-1].rank.value})"}


def run_during_play(pile: Sequence[Card]) -> Dict[str, Any]:
    """Longest run formed by the most recent plays, in any order."""
    working = list(pile)
    while len(working) >= 3:
        if is_run(working):
            return {"score": len(working), "desc": f"{len(working)}-card run"}
        working.pop(0)
    return {"score": 0, "desc": ""}


# ---------- Show ----------

def count_combinations_equal_to(cards: Sequence[Card], n: int = FIFTEEN) -> Dict[str, Any]:
    """2 points for every distinct subset whose values add up to n."""
    count = 0
    for size in range(1, len(cards) + 1):
        for combo in combinations(cards, size):
            if total_value(combo) == n:
                count += 1
    return {
        "score": count * 2,
        "count": count,
        "desc": f"{count} unique {n}-counts" if count else "",
    }


def enumerate_runs(cards: Sequence[Card]) -> List[List[Card]]:
    """
    Maximal runs in a show hand.
    A run contained in a longer run is dropped, but two runs that differ
    only by a duplicated rank are both kept (double run).
    """
    runs = []
    for size in range(3, len(cards) + 1):
        for combo in combinations(range(len(cards)), size):
            if is_run([cards[i] for i in combo]):
                runs.append(frozenset(combo))

    maximal = [r for r in runs if not any(r < other for other in runs)]
    return [[cards[i] for i in sorted(r)] for r in maximal]


def runs_in_hand(cards: Sequence[Card]) -> Dict[str, Any]:
    runs = enumerate_runs(cards)
    return {
        "score": sum(len(r) for r in runs),
        "runs": runs,
        "desc": " ".join(f"{len(r)}-card run" for r in runs),
    }


def count_pairs(cards: Sequence[Card]) -> Dict[str, Any]:
    """Pairs by rank tally; order of the cards does not matter here."""
    counts = Counter(c.rank for c in cards)
    score = 0
    parts = []
    for rank, n in counts.items():
        if n in GROUP_POINTS:
            score += GROUP_POINTS[n]
            parts.append(f"{GROUP_NAMES[n]} ({rank.value})")
    return {"score": score, "desc": ", ".join(parts)}


def score_show(hand: Sequence[Card], starter: Card) -> Dict[str, Any]:
    """Score a 4-card hand or crib together with the starter."""
    cards = list(hand) + [starter]
    fifteens = count_combinations_equal_to(cards, FIFTEEN)
    runs = runs_in_hand(cards)
    pairs = count_pairs(cards)
    return {
        "fifteens": fifteens["score"],
        "runs": runs["score"],
        "pairs": pairs["score"],
        "total": fifteens["score"] + runs["score"] + pairs["score"],
        "desc": "; ".join(d for d in (fifteens["desc"], runs["desc"], pairs["desc"]) if d),
    }
