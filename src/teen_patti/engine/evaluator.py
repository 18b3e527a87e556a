"""Three-card hand ranking for Teen Patti."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from teen_patti.engine.cards import CARDS_PER_HAND, Card


class HandRank(str, Enum):
    """Hand categories, highest first."""
    TRAIL = "Trail"
    PURE_SEQUENCE = "Pure Sequence"
    SEQUENCE = "Sequence"
    COLOR = "Color"
    PAIR = "Pair"
    HIGH_CARD = "High Card"


# Category base scores. Bands are 10000 wide so any hand in a higher
# category outranks every hand in a lower one.
CATEGORY_BASE = {
    HandRank.TRAIL: 60_000,
    HandRank.PURE_SEQUENCE: 50_000,
    HandRank.SEQUENCE: 40_000,
    HandRank.COLOR: 30_000,
    HandRank.PAIR: 20_000,
    HandRank.HIGH_CARD: 10_000,
}

RANK_LABELS = {
    HandRank.TRAIL: "Set / Trail",
    HandRank.PURE_SEQUENCE: "Pure Sequence",
    HandRank.SEQUENCE: "Sequence",
    HandRank.COLOR: "Color / Flush",
    HandRank.PAIR: "Pair",
    HandRank.HIGH_CARD: "High Card",
}

WHEEL_VALUES = [2, 3, 14]


@dataclass(frozen=True)
class EvaluationResult:
    """Category and total-order score for a hand."""
    rank: HandRank
    score: int

    @property
    def label(self) -> str:
        return get_rank_label(self.rank)


def evaluate_hand(hand: Sequence[Card]) -> EvaluationResult:
    """
    Classify a 3-card hand and score it.

    Anything other than exactly three cards yields (HIGH_CARD, 0), which
    is what a seat looks like before the deal completes.
    """
    if len(hand) != CARDS_PER_HAND:
        return EvaluationResult(HandRank.HIGH_CARD, 0)

    v0, v1, v2 = sorted(card.value for card in hand)
    suits = {card.suit for card in hand}

    is_trail = v0 == v1 == v2
    is_flush = len(suits) == 1
    is_sequence = (v0 + 1 == v1 and v1 + 1 == v2) or [v0, v1, v2] == WHEEL_VALUES
    is_pair = v0 == v1 or v1 == v2 or v0 == v2

    if is_trail:
        return _result(HandRank.TRAIL, v2)
    if is_sequence and is_flush:
        return _result(HandRank.PURE_SEQUENCE, v2)
    if is_sequence:
        return _result(HandRank.SEQUENCE, v2)
    if is_flush:
        return _result(HandRank.COLOR, v2)
    if is_pair:
        if v0 == v1:
            pair_value = v0
        elif v1 == v2:
            pair_value = v1
        else:
            pair_value = v0
        return _result(HandRank.PAIR, pair_value)
    return _result(HandRank.HIGH_CARD, v2)


def _result(rank: HandRank, tiebreak: int) -> EvaluationResult:
    return EvaluationResult(rank, CATEGORY_BASE[rank] + tiebreak)


def get_rank_label(rank: HandRank | str) -> str:
    """Display label for a hand category; empty string for unknown input."""
    try:
        return RANK_LABELS[HandRank(rank)]
    except ValueError:
        return ""


def pick_winner(hands: Sequence[Sequence[Card]]) -> int | None:
    """
    Index of the strongest hand.

    Ties resolve to the first hand holding the top score, so callers
    should pass hands in seat order.
    """
    best_index = None
    best_score = None
    for index, hand in enumerate(hands):
        score = evaluate_hand(hand).score
        if best_score is None or score > best_score:
            best_index = index
            best_score = score
    return best_index
