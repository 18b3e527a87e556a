"""Teen Patti engine - cards, hand ranking and table state.

The betting state machine lives in `teen_patti.engine.hand_manager`.
"""

from teen_patti.engine.cards import Card, Suit, create_deck, shuffle_deck
from teen_patti.engine.evaluator import EvaluationResult, HandRank, evaluate_hand, get_rank_label
from teen_patti.engine.game_state import ActionType, GameStage, Seat, TableState

__all__ = [
    "Card",
    "Suit",
    "create_deck",
    "shuffle_deck",
    "EvaluationResult",
    "HandRank",
    "evaluate_hand",
    "get_rank_label",
    "ActionType",
    "GameStage",
    "Seat",
    "TableState",
]
