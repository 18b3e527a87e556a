"""Pydantic schemas for the read-only table snapshot."""

from pydantic import BaseModel, Field

from teen_patti.engine.cards import Card
from teen_patti.engine.game_state import GameStage, Seat, TableState


class CardView(BaseModel):
    """A card as shown to a renderer."""

    suit: str
    rank: str
    value: int
    label: str

    @classmethod
    def from_card(cls, card: Card) -> "CardView":
        return cls(suit=card.suit.value, rank=card.rank, value=card.value, label=card.label)


class SeatView(BaseModel):
    """One seat. `hand` is empty unless the cards may be shown."""

    id: str
    name: str
    avatar: str
    coins: int
    is_bot: bool
    is_seen: bool
    is_packed: bool
    current_bet: int
    card_count: int = Field(description="Cards held, 0 or 3")
    hand: list[CardView] = Field(default_factory=list)
    hand_rank: str | None = Field(default=None, description="Category label when the hand is revealed")
    hand_score: int | None = None


class MessageView(BaseModel):
    role: str
    text: str


class TableSnapshot(BaseModel):
    """Everything a renderer needs after a state transition."""

    stage: GameStage
    hand_number: int
    pot: int
    boot_amount: int
    deck_remaining: int
    seats: list[SeatView]
    turn_index: int
    winner: str | None = Field(default=None, description="Winning seat id")
    messages: list[MessageView] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "stage": "Betting",
                "hand_number": 1,
                "pot": 400,
                "boot_amount": 100,
                "deck_remaining": 43,
                "seats": [],
                "turn_index": 1,
                "winner": None,
                "messages": [{"role": "ai", "text": "The cards have been dealt. Luck is in the air!"}],
            }
        }

    @classmethod
    def from_state(cls, state: TableState) -> "TableSnapshot":
        seats = [
            _seat_view(seat, _is_revealed(state, index))
            for index, seat in enumerate(state.seats)
        ]
        winner = state.winner
        return cls(
            stage=state.stage,
            hand_number=state.hand_number,
            pot=state.pot,
            boot_amount=state.boot_amount,
            deck_remaining=len(state.deck),
            seats=seats,
            turn_index=state.turn_index,
            winner=winner.id if winner else None,
            messages=[MessageView(role=m.role, text=m.text) for m in state.messages],
        )


def _is_revealed(state: TableState, index: int) -> bool:
    """Own cards once seen; every unpacked hand once the hand is over."""
    seat = state.seats[index]
    if not seat.hand:
        return False
    if state.stage == GameStage.GAME_OVER and not seat.is_packed:
        return True
    return index == TableState.HUMAN_SEAT and seat.is_seen


def _seat_view(seat: Seat, revealed: bool) -> SeatView:
    view = SeatView(
        id=seat.id,
        name=seat.name,
        avatar=seat.avatar,
        coins=seat.coins,
        is_bot=seat.is_bot,
        is_seen=seat.is_seen,
        is_packed=seat.is_packed,
        current_bet=seat.current_bet,
        card_count=len(seat.hand),
    )
    if revealed:
        evaluation = seat.evaluate()
        view.hand = [CardView.from_card(card) for card in seat.hand]
        view.hand_rank = evaluation.label
        view.hand_score = evaluation.score
    return view
