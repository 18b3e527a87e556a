"""Seat, pot and stage data for a Teen Patti table."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from teen_patti.config import DEFAULT_SEATS, settings
from teen_patti.engine.cards import Card
from teen_patti.engine.evaluator import EvaluationResult, evaluate_hand


class GameStage(str, Enum):
    LOBBY = "Lobby"
    DEALING = "Dealing"
    BETTING = "Betting"
    SHOWDOWN = "Showdown"
    GAME_OVER = "GameOver"


class ActionType(str, Enum):
    """Turn-consuming actions a seat can take."""
    PACK = "pack"
    BLIND = "blind"
    CHAAL = "chaal"
    SHOW = "show"

    def is_valid_for(self, stage: GameStage) -> bool:
        """Every turn action needs an open betting round."""
        return stage == GameStage.BETTING

    @property
    def past_tense(self) -> str:
        """Wording used when describing the action to the dealer."""
        return {
            ActionType.PACK: "folded",
            ActionType.BLIND: "played blind",
            ActionType.CHAAL: "played chaal",
            ActionType.SHOW: "asked for a show",
        }[self]


def can_see(stage: GameStage) -> bool:
    """Looking at one's cards is only meaningful during a betting round."""
    return stage == GameStage.BETTING


MessageRole = Literal["system", "ai", "player"]


@dataclass
class ChatMessage:
    """A line in the table's message log."""
    role: MessageRole
    text: str


@dataclass
class Seat:
    """State of a single seat."""
    id: str
    name: str
    avatar: str = ""
    coins: int = 0
    is_bot: bool = False
    hand: list[Card] = field(default_factory=list)
    is_seen: bool = False
    is_packed: bool = False
    current_bet: int = 0

    @property
    def is_active(self) -> bool:
        """Still contesting the pot."""
        return not self.is_packed and len(self.hand) == 3

    def can_afford(self, amount: int) -> bool:
        return self.coins >= amount

    def evaluate(self) -> EvaluationResult:
        return evaluate_hand(self.hand)

    def reset_for_hand(self) -> None:
        self.hand = []
        self.is_seen = False
        self.is_packed = False
        self.current_bet = 0


@dataclass
class ActionResult:
    """Result of applying an action to the table."""
    success: bool
    action_type: str
    seat_index: int
    amount: int = 0
    hand_over: bool = False
    error: str | None = None


@dataclass
class TableState:
    """Everything the betting state machine reads and mutates."""
    seats: list[Seat]
    boot_amount: int = 100
    stage: GameStage = GameStage.LOBBY
    pot: int = 0
    deck: list[Card] = field(default_factory=list)
    turn_index: int = 0
    winner_index: int | None = None
    messages: list[ChatMessage] = field(default_factory=list)
    message_log_size: int = 10
    hand_number: int = 0

    HUMAN_SEAT = 0

    @classmethod
    def create_default(
        cls,
        boot_amount: int | None = None,
        human_coins: int | None = None,
        bot_coins: int | None = None,
    ) -> "TableState":
        """
        Build the standard three-seat table: the human plus two bots.

        Args:
            boot_amount: Ante per seat (default from settings)
            human_coins: Starting wallet for the human seat (default from settings)
            bot_coins: Starting wallet for each bot (default from settings)
        """
        human_coins = settings.initial_coins if human_coins is None else human_coins
        bot_coins = settings.bot_starting_coins if bot_coins is None else bot_coins

        seats = [
            Seat(
                id=seat_id,
                name=name,
                avatar=f"https://picsum.photos/seed/{seed}/100/100",
                coins=bot_coins if is_bot else human_coins,
                is_bot=is_bot,
            )
            for seat_id, name, seed, is_bot in DEFAULT_SEATS
        ]
        return cls(
            seats=seats,
            boot_amount=settings.boot_amount if boot_amount is None else boot_amount,
            message_log_size=settings.message_log_size,
        )

    @property
    def seat_count(self) -> int:
        return len(self.seats)

    @property
    def human(self) -> Seat:
        return self.seats[self.HUMAN_SEAT]

    @property
    def winner(self) -> Seat | None:
        if self.winner_index is None:
            return None
        return self.seats[self.winner_index]

    @property
    def chaal_amount(self) -> int:
        return self.boot_amount * 2

    def active_indices(self) -> list[int]:
        """Seat indices still in the hand, in seat order."""
        return [i for i, seat in enumerate(self.seats) if seat.is_active]

    def bet_amount_for(self, seat: Seat) -> int:
        """What a continuing bet costs this seat right now."""
        return self.chaal_amount if seat.is_seen else self.boot_amount

    def next_active_index(self, from_index: int) -> int | None:
        """First unpacked seat after `from_index`, wrapping around."""
        for step in range(1, self.seat_count + 1):
            index = (from_index + step) % self.seat_count
            if self.seats[index].is_active:
                return index
        return None

    def add_message(self, role: MessageRole, text: str) -> None:
        """Append to the message log, keeping only the most recent entries."""
        self.messages.append(ChatMessage(role=role, text=text))
        if len(self.messages) > self.message_log_size:
            del self.messages[: len(self.messages) - self.message_log_size]

    def commit_bet(self, seat: Seat, amount: int) -> None:
        """Move coins from a seat's wallet into the pot."""
        seat.coins -= amount
        seat.current_bet += amount
        self.pot += amount

    def total_coins(self) -> int:
        """Wallets plus pot; constant across a hand."""
        return sum(seat.coins for seat in self.seats) + self.pot
