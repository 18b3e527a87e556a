"""Session runner: plays consecutive hands at one table with the human seat on autopilot."""

import random
from dataclasses import dataclass, field
from typing import Callable

from rich.console import Console
from rich.table import Table

from teen_patti.agents.bot_policy import BotPolicy
from teen_patti.agents.commentary import CommentaryService
from teen_patti.engine.game_state import ActionType, GameStage, TableState
from teen_patti.engine.hand_manager import HandManager, HandResult
from teen_patti.observability import get_logger

logger = get_logger(__name__)


@dataclass
class SessionResult:
    """Result of a multi-hand session."""
    hands_played: int
    seat_names: list[str]
    starting_coins: list[int]
    final_coins: list[int]
    hands_won: list[int]
    showdowns: int
    hand_results: list[HandResult] = field(default_factory=list)

    @property
    def profits(self) -> list[int]:
        return [end - start for start, end in zip(self.starting_coins, self.final_coins)]


class TableSession:
    """
    Runs a number of hands back to back.

    The human seat is driven by its own policy and calls for a show once
    it has survived `show_after_rounds` of its own turns.
    """

    def __init__(
        self,
        num_hands: int = 10,
        seed: int | None = None,
        state: TableState | None = None,
        commentator: CommentaryService | None = None,
        show_after_rounds: int = 3,
        bot_turn_delay: float = 0.0,
        on_hand_complete: Callable[[int, HandResult], None] | None = None,
        console: Console | None = None,
    ):
        """
        Initialize the session.

        Args:
            num_hands: Number of hands to play
            seed: Seed for shuffling and all policies
            state: Table to play at (default: standard three-seat table)
            commentator: Optional dealer commentary service
            show_after_rounds: Human turns before the autopilot calls show
            bot_turn_delay: Delay before bots act, in seconds
            on_hand_complete: Callback after each hand
            console: Rich console for output
        """
        self.num_hands = num_hands
        self.show_after_rounds = show_after_rounds
        self.on_hand_complete = on_hand_complete

        rng = random.Random(seed)
        self.manager = HandManager(
            state=state,
            rng=rng,
            commentator=commentator,
            bot_turn_delay=bot_turn_delay,
        )
        self.autopilot = BotPolicy(random.Random(rng.random()))

        self.starting_coins = [seat.coins for seat in self.manager.state.seats]
        self.hands_won = [0] * self.manager.state.seat_count
        self.hand_results: list[HandResult] = []

        self.console = console or Console()

    async def run(self) -> SessionResult:
        """
        Play the session.

        Returns:
            SessionResult with per-seat totals
        """
        state = self.manager.state

        for hand_num in range(1, self.num_hands + 1):
            if not self.manager.start_new_hand():
                self.console.print(
                    f"\n[bold red]Table broke up after {hand_num - 1} hands![/bold red]"
                )
                break

            await self._play_hand()

            result = self.manager.last_result
            if result is not None:
                self.hand_results.append(result)
                self.hands_won[result.winner_index] += 1
                if self.on_hand_complete:
                    self.on_hand_complete(hand_num, result)

        await self.manager.drain_commentary()

        return SessionResult(
            hands_played=len(self.hand_results),
            seat_names=[seat.name for seat in state.seats],
            starting_coins=self.starting_coins,
            final_coins=[seat.coins for seat in state.seats],
            hands_won=self.hands_won,
            showdowns=sum(1 for r in self.hand_results if r.went_to_showdown),
            hand_results=self.hand_results,
        )

    async def _play_hand(self) -> None:
        state = self.manager.state
        human_turns = 0

        while state.stage == GameStage.BETTING:
            human = state.human
            if not human.is_active:
                # Human sat out or packed; the bots finish the hand
                self.manager.play_bot_turns()
                continue

            if human_turns >= self.show_after_rounds:
                await self.manager.handle_action(ActionType.SHOW)
                break

            decision = self.autopilot.decide(human, state.pot, state.boot_amount)
            result = await self.manager.handle_action(decision.action)
            if not result.success:
                # Out of coins for the bet
                await self.manager.handle_action(ActionType.PACK)
            human_turns += 1

    def print_result(self, result: SessionResult) -> None:
        """Print session result summary."""
        self.console.print("\n[bold]Session Complete![/bold]")

        table = Table(title="Final Results")
        table.add_column("Seat", style="cyan")
        table.add_column("Final Coins", justify="right")
        table.add_column("Profit/Loss", justify="right")
        table.add_column("Hands Won", justify="right")

        for name, coins, profit, won in zip(
            result.seat_names, result.final_coins, result.profits, result.hands_won,
        ):
            color = "green" if profit >= 0 else "red"
            table.add_row(
                name,
                f"{coins:,}",
                f"[{color}]{profit:+,}[/{color}]",
                str(won),
            )

        self.console.print(table)
        self.console.print(f"\nHands played: {result.hands_played}")
        self.console.print(f"Showdowns: {result.showdowns}")
