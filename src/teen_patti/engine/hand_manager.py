"""Betting state machine for a single Teen Patti table."""

import asyncio
import random
from dataclasses import dataclass, replace

from teen_patti.agents.bot_policy import BotDecision, BotPolicy
from teen_patti.agents.commentary import CommentaryService
from teen_patti.agents.prompts import ERROR_FALLBACK
from teen_patti.api.schemas import TableSnapshot
from teen_patti.config import settings
from teen_patti.engine.cards import CARDS_PER_HAND, create_deck, shuffle_deck
from teen_patti.engine.evaluator import get_rank_label, pick_winner
from teen_patti.engine.game_state import ActionResult, ActionType, GameStage, TableState, can_see
from teen_patti.observability import get_logger

logger = get_logger(__name__)

WELCOME_MESSAGE = "Namaste! Welcome to Gothahula Teen Patti. I'm your host for tonight."
DEAL_MESSAGE = "The cards have been dealt. Luck is in the air!"
PACK_MESSAGE = "I'm packing this one."


@dataclass
class HandResult:
    """Result of a completed hand."""
    hand_number: int
    pot_size: int
    winner_index: int
    winner_name: str
    went_to_showdown: bool
    winning_rank: str | None = None


class HandManager:
    """
    Owns a TableState and applies every transition to it.

    Stage flow: Lobby -> Dealing -> Betting -> (Showdown) -> GameOver, and
    GameOver -> Dealing -> Betting for each following hand.
    """

    def __init__(
        self,
        state: TableState | None = None,
        rng: random.Random | None = None,
        policy: BotPolicy | None = None,
        commentator: CommentaryService | None = None,
        bot_turn_delay: float | None = None,
    ):
        """
        Initialize hand manager.

        Args:
            state: Table to run (default: the standard three-seat table)
            rng: Random source shared by shuffling and the default bot policy
            policy: Decision policy for bot seats
            commentator: Optional dealer commentary service
            bot_turn_delay: Seconds to wait before bots act after the human
        """
        self.state = state or TableState.create_default()
        self.rng = rng or random.Random()
        self.policy = policy or BotPolicy(self.rng)
        self.commentator = commentator
        self.bot_turn_delay = settings.bot_turn_delay if bot_turn_delay is None else bot_turn_delay

        self.last_result: HandResult | None = None
        self._commentary_tasks: set[asyncio.Task] = set()

        self.state.add_message("ai", WELCOME_MESSAGE)

    # --- Hand lifecycle ---

    def start_new_hand(self) -> bool:
        """
        Shuffle, collect boot from every seat and deal three cards each.

        Seats that cannot cover the boot sit the hand out.

        Returns:
            True if a hand was started; False if one is already running or
            fewer than two seats can play
        """
        state = self.state
        boot = state.boot_amount

        if state.stage in (GameStage.DEALING, GameStage.BETTING, GameStage.SHOWDOWN):
            logger.debug("Hand already in progress", extra={"extra_fields": {"stage": state.stage.value}})
            return False

        playing = [i for i, seat in enumerate(state.seats) if seat.can_afford(boot)]
        if len(playing) < 2:
            logger.warning(
                "Not enough funded seats to start a hand",
                extra={"extra_fields": {"funded": len(playing), "boot": boot}},
            )
            return False

        state.stage = GameStage.DEALING
        state.hand_number += 1
        state.winner_index = None
        state.pot = 0
        self.last_result = None

        deck = shuffle_deck(create_deck(), self.rng)
        cursor = 0
        for index, seat in enumerate(state.seats):
            seat.reset_for_hand()
            if index not in playing:
                seat.is_packed = True
                state.add_message("system", f"{seat.name} sits this hand out.")
                continue
            seat.hand = deck[cursor:cursor + CARDS_PER_HAND]
            cursor += CARDS_PER_HAND
            state.commit_bet(seat, boot)

        # Remaining cards are unused in this variant
        state.deck = deck[cursor:]
        state.turn_index = TableState.HUMAN_SEAT
        if state.seats[state.turn_index].is_packed:
            state.turn_index = state.next_active_index(state.turn_index)
        state.stage = GameStage.BETTING

        state.add_message("ai", DEAL_MESSAGE)
        logger.info(
            "Hand started",
            extra={"extra_fields": {"hand": state.hand_number, "pot": state.pot}},
        )
        return True

    def see(self, seat_index: int = TableState.HUMAN_SEAT) -> bool:
        """
        Look at a seat's cards. No cost and no turn consumed.

        Returns:
            True if the seat is now seen, False if the request was ignored
        """
        seat = self.state.seats[seat_index]
        if not can_see(self.state.stage) or seat.is_packed:
            return False
        seat.is_seen = True
        return True

    def apply_action(self, seat_index: int, action: ActionType | str) -> ActionResult:
        """
        Validate and apply one turn action for a seat.

        Args:
            seat_index: Acting seat
            action: pack, blind, chaal or show

        Returns:
            ActionResult; failed results leave the table untouched
        """
        state = self.state
        seat = state.seats[seat_index]

        try:
            action = ActionType(action)
        except ValueError:
            return ActionResult(False, str(action), seat_index, error=f"Unknown action: {action}")

        if not action.is_valid_for(state.stage):
            logger.debug(
                "Ignoring action outside betting",
                extra={"extra_fields": {"action": action.value, "stage": state.stage.value}},
            )
            return ActionResult(False, action.value, seat_index, error=f"Not accepted during {state.stage.value}")

        if not seat.is_active:
            return ActionResult(False, action.value, seat_index, error=f"{seat.name} is not in the hand")

        if seat_index != state.turn_index:
            return ActionResult(False, action.value, seat_index, error=f"Not {seat.name}'s turn")

        if action == ActionType.SHOW:
            self._resolve_hand(showdown=True)
            return ActionResult(True, action.value, seat_index, hand_over=True)

        if action == ActionType.PACK:
            seat.is_packed = True
            amount = 0
        else:
            # Chaal forces a look; a seen seat can no longer bet blind
            if action == ActionType.BLIND and seat.is_seen:
                action = ActionType.CHAAL
            amount = state.chaal_amount if action == ActionType.CHAAL else state.boot_amount

            if not seat.can_afford(amount):
                return ActionResult(
                    False, action.value, seat_index, amount=amount,
                    error=f"{seat.name} has {seat.coins} coins, needs {amount}",
                )
            if action == ActionType.CHAAL:
                seat.is_seen = True
            state.commit_bet(seat, amount)

        logger.debug(
            "Action applied",
            extra={"extra_fields": {
                "hand": state.hand_number,
                "seat": seat.name,
                "action": action.value,
                "amount": amount,
                "pot": state.pot,
            }},
        )

        hand_over = self._check_single_survivor()
        if not hand_over:
            next_index = state.next_active_index(seat_index)
            if next_index is not None:
                state.turn_index = next_index

        return ActionResult(True, action.value, seat_index, amount=amount, hand_over=hand_over)

    def play_bot_turns(self) -> list[ActionResult]:
        """
        Let every unpacked bot after the current turn act once, in seat order.

        If the human has packed, rounds continue among the bots until the
        hand ends.

        Returns:
            Results of the bot actions taken
        """
        state = self.state
        results = []

        while state.stage == GameStage.BETTING:
            index = state.turn_index
            seat = state.seats[index]
            if not seat.is_active:
                next_index = state.next_active_index(index)
                if next_index is None:
                    break
                state.turn_index = next_index
                continue
            if not seat.is_bot:
                break

            decision = self.policy.decide(seat, state.pot, state.boot_amount)
            result = self._apply_bot_decision(index, decision)
            results.append(result)

        return results

    def _apply_bot_decision(self, seat_index: int, decision: BotDecision) -> ActionResult:
        seat = self.state.seats[seat_index]
        result = self.apply_action(seat_index, decision.action)
        if not result.success:
            # Can't cover the bet: the only affordable move is to pack
            logger.info(
                "Bot cannot afford its bet, packing",
                extra={"extra_fields": {"seat": seat.name, "coins": seat.coins}},
            )
            result = self.apply_action(seat_index, ActionType.PACK)

        verb = {
            ActionType.PACK.value: "packs",
            ActionType.BLIND.value: f"plays blind ({result.amount})",
            ActionType.CHAAL.value: f"plays chaal ({result.amount})",
        }.get(result.action_type, result.action_type)
        self.state.add_message("system", f"{seat.name} {verb}.")
        return result

    # --- Human entry point ---

    async def handle_action(self, action: ActionType | str) -> ActionResult:
        """
        Apply the human seat's action, then let the bots respond.

        Commentary is requested in the background and never delays the bots.
        """
        state = self.state
        if state.stage != GameStage.BETTING:
            return ActionResult(
                False, str(getattr(action, "value", action)), TableState.HUMAN_SEAT,
                error="No hand in progress",
            )

        result = self.apply_action(TableState.HUMAN_SEAT, action)
        if not result.success:
            return result

        action = ActionType(result.action_type)
        if action == ActionType.PACK:
            state.add_message("player", PACK_MESSAGE)

        if action == ActionType.SHOW or result.hand_over:
            return result

        self.request_commentary(TableState.HUMAN_SEAT, action.past_tense)

        if self.bot_turn_delay > 0:
            await asyncio.sleep(self.bot_turn_delay)
        self.play_bot_turns()
        return result

    # --- Resolution ---

    def _check_single_survivor(self) -> bool:
        active = self.state.active_indices()
        if len(active) == 1:
            self._resolve_hand(showdown=False)
            return True
        return False

    def _resolve_hand(self, showdown: bool) -> None:
        """Pick the winner, pay out the pot and close the hand."""
        state = self.state
        active = state.active_indices()
        if not active:
            return

        winning_rank = None
        if showdown and len(active) > 1:
            state.stage = GameStage.SHOWDOWN
            best = pick_winner([state.seats[i].hand for i in active])
            winner_index = active[best]
            winning_rank = state.seats[winner_index].evaluate().rank.value
        else:
            winner_index = active[0]

        winner = state.seats[winner_index]
        pot = state.pot
        winner.coins += pot
        state.pot = 0
        state.winner_index = winner_index
        state.stage = GameStage.GAME_OVER

        if winner_index == TableState.HUMAN_SEAT:
            label = get_rank_label(winner.evaluate().rank)
            state.add_message("ai", f"Congratulations! You won {pot} coins with a {label}!")
        else:
            state.add_message("ai", f"{winner.name} takes the pot of {pot} coins.")

        self.last_result = HandResult(
            hand_number=state.hand_number,
            pot_size=pot,
            winner_index=winner_index,
            winner_name=winner.name,
            went_to_showdown=showdown and len(active) > 1,
            winning_rank=winning_rank,
        )
        logger.info(
            "Hand complete",
            extra={"extra_fields": {
                "hand": state.hand_number,
                "winner": winner.name,
                "pot": pot,
                "showdown": self.last_result.went_to_showdown,
            }},
        )

    # --- Commentary ---

    def request_commentary(self, seat_index: int, last_action: str) -> asyncio.Task | None:
        """
        Fire a commentary request without waiting for it.

        The reply lands in the message log whenever it arrives, even if the
        table has moved on. A failing service yields the fixed fallback line.
        """
        if self.commentator is None:
            return None

        # Copy so bot turns and payout before the task runs don't leak in
        live = self.state.seats[seat_index]
        seat = replace(live, hand=list(live.hand))
        task = asyncio.create_task(
            self.commentator.generate_commentary(
                self.state.stage, self.state.pot, seat, last_action,
            )
        )
        self._commentary_tasks.add(task)
        task.add_done_callback(self._on_commentary_done)
        return task

    def _on_commentary_done(self, task: asyncio.Task) -> None:
        self._commentary_tasks.discard(task)
        if task.cancelled():
            return
        if task.exception() is not None:
            logger.warning(
                "Commentary task errored",
                extra={"extra_fields": {"error": repr(task.exception())}},
            )
            self.state.add_message("ai", ERROR_FALLBACK)
            return
        text = task.result()
        if text:
            self.state.add_message("ai", text)

    async def drain_commentary(self) -> None:
        """Wait for outstanding commentary requests."""
        if self._commentary_tasks:
            await asyncio.gather(*self._commentary_tasks, return_exceptions=True)

    # --- Presentation ---

    def snapshot(self) -> TableSnapshot:
        """Read-only view of the table for renderers."""
        return TableSnapshot.from_state(self.state)
