"""Randomized decision policy for automated seats."""

import random
from dataclasses import dataclass

from teen_patti.engine.game_state import ActionType, Seat


@dataclass
class BotDecision:
    """An action chosen by a policy, with the coins it commits."""
    action: ActionType
    amount: int = 0


class BotPolicy:
    """
    Memoryless bot: ignores hand strength, pot odds and opponents.

    One uniform draw per turn decides between pack, blind (unseen seats
    only) and chaal.
    """

    PACK_THRESHOLD = 0.15
    BLIND_THRESHOLD = 0.40

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def decide(self, seat: Seat, pot: int, boot_amount: int) -> BotDecision:
        """
        Choose an action for `seat`.

        Args:
            seat: The acting seat
            pot: Current pot (unused by this policy, part of the interface)
            boot_amount: Table boot

        Returns:
            BotDecision with the action and its cost
        """
        # Nothing dealt yet: just play along blind
        if not seat.hand:
            return BotDecision(ActionType.BLIND, boot_amount)

        roll = self.rng.random()
        if roll < self.PACK_THRESHOLD:
            return BotDecision(ActionType.PACK, 0)
        if roll < self.BLIND_THRESHOLD and not seat.is_seen:
            return BotDecision(ActionType.BLIND, boot_amount)
        return BotDecision(ActionType.CHAAL, boot_amount * 2)
