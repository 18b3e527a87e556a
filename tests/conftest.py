"""Pytest configuration and fixtures."""

import random

import pytest

from teen_patti.agents.bot_policy import BotDecision, BotPolicy
from teen_patti.engine.cards import parse_cards
from teen_patti.engine.game_state import ActionType, TableState
from teen_patti.engine.hand_manager import HandManager


class ScriptedPolicy(BotPolicy):
    """Bot policy that replays a fixed list of actions, then packs."""

    def __init__(self, actions):
        super().__init__(random.Random(0))
        self.actions = list(actions)
        self.calls = []

    def decide(self, seat, pot, boot_amount):
        self.calls.append(seat.name)
        action = self.actions.pop(0) if self.actions else ActionType.PACK
        amount = {
            ActionType.PACK: 0,
            ActionType.BLIND: boot_amount,
            ActionType.CHAAL: boot_amount * 2,
        }.get(action, 0)
        return BotDecision(action, amount)


@pytest.fixture
def table():
    """Standard table: You (10,000), Raj and Priya (5,000 each), boot 100."""
    return TableState.create_default(boot_amount=100, human_coins=10_000, bot_coins=5_000)


@pytest.fixture
def make_manager(table):
    """Factory for a HandManager with scripted bots and no turn delay."""

    def _make(bot_actions=(), seed=1, commentator=None):
        return HandManager(
            state=table,
            rng=random.Random(seed),
            policy=ScriptedPolicy(bot_actions),
            commentator=commentator,
            bot_turn_delay=0,
        )

    return _make


@pytest.fixture
def deal(table):
    """Overwrite dealt hands, e.g. deal("Ah Ad Ac", "2s 3d 9c", "Kh Qh Jh")."""

    def _deal(*hands):
        for seat, cards in zip(table.seats, hands):
            seat.hand = parse_cards(cards)

    return _deal
