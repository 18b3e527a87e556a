"""Tests for the dealer commentary client and its wiring into the table."""

import asyncio
from types import SimpleNamespace

import litellm
import pytest

from teen_patti.agents.commentary import DealerCommentator
from teen_patti.agents.prompts import EMPTY_RESPONSE_FALLBACK, ERROR_FALLBACK, build_commentary_prompt
from teen_patti.engine.game_state import ActionType, GameStage, Seat


def completion(text):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


@pytest.fixture
def seat():
    return Seat(id="player-1", name="You", coins=9_800, is_seen=False)


class TestDealerCommentator:
    """Tests for DealerCommentator.generate_commentary."""

    def test_returns_llm_text(self, monkeypatch, seat):
        """Test that the stripped completion text is returned."""
        calls = []

        async def fake_acompletion(**kwargs):
            calls.append(kwargs)
            return completion("  Shabash! Bold move, beta.  ")

        monkeypatch.setattr(litellm, "acompletion", fake_acompletion)
        commentator = DealerCommentator(model="openai/gpt-4o-mini", temperature=0.5)

        text = asyncio.run(commentator.generate_commentary(GameStage.BETTING, 400, seat, "played blind"))

        assert text == "Shabash! Bold move, beta."
        assert calls[0]["model"] == "openai/gpt-4o-mini"
        assert calls[0]["temperature"] == 0.5
        assert "Total Pot: 400 coins" in calls[0]["messages"][1]["content"]
        assert "Player You just played blind." in calls[0]["messages"][1]["content"]

    def test_empty_text_falls_back(self, monkeypatch, seat):
        """Test that an empty completion uses the empty-response line."""
        async def fake_acompletion(**kwargs):
            return completion(None)

        monkeypatch.setattr(litellm, "acompletion", fake_acompletion)

        text = asyncio.run(DealerCommentator().generate_commentary(GameStage.BETTING, 300, seat))

        assert text == EMPTY_RESPONSE_FALLBACK

    def test_error_falls_back(self, monkeypatch, seat):
        """Test that a provider error uses the error line and counts a failure."""
        async def fake_acompletion(**kwargs):
            raise RuntimeError("quota exceeded")

        monkeypatch.setattr(litellm, "acompletion", fake_acompletion)
        commentator = DealerCommentator()

        text = asyncio.run(commentator.generate_commentary(GameStage.BETTING, 300, seat))

        assert text == ERROR_FALLBACK
        assert commentator.get_stats()["failures"] == 1

    def test_timeout_falls_back(self, monkeypatch, seat):
        """Test that a slow provider is cut off by the timeout."""
        async def slow_acompletion(**kwargs):
            await asyncio.sleep(5)
            return completion("too late")

        monkeypatch.setattr(litellm, "acompletion", slow_acompletion)
        commentator = DealerCommentator(timeout=0.05)

        text = asyncio.run(commentator.generate_commentary(GameStage.BETTING, 300, seat))

        assert text == ERROR_FALLBACK


class TestPrompt:
    """Tests for build_commentary_prompt."""

    def test_blind_player(self):
        """Test prompt for a seat still playing blind."""
        prompt = build_commentary_prompt("Betting", 600, "Priya", 4_700, is_seen=False)

        assert "Player Priya just is waiting." in prompt
        assert "They are playing blind" in prompt
        assert "Player Wallet: 4700 coins." in prompt

    def test_seen_player(self):
        """Test prompt for a seat that has seen its cards."""
        prompt = build_commentary_prompt("Betting", 600, "You", 9_700, is_seen=True, last_action="played chaal")

        assert "They have seen their cards" in prompt
        assert "just played chaal" in prompt


class GatedCommentator:
    """Commentary service that only answers once released."""

    def __init__(self):
        self.release = None
        self.requests = []

    async def generate_commentary(self, stage, pot_total, seat, last_action=None):
        self.requests.append((stage, pot_total, seat.name, last_action))
        await self.release.wait()
        return "Arre wah, what a table!"


class TestCommentaryWiring:
    """Commentary runs beside play and never blocks it."""

    def test_bots_do_not_wait_for_commentary(self, make_manager):
        """Test that bots act while the dealer is still thinking."""
        commentator = GatedCommentator()
        manager = make_manager([ActionType.BLIND, ActionType.BLIND], commentator=commentator)
        manager.start_new_hand()

        async def scenario():
            commentator.release = asyncio.Event()
            await manager.handle_action(ActionType.BLIND)
            # Bots have acted while the dealer is still thinking
            bots_done = manager.policy.calls == ["Raj", "Priya"]
            texts_before = [m.text for m in manager.state.messages]

            commentator.release.set()
            await manager.drain_commentary()
            return bots_done, texts_before

        bots_done, texts_before = asyncio.run(scenario())

        assert bots_done
        assert "Arre wah, what a table!" not in texts_before
        assert manager.state.messages[-1].text == "Arre wah, what a table!"
        assert commentator.requests == [(GameStage.BETTING, 400, "You", "played blind")]

    def test_late_commentary_lands_after_hand_ends(self, make_manager):
        """Test that a reply arriving after GameOver is still logged."""
        commentator = GatedCommentator()
        manager = make_manager([ActionType.PACK, ActionType.PACK], commentator=commentator)
        manager.start_new_hand()

        async def scenario():
            commentator.release = asyncio.Event()
            await manager.handle_action(ActionType.CHAAL)
            stage = manager.state.stage
            commentator.release.set()
            await manager.drain_commentary()
            return stage

        assert asyncio.run(scenario()) == GameStage.GAME_OVER
        assert manager.state.winner_index == 0
        assert manager.state.messages[-1].text == "Arre wah, what a table!"

    def test_failing_service_never_breaks_play(self, make_manager):
        """Test that a raising service falls back and play continues."""
        class BrokenCommentator:
            async def generate_commentary(self, stage, pot_total, seat, last_action=None):
                raise ConnectionError("offline")

        manager = make_manager([ActionType.BLIND, ActionType.BLIND], commentator=BrokenCommentator())
        manager.start_new_hand()

        async def scenario():
            await manager.handle_action(ActionType.BLIND)
            await manager.drain_commentary()

        asyncio.run(scenario())

        assert manager.state.pot == 600
        assert manager.state.stage == GameStage.BETTING
        assert manager.state.messages[-1].text == ERROR_FALLBACK

    def test_seat_is_captured_at_request_time(self, make_manager):
        """Test that the dealer sees the wallet as it was when asked, not after payout."""
        seen = []

        class RecordingCommentator:
            async def generate_commentary(self, stage, pot_total, seat, last_action=None):
                seen.append((stage, pot_total, seat.coins, seat.is_seen))
                return "Kya baat hai!"

        manager = make_manager([ActionType.PACK, ActionType.PACK], commentator=RecordingCommentator())
        manager.start_new_hand()

        async def scenario():
            await manager.handle_action(ActionType.CHAAL)
            await manager.drain_commentary()

        asyncio.run(scenario())

        assert manager.state.human.coins == 10_200
        assert seen == [(GameStage.BETTING, 500, 9_700, True)]
