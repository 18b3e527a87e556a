"""Tests for the table snapshot handed to renderers."""

from teen_patti.api.schemas import TableSnapshot
from teen_patti.engine.game_state import ActionType, GameStage


class TestTableSnapshot:
    """Tests for TableSnapshot.from_state."""

    def test_lobby(self, make_manager):
        """Test the snapshot before any hand is dealt."""
        snapshot = make_manager().snapshot()

        assert snapshot.stage == GameStage.LOBBY
        assert snapshot.pot == 0
        assert snapshot.deck_remaining == 0
        assert snapshot.winner is None
        assert [s.name for s in snapshot.seats] == ["You", "Raj", "Priya"]
        assert all(s.card_count == 0 for s in snapshot.seats)

    def test_betting_hides_cards(self, make_manager):
        """Test that unseen hands are not exposed."""
        manager = make_manager()
        manager.start_new_hand()

        snapshot = manager.snapshot()

        assert snapshot.stage == GameStage.BETTING
        assert snapshot.pot == 300
        assert snapshot.deck_remaining == 43
        assert snapshot.turn_index == 0
        assert all(s.card_count == 3 for s in snapshot.seats)
        assert all(s.hand == [] and s.hand_rank is None for s in snapshot.seats)

    def test_seen_human_sees_own_cards_only(self, make_manager, deal):
        """Test that seeing reveals only the human's cards."""
        manager = make_manager()
        manager.start_new_hand()
        deal("Ah Kh Qh", "2c 7d Jh", "3c 8d 10h")
        manager.see()

        you, raj, priya = manager.snapshot().seats

        assert [c.label for c in you.hand] == ["A♥", "K♥", "Q♥"]
        assert you.hand_rank == "Pure Sequence"
        assert you.hand_score == 50014
        assert raj.hand == []
        assert priya.hand == []

    def test_game_over_reveals_unpacked_hands(self, make_manager, deal):
        """Test that showdown reveals every unpacked hand."""
        manager = make_manager()
        manager.start_new_hand()
        deal("Ah Kh Qh", "2c 7d Jh", "3c 8d 10h")
        manager.apply_action(0, ActionType.BLIND)
        manager.apply_action(1, ActionType.PACK)
        manager.apply_action(2, ActionType.SHOW)

        snapshot = manager.snapshot()
        you, raj, priya = snapshot.seats

        assert snapshot.stage == GameStage.GAME_OVER
        assert snapshot.winner == "player-1"
        assert snapshot.pot == 0
        assert you.hand_rank == "Pure Sequence"
        assert priya.hand_rank == "High Card"
        assert raj.is_packed
        assert raj.hand == []

    def test_messages_capped(self, make_manager):
        """Test that at most ten messages are carried."""
        manager = make_manager()
        for i in range(20):
            manager.state.add_message("system", f"line {i}")

        snapshot = manager.snapshot()

        assert len(snapshot.messages) == 10
        assert snapshot.messages[-1].text == "line 19"

    def test_serializes(self, make_manager):
        """Test JSON serialization of the snapshot."""
        manager = make_manager()
        manager.start_new_hand()

        data = manager.snapshot().model_dump(mode="json")

        assert data["stage"] == "Betting"
        assert data["seats"][1]["coins"] == 4_900
        assert TableSnapshot.model_validate(data).pot == 300
