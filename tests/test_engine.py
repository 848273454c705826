"""Tests for the round engine."""

import random

import pytest

from party_cards.game.engine import OUT_OF_ANSWERS, OUT_OF_PROMPTS, RoundEngine
from party_cards.models.card import PromptCard
from party_cards.models.game_state import GamePhase
from party_cards.models.pack import ActiveDeck


def make_deck(num_answers: int = 200, num_prompts: int = 50, pick: int = 1) -> ActiveDeck:
    return ActiveDeck(
        answers=tuple(f"answer {i}" for i in range(num_answers)),
        prompts=tuple(PromptCard(text=f"prompt {i} ____.", pick=pick) for i in range(num_prompts)),
    )


def names(count: int) -> list[str]:
    return [f"P{i}" for i in range(count)]


def play_submissions(engine: RoundEngine) -> None:
    """Let every non-judge submit the first `pick` cards of their hand."""
    while engine.phase == GamePhase.ROUND:
        assert engine.state.active_player != engine.state.judge
        pick = engine.state.current_prompt.pick
        engine.submit_card(engine.state.active_player, list(range(pick)))
        assert engine.error is None


@pytest.fixture
def engine():
    return RoundEngine(rng=random.Random(1234))


@pytest.fixture
def started(engine):
    engine.setup(make_deck(), names(4))
    return engine


class TestSetup:
    """Tests for game setup and dealing."""

    @pytest.mark.parametrize("player_count", range(3, 9))
    def test_every_hand_full(self, engine, player_count):
        """Test each player gets 7 cards when the deck is large enough."""
        engine.setup(make_deck(), names(player_count))

        assert len(engine.players) == player_count
        assert all(len(hand) == 7 for hand in engine.hands)
        assert all(p.score == 0 for p in engine.players)

    def test_starts_first_round(self, started):
        """Test setup deals and moves straight into a round."""
        assert started.phase == GamePhase.ROUND
        assert started.state.judge == 0
        assert started.state.active_player == 1
        assert started.state.current_prompt is not None
        assert started.state.submissions == []

    def test_small_deck_short_hands(self, engine):
        """Test dealing stops when answers run out, without duplicates."""
        engine.setup(make_deck(num_answers=10), names(3))

        dealt = [card for hand in engine.hands for card in hand]
        assert len(dealt) == 10
        assert len(set(dealt)) == 10
        assert engine.phase == GamePhase.ROUND
        assert engine.error == OUT_OF_ANSWERS

    def test_player_count_out_of_range(self, engine):
        """Test setup refuses fewer than 3 or more than 8 players."""
        engine.setup(make_deck(), names(2))
        assert engine.error is not None
        assert engine.phase == GamePhase.WAITING
        assert engine.players == []

        engine.setup(make_deck(), names(9))
        assert engine.error is not None
        assert engine.players == []

    def test_blank_name_defaults(self, engine):
        """Test blank names are replaced."""
        engine.setup(make_deck(), ["Ann", "  ", "Cy"])
        assert [p.name for p in engine.players] == ["Ann", "Player", "Cy"]
        assert [p.id for p in engine.players] == ["0", "1", "2"]

    def test_no_prompts_waits(self, engine):
        """Test a deck without prompts leaves the engine waiting."""
        engine.setup(make_deck(num_prompts=0), names(3))

        assert engine.phase == GamePhase.WAITING
        assert engine.error == OUT_OF_PROMPTS
        assert all(len(hand) == 7 for hand in engine.hands)


class TestDrawing:
    """Tests for card drawing."""

    def test_answers_unique_until_exhausted(self, engine):
        """Test no answer card is drawn twice in one game."""
        engine.setup(make_deck(num_answers=30), names(3))

        drawn = [card for hand in engine.hands for card in hand]
        while (card := engine.draw_answer_card()) is not None:
            drawn.append(card)

        assert len(drawn) == 30
        assert len(set(drawn)) == 30
        assert engine.used_answer_indices == set(range(30))

    def test_prompts_unique_until_exhausted(self, engine):
        """Test every prompt is drawn once before exhaustion."""
        engine.setup(make_deck(num_prompts=5), names(3))

        prompts = [engine.state.current_prompt.text]
        while (prompt := engine.draw_prompt_card()) is not None:
            prompts.append(prompt.text)

        assert sorted(prompts) == sorted(f"prompt {i} ____." for i in range(5))

    def test_draw_without_deck(self, engine):
        """Test drawing before setup returns no card."""
        assert engine.draw_answer_card() is None
        assert engine.draw_prompt_card() is None

    def test_used_cards_not_redealt_between_rounds(self, started):
        """Test refills across rounds never repeat a card."""
        seen = [card for hand in started.hands for card in hand]
        for _ in range(3):
            before = {card for hand in started.hands for card in hand}
            play_submissions(started)
            started.pick_winner(0)
            started.start_round()
            after = {card for hand in started.hands for card in hand}
            seen.extend(after - before)

        assert len(seen) == len(set(seen))


class TestSubmitCard:
    """Tests for submitting cards from the hand."""

    def test_selection_order_preserved(self, engine):
        """Test submitted cards follow the order the player picked them."""
        deck = ActiveDeck(
            answers=("A", "B", "C", "D"),
            prompts=(PromptCard(text="____ and ____.", pick=2),),
        )
        engine.setup(deck, names(3))
        engine.hands[1] = ["A", "B", "C", "D"]

        engine.submit_card(1, [2, 0])

        assert engine.error is None
        assert engine.state.submissions[0].cards == ("C", "A")
        assert engine.state.submissions[0].player_index == 1
        # Deck is exhausted, so nothing is refilled
        assert engine.hands[1] == ["B", "D"]

    def test_refills_after_submit(self, started):
        """Test the hand is topped up with new cards after submitting."""
        hand_before = list(started.hands[1])

        started.submit_card(1, [3])

        hand = started.hands[1]
        assert len(hand) == 7
        assert hand[:6] == hand_before[:3] + hand_before[4:]
        assert hand[6] not in hand_before

    def test_empty_selection_rejected(self, started):
        """Test submitting nothing changes nothing."""
        hand_before = list(started.hands[1])

        started.submit_card(1, [])

        assert started.error == "No card selected."
        assert started.hands[1] == hand_before
        assert started.state.submissions == []
        assert started.state.active_player == 1

    def test_pick_count_mismatch_rejected(self, engine):
        """Test a pick-2 prompt needs exactly two cards."""
        engine.setup(make_deck(pick=2), names(3))

        engine.submit_card(1, [0])
        assert engine.error is not None
        assert engine.state.submissions == []

        engine.submit_card(1, [0, 1, 2])
        assert engine.error is not None

        engine.submit_card(1, [0, 1])
        assert engine.error is None
        assert len(engine.state.submissions) == 1

    def test_invalid_indices_rejected(self, started):
        """Test duplicate and out-of-range hand positions are refused."""
        started.submit_card(1, [7])
        assert started.error is not None

        started.submit_card(1, [-1])
        assert started.error is not None
        assert started.state.submissions == []

    def test_judge_cannot_submit(self, started):
        """Test the judge is refused during the round."""
        started.submit_card(0, [0])
        assert started.error is not None
        assert started.state.submissions == []

    def test_unknown_player_rejected(self, started):
        """Test a seat outside the table is refused."""
        started.submit_card(9, [0])
        assert started.error is not None

    def test_double_submit_rejected(self, started):
        """Test a player submits at most once per round."""
        started.submit_card(1, [0])
        started.submit_card(1, [0])
        assert started.error is not None
        assert len(started.state.submissions) == 1

    def test_error_cleared_by_next_success(self, started):
        """Test a successful submission clears the previous error."""
        started.submit_card(1, [])
        assert started.error is not None
        started.submit_card(1, [0])
        assert started.error is None


class TestTurnOrder:
    """Tests for turn advancement."""

    def test_active_never_judge(self, engine):
        """Test the judge never becomes active while the round is open."""
        engine.setup(make_deck(), names(5))
        for _ in range(5):
            play_submissions(engine)
            engine.pick_winner(0)
            if engine.phase == GamePhase.GAME_OVER:
                break
            engine.start_round()
            assert engine.state.active_player == (engine.state.judge + 1) % 5

    def test_skips_judge_when_wrapping(self, engine):
        """Test advancement skips the judge's seat."""
        engine.setup(make_deck(), names(4))
        engine.state.judge = 2
        engine.state.active_player = 1

        engine.advance_to_next_player_or_judge()

        assert engine.state.active_player == 3

    def test_judging_after_all_submit(self, started):
        """Test the phase moves to judging after n-1 submissions."""
        started.submit_card(1, [0])
        started.submit_card(2, [0])
        assert started.phase == GamePhase.ROUND

        started.submit_card(3, [0])

        assert started.phase == GamePhase.JUDGING
        assert started.state.active_player == started.state.judge

    def test_judging_with_mixed_submissions(self, started):
        """Test judging opens after n-1 submissions of either kind."""
        started.submit_card(1, [0])
        started.submit_custom_card(2, ["my own answer"])
        started.submit_card(3, [1])

        assert started.phase == GamePhase.JUDGING
        assert [s.player_index for s in started.state.submissions] == [1, 2, 3]
        assert [s.is_custom for s in started.state.submissions] == [False, True, False]

    def test_out_of_turn_rejected(self, started):
        """Test only the active seat may submit."""
        hand_before = list(started.hands[3])

        started.submit_card(3, [0])

        assert started.error == "Not this player's turn."
        assert started.hands[3] == hand_before
        assert started.state.submissions == []
        assert started.state.active_player == 1

        started.submit_custom_card(2, ["sneaky"])
        assert started.error == "Not this player's turn."
        assert started.players[2].custom_card_uses == 0

    def test_active_seat_always_can_submit(self, started):
        """Test submitting as the active seat always reaches judging."""
        started.submit_card(3, [0])
        started.submit_card(2, [0])

        play_submissions(started)

        assert started.phase == GamePhase.JUDGING
        assert [s.player_index for s in started.state.submissions] == [1, 2, 3]

    def test_submit_after_round_closed(self, started):
        """Test submissions are refused while judging."""
        play_submissions(started)
        started.submit_card(1, [0])
        assert started.error == "Submissions are closed."


class TestCustomCards:
    """Tests for player-written cards."""

    def test_custom_submission(self, started):
        """Test custom cards are submitted without touching the hand."""
        hand_before = list(started.hands[1])

        started.submit_custom_card(1, ["something rude"])

        assert started.error is None
        assert started.players[1].custom_card_uses == 1
        assert started.hands[1] == hand_before
        submission = started.state.submissions[0]
        assert submission.cards == ("something rude",)
        assert submission.is_custom
        assert started.state.active_player == 2

    def test_cap_exceeded_rejected(self, engine):
        """Test going over 20 custom cards is refused without partial credit."""
        engine.setup(make_deck(pick=2), names(3))
        engine.players[1].custom_card_uses = 19

        engine.submit_custom_card(1, ["one", "two"])

        assert engine.error == "Custom card limit exceeded!"
        assert engine.players[1].custom_card_uses == 19
        assert engine.state.submissions == []
        assert engine.state.active_player == 1

    def test_cap_reached_exactly(self, engine):
        """Test the last allowed custom card is accepted."""
        engine.setup(make_deck(pick=1), names(3))
        engine.players[1].custom_card_uses = 19

        engine.submit_custom_card(1, ["one"])

        assert engine.error is None
        assert engine.players[1].custom_card_uses == 20

    def test_short_custom_submission_rejected(self, engine):
        """Test a pick-2 prompt needs two custom cards."""
        engine.setup(make_deck(pick=2), names(3))

        engine.submit_custom_card(1, ["only one"])

        assert engine.error == "Write exactly 2 card(s)."
        assert engine.players[1].custom_card_uses == 0
        assert engine.state.submissions == []

        engine.submit_custom_card(1, ["one", "two"])
        assert engine.error is None
        assert engine.state.submissions[0].cards == ("one", "two")

    def test_blank_text_rejected(self, started):
        """Test empty custom text is refused."""
        started.submit_custom_card(1, ["   "])
        assert started.error is not None
        started.submit_custom_card(1, [])
        assert started.error is not None
        assert started.players[1].custom_card_uses == 0

    def test_more_texts_than_pick_rejected(self, started):
        """Test a pick-1 prompt takes a single custom card."""
        started.submit_custom_card(1, ["one", "two"])
        assert started.error is not None
        assert started.players[1].custom_card_uses == 0


class TestPickWinner:
    """Tests for judging and scoring."""

    def test_winner_scores(self, started):
        """Test the winning submission's player gets a point."""
        play_submissions(started)
        winner = started.state.submissions[1].player_index

        started.pick_winner(1)

        assert started.players[winner].score == 1
        assert started.phase == GamePhase.SHOW_WINNER
        assert started.state.round_winner == winner
        assert started.state.judge == 1

    def test_judge_wraps(self, engine):
        """Test the judge seat wraps around the table."""
        engine.setup(make_deck(), names(3))
        engine.state.judge = 2
        engine.start_round()
        play_submissions(engine)

        engine.pick_winner(0)

        assert engine.state.judge == 0

    def test_invalid_index_rejected(self, started):
        """Test an out-of-range pick changes nothing."""
        play_submissions(started)

        started.pick_winner(3)
        assert started.error == "Winner index out of bounds."
        started.pick_winner(-1)
        assert started.error == "Winner index out of bounds."

        assert started.phase == GamePhase.JUDGING
        assert all(p.score == 0 for p in started.players)

    def test_pick_outside_judging_rejected(self, started):
        """Test picking a winner while players still submit is refused."""
        started.submit_card(1, [0])
        started.pick_winner(0)
        assert started.error is not None
        assert started.phase == GamePhase.ROUND

    def test_game_over_single_winner(self, started):
        """Test reaching the winning score ends the game."""
        play_submissions(started)
        player = started.state.submissions[0].player_index
        started.players[player].score = 4

        started.pick_winner(0)

        assert started.phase == GamePhase.GAME_OVER
        assert started.state.winners == [player]
        assert started.snapshot().winners[0].score == 5

    def test_game_over_tie(self, started):
        """Test every player at the winning score is a winner."""
        play_submissions(started)
        player = started.state.submissions[0].player_index
        other = started.state.submissions[1].player_index
        started.players[player].score = 4
        started.players[other].score = 5

        started.pick_winner(0)

        assert started.phase == GamePhase.GAME_OVER
        assert started.state.winners == sorted([player, other])

    def test_judge_stays_on_game_over(self, started):
        """Test the judge does not rotate when the game ends."""
        play_submissions(started)
        started.players[started.state.submissions[0].player_index].score = 4
        started.pick_winner(0)
        assert started.state.judge == 0

    def test_start_round_refused_after_game_over(self, started):
        """Test a finished game needs play_again to continue."""
        play_submissions(started)
        started.players[started.state.submissions[0].player_index].score = 4
        started.pick_winner(0)

        started.start_round()

        assert started.phase == GamePhase.GAME_OVER
        assert started.error == "Game is over."

    def test_full_game_reaches_game_over(self, started):
        """Test playing rounds until someone wins."""
        for _ in range(50):
            play_submissions(started)
            started.pick_winner(0)
            if started.phase == GamePhase.GAME_OVER:
                break
            started.start_round()

        assert started.phase == GamePhase.GAME_OVER
        assert max(p.score for p in started.players) == 5


class TestExhaustion:
    """Tests for running out of cards."""

    def test_prompt_exhaustion_waits(self, engine):
        """Test the engine waits when no prompt is left."""
        engine.setup(make_deck(num_prompts=1), names(3))
        prompt = engine.state.current_prompt
        play_submissions(engine)
        engine.pick_winner(0)

        engine.start_round()

        assert engine.phase == GamePhase.WAITING
        assert engine.error == OUT_OF_PROMPTS
        assert engine.state.current_prompt == prompt

    def test_answer_exhaustion_short_hand(self, engine):
        """Test refills stop silently when answers run out."""
        engine.setup(make_deck(num_answers=21), names(3))
        assert all(len(hand) == 7 for hand in engine.hands)

        engine.submit_card(1, [0])

        assert len(engine.hands[1]) == 6
        assert engine.error is None
        assert engine.phase == GamePhase.ROUND


class TestLifecycle:
    """Tests for play again, new game and published state."""

    def test_play_again(self, started):
        """Test play again keeps players and resets scores and cards."""
        play_submissions(started)
        started.players[started.state.submissions[0].player_index].score = 4
        started.players[1].custom_card_uses = 3
        started.pick_winner(0)

        started.play_again()

        assert started.phase == GamePhase.ROUND
        assert [p.name for p in started.players] == names(4)
        assert all(p.score == 0 for p in started.players)
        assert all(p.custom_card_uses == 0 for p in started.players)
        assert started.state.judge == 0
        assert started.state.winners == []
        assert len(started.used_answer_indices) == 28
        assert len(started.used_prompt_indices) == 1

    def test_start_round_without_game(self, engine):
        """Test starting a round before setup is refused."""
        snapshots = []
        engine.set_callbacks(on_change=snapshots.append)

        engine.start_round()

        assert engine.error == "No game in progress."
        assert engine.phase == GamePhase.WAITING
        assert snapshots[-1].error == "No game in progress."

    def test_play_again_without_game(self, engine):
        """Test play again needs a previous setup."""
        engine.play_again()
        assert engine.error is not None
        assert engine.phase == GamePhase.WAITING

    def test_new_game(self, started):
        """Test new game clears everything."""
        started.new_game()

        assert started.phase == GamePhase.WAITING
        assert started.players == []
        assert started.hands == []
        assert started.deck is None
        assert started.state.current_prompt is None
        assert started.used_answer_indices == set()
        assert started.new_game_requested

        started.on_new_game_handled()
        assert not started.new_game_requested

    def test_snapshot(self, started):
        """Test the snapshot reflects the acting seat's hand."""
        snapshot = started.snapshot()

        assert snapshot.phase == GamePhase.ROUND
        assert snapshot.current_hand == tuple(started.hands[1])
        assert snapshot.pick == 1
        assert snapshot.prompt_text == started.state.current_prompt.text
        assert len(snapshot.players) == 4

    def test_snapshot_is_a_copy(self, started):
        """Test later mutations don't change an earlier snapshot."""
        snapshot = started.snapshot()
        started.players[1].score = 3
        assert snapshot.players[1].score == 0

    def test_callbacks(self, engine):
        """Test observers are notified of changes and the game end."""
        snapshots = []
        results = []
        engine.set_callbacks(on_change=snapshots.append, on_game_end=results.append)

        engine.setup(make_deck(), names(3))
        assert snapshots[-1].phase == GamePhase.ROUND

        play_submissions(engine)
        assert snapshots[-1].phase == GamePhase.JUDGING

        engine.players[engine.state.submissions[0].player_index].score = 4
        engine.pick_winner(0)
        assert snapshots[-1].phase == GamePhase.GAME_OVER
        assert len(results) == 1
        assert [p.score for p in results[0]] == [5]
