"""Tests for MatchService."""

from __future__ import annotations

import unittest

from pickabracket.bracket.advancement import RoundAdvancer
from pickabracket.errors import NotFoundError, ValidationError
from pickabracket.match.models import MatchUpdate, ScoreSubmission, normalize_status
from pickabracket.match.services import MatchService
from tests.conftest import FirestoreTestCase


class MatchModelsTestCase(unittest.TestCase):
    def test_games_won_ignores_drawn_games(self) -> None:
        submission = ScoreSubmission(games=[{"a": 11, "b": 9}, {"a": 5, "b": 5}, {"a": 7, "b": 11}])
        submission.validate()
        self.assertEqual(submission.games_won(), (1, 1))

    def test_invalid_games(self) -> None:
        for games in (None, [], [{"a": 11}], [{"a": -1, "b": 3}], [{"a": "11", "b": 3}]):
            with self.subTest(games=games):
                with self.assertRaises(ValueError):
                    ScoreSubmission(games=games).validate()

    def test_normalize_status(self) -> None:
        self.assertEqual(normalize_status("finished"), "completed")
        self.assertEqual(normalize_status("live"), "live")
        self.assertIsNone(normalize_status(None))

    def test_update_tracks_present_keys(self) -> None:
        update = MatchUpdate.from_dict({"score_a": None, "status": "finished"})
        self.assertEqual(update.present, {"score_a", "status"})
        self.assertEqual(update.status, "completed")


class MatchServiceTestCase(FirestoreTestCase):
    """Test case for match scoring and court assignment."""

    def setUp(self) -> None:
        super().setUp()
        self.add_tournament()
        self.add_match("m1", slot_a="alice", slot_b="bob")

    def stored(self, match_id: str = "m1") -> dict:
        return self.mock_db.collection("matches").document(match_id).get().to_dict()

    def test_submit_score(self) -> None:
        match = MatchService.submit_score(
            self.mock_db, "m1", [{"a": 11, "b": 8}, {"a": 6, "b": 11}, {"a": 4, "b": 11}]
        )
        self.assertEqual(match["winner"], "bob")
        stored = self.stored()
        self.assertEqual(stored["status"], "completed")
        self.assertEqual((stored["score_a"], stored["score_b"]), (1, 2))
        self.assertEqual(len(stored["games"]), 3)

    def test_submitted_winner_must_agree_with_games(self) -> None:
        with self.assertLogs(level="WARNING"):
            match = MatchService.submit_score(
                self.mock_db, "m1", [{"a": 11, "b": 2}], winner="bob"
            )
        self.assertEqual(match["winner"], "alice")

    def test_tie_is_rejected(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            MatchService.submit_score(
                self.mock_db, "m1", [{"a": 11, "b": 2}, {"a": 2, "b": 11}]
            )
        self.assertIn("Tie detected", ctx.exception.message)
        self.assertEqual(self.stored()["status"], "scheduled")

    def test_bye_cannot_be_scored(self) -> None:
        self.add_match("bye", slot_a="alice", status="completed", winner="alice")
        with self.assertRaises(ValidationError):
            MatchService.submit_score(self.mock_db, "bye", [{"a": 11, "b": 0}])

    def test_bye_results_cannot_be_patched(self) -> None:
        self.add_match("bye", slot_a="alice", status="completed", winner="alice")
        for payload in ({"score_a": 0, "score_b": 11}, {"status": "scheduled"}, {"winner": "alice"}):
            with self.subTest(payload=payload):
                with self.assertRaises(ValidationError):
                    MatchService.update_match(self.mock_db, "bye", payload)
        stored = self.stored("bye")
        self.assertEqual(stored["status"], "completed")
        self.assertEqual(stored["winner"], "alice")

    def test_bye_keeps_its_winner_through_advancement(self) -> None:
        self.add_match("bye", position=2, slot_a="erin", status="completed", winner="erin")
        self.add_match("m2", position=1, slot_a="carol", slot_b="dave", status="completed", winner="carol")
        self.mock_db.collection("matches").document("m1").update({"status": "completed", "winner": "bob"})
        with self.assertRaises(ValidationError):
            MatchService.update_match(self.mock_db, "bye", {"score_a": 0, "score_b": 11})

        matches = [m for m in self.stored_matches() if m["round"] == 1]
        outcome = RoundAdvancer.plan(matches, ["c1"])
        self.assertEqual(outcome.winners, ["bob", "carol", "erin"])

    def test_advanced_round_is_final(self) -> None:
        self.add_tournament(current_round=2)
        with self.assertRaises(ValidationError) as ctx:
            MatchService.update_match(self.mock_db, "m1", {"winner": "bob", "status": "completed"})
        self.assertIn("already been advanced", ctx.exception.message)
        with self.assertRaises(ValidationError):
            MatchService.submit_score(self.mock_db, "m1", [{"a": 11, "b": 3}])
        self.assertEqual(self.stored()["status"], "scheduled")

        MatchService.assign_court(self.mock_db, "m1", None)

    def test_unknown_match(self) -> None:
        with self.assertRaises(NotFoundError):
            MatchService.submit_score(self.mock_db, "missing", [{"a": 11, "b": 0}])

    def test_update_scores_picks_winner(self) -> None:
        match = MatchService.update_match(
            self.mock_db, "m1", {"score_a": 9, "score_b": 11, "status": "finished"}
        )
        self.assertEqual(match["winner"], "bob")
        self.assertEqual(self.stored()["status"], "completed")

    def test_update_live_status(self) -> None:
        MatchService.update_match(self.mock_db, "m1", {"status": "live"})
        self.assertEqual(self.stored()["status"], "live")

    def test_update_rejects_outsider_winner(self) -> None:
        with self.assertRaises(ValidationError):
            MatchService.update_match(self.mock_db, "m1", {"winner": "carol"})

    def test_completed_needs_winner(self) -> None:
        with self.assertRaises(ValidationError):
            MatchService.update_match(self.mock_db, "m1", {"status": "completed"})

    def test_update_rejects_unknown_status(self) -> None:
        with self.assertRaises(ValidationError):
            MatchService.update_match(self.mock_db, "m1", {"status": "paused"})

    def test_empty_update(self) -> None:
        with self.assertRaises(ValidationError):
            MatchService.update_match(self.mock_db, "m1", {})

    def test_assign_court(self) -> None:
        self.add_court("t1", "c1", "Court 1")
        match = MatchService.assign_court(self.mock_db, "m1", "c1")
        self.assertEqual(match["court_id"], "c1")
        self.assertEqual(self.stored()["court_id"], "c1")

        MatchService.assign_court(self.mock_db, "m1", None)
        self.assertIsNone(self.stored()["court_id"])

    def test_assign_court_of_other_tournament(self) -> None:
        self.add_court("t2", "c9", "Court 9")
        with self.assertRaises(ValidationError):
            MatchService.assign_court(self.mock_db, "m1", "c9")


if __name__ == "__main__":
    unittest.main()
