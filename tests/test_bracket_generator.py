"""Tests for single elimination bracket generation."""

from __future__ import annotations

import unittest

from pickabracket.bracket.generator import TournamentGenerator, bracket_size
from pickabracket.errors import NoParticipantsError


def ids(count: int) -> list[str]:
    return [f"p{i}" for i in range(1, count + 1)]


class BracketGeneratorTestCase(unittest.TestCase):
    """Test case for TournamentGenerator.build_bracket."""

    def test_bracket_size(self) -> None:
        self.assertEqual(bracket_size(1), 1)
        self.assertEqual(bracket_size(2), 2)
        self.assertEqual(bracket_size(3), 4)
        self.assertEqual(bracket_size(5), 8)
        self.assertEqual(bracket_size(8), 8)
        self.assertEqual(bracket_size(9), 16)

    def test_match_count_and_every_participant_placed_once(self) -> None:
        for count in range(2, 20):
            with self.subTest(count=count):
                size = bracket_size(count)
                self.assertGreaterEqual(size, count)
                self.assertLess(size, 2 * count)

                matches = TournamentGenerator.build_bracket(ids(count))
                self.assertEqual(len(matches), size // 2)
                placed = [
                    slot
                    for m in matches
                    for slot in (m["slot_a"], m["slot_b"])
                    if slot is not None
                ]
                self.assertEqual(sorted(placed), sorted(ids(count)))

    def test_standard_seeded_pairing(self) -> None:
        """Slot i meets slot size-1-i."""
        matches = TournamentGenerator.build_bracket(ids(8))
        pairs = [(m["slot_a"], m["slot_b"]) for m in matches]
        self.assertEqual(
            pairs, [("p1", "p8"), ("p2", "p7"), ("p3", "p6"), ("p4", "p5")]
        )
        self.assertEqual([m["position"] for m in matches], [0, 1, 2, 3])
        self.assertTrue(all(m["round"] == 1 for m in matches))

    def test_byes_auto_advance(self) -> None:
        matches = TournamentGenerator.build_bracket(ids(5))
        self.assertEqual(len(matches), 4)

        bye_matches = [m for m in matches if m["slot_b"] is None]
        self.assertEqual([m["slot_a"] for m in bye_matches], ["p1", "p2", "p3"])
        for match in bye_matches:
            self.assertEqual(match["status"], "completed")
            self.assertEqual(match["winner"], match["slot_a"])

        self.assertEqual(matches[3]["slot_a"], "p4")
        self.assertEqual(matches[3]["slot_b"], "p5")
        self.assertEqual(matches[3]["status"], "scheduled")
        self.assertIsNone(matches[3]["winner"])

    def test_pairing_is_deterministic(self) -> None:
        first = TournamentGenerator.build_bracket(ids(11))
        second = TournamentGenerator.build_bracket(ids(11))
        self.assertEqual(first, second)

    def test_single_participant_produces_no_matches(self) -> None:
        self.assertEqual(TournamentGenerator.build_bracket(["solo"]), [])

    def test_no_participants(self) -> None:
        with self.assertRaises(NoParticipantsError):
            TournamentGenerator.build_bracket([])

    def test_slots(self) -> None:
        self.assertEqual(
            TournamentGenerator.bracket_slots(["a", "b", "c"]), ["a", "b", "c", None]
        )


if __name__ == "__main__":
    unittest.main()
