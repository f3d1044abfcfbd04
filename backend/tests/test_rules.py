import unittest

from towers_of_hanoi.core import GameState, MAX_DISKS, Reason, valid_destinations, valid_moves, validate


class TestMoveValidation(unittest.TestCase):
    def test_legal_move_returns_moving_disk(self):
        st = GameState.new(3)
        res = validate(st, 0, 2)
        self.assertTrue(res.ok)
        self.assertEqual(res.value, 1)

    def test_invalid_peg_reports_role(self):
        st = GameState.new(3)
        res = validate(st, 3, 1)
        self.assertEqual(res.reason, Reason.INVALID_PEG)
        self.assertEqual(res.rejection.details["role"], "source")

        res = validate(st, 0, -1)
        self.assertEqual(res.reason, Reason.INVALID_PEG)
        self.assertEqual(res.rejection.details["role"], "target")

    def test_non_integer_pegs_are_invalid(self):
        st = GameState.new(3)
        for bad in ("0", 1.0, None, True):
            self.assertEqual(validate(st, bad, 2).reason, Reason.INVALID_PEG)

    def test_same_peg(self):
        self.assertEqual(validate(GameState.new(3), 1, 1).reason, Reason.SAME_PEG)

    def test_empty_source(self):
        self.assertEqual(validate(GameState.new(3), 1, 2).reason, Reason.EMPTY_SOURCE)

    def test_size_violation_details(self):
        st = GameState.from_pegs([[3, 2], [1], []])
        res = validate(st, 0, 1)
        self.assertEqual(res.reason, Reason.SIZE_VIOLATION)
        self.assertEqual(res.rejection.details["disk"], 2)
        self.assertEqual(res.rejection.details["target_top"], 1)

    def test_rejection_reasons_for_every_size(self):
        for n in range(3, MAX_DISKS + 1):
            st = GameState.new(n)
            self.assertEqual(validate(st, 0, 0).reason, Reason.SAME_PEG)
            self.assertEqual(validate(st, 1, 0).reason, Reason.EMPTY_SOURCE)
            st = GameState.from_pegs([list(range(n, 1, -1)), [1], []])
            self.assertEqual(validate(st, 0, 1).reason, Reason.SIZE_VIOLATION)

    def test_complete_game_rejects_everything_first(self):
        st = GameState.from_pegs([[], [], [2, 1]])
        # even an invalid peg reports completion first
        self.assertEqual(validate(st, 7, 7).reason, Reason.GAME_COMPLETE)
        self.assertEqual(validate(st, 2, 0).reason, Reason.GAME_COMPLETE)

    def test_precedence_invalid_before_same(self):
        self.assertEqual(validate(GameState.new(3), 5, 5).reason, Reason.INVALID_PEG)

    def test_validate_does_not_mutate(self):
        st = GameState.new(3)
        before = st.clone()
        validate(st, 0, 1)
        validate(st, 1, 0)
        self.assertEqual(st, before)

    def test_valid_destinations_and_moves(self):
        st = GameState.new(3)
        self.assertEqual(valid_destinations(st, 0), [1, 2])
        self.assertEqual(valid_destinations(st, 1), [])
        self.assertEqual(valid_moves(st), [(0, 1), (0, 2)])

        mid = GameState.from_pegs([[3, 2], [1], []])
        self.assertEqual(valid_destinations(mid, 0), [2])
        self.assertEqual(valid_destinations(mid, 1), [0, 2])


if __name__ == "__main__":
    unittest.main()
