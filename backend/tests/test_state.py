import unittest

from towers_of_hanoi.core import GameState, MAX_DISKS, MIN_DISKS, Move, START_PEG, check_disk_count, is_solved


class TestGameState(unittest.TestCase):
    def test_new_puts_all_disks_on_first_peg(self):
        st = GameState.new(4)
        self.assertEqual(st.pegs, [[4, 3, 2, 1], [], []])
        self.assertEqual(st.top(START_PEG), 1)
        self.assertEqual(st.move_count, 0)
        self.assertEqual(st.history, [])
        self.assertFalse(st.complete)
        self.assertIsNone(st.selection)
        self.assertEqual(st.optimal_move_count, 15)

    def test_disk_count_bounds(self):
        for n in (MIN_DISKS, MAX_DISKS):
            self.assertEqual(check_disk_count(n), n)
        for bad in (0, MAX_DISKS + 1, -3, "3", 2.0, True, None):
            with self.assertRaisesRegex(ValueError, "between"):
                GameState.new(bad)  # type: ignore[arg-type]

    def test_from_pegs_accepts_mid_game_position(self):
        st = GameState.from_pegs([[3, 2], [1], []])
        self.assertEqual(st.disk_count, 3)
        self.assertEqual(st.move_count, 0)
        self.assertFalse(st.complete)
        self.assertEqual(st.top(0), 2)
        self.assertEqual(st.top(1), 1)
        self.assertIsNone(st.top(2))
        self.assertEqual(st.peg_of(1), 1)

    def test_from_pegs_marks_solved_position_complete(self):
        st = GameState.from_pegs([[], [], [2, 1]])
        self.assertTrue(st.complete)
        self.assertTrue(st.is_won())
        self.assertIsNotNone(st.completed_at)

    def test_from_pegs_rejects_bad_ordering(self):
        with self.assertRaisesRegex(ValueError, "descending"):
            GameState.from_pegs([[1, 2], [], []])

    def test_from_pegs_rejects_duplicates_and_gaps(self):
        with self.assertRaisesRegex(ValueError, "Duplicate"):
            GameState.from_pegs([[2], [2], []])
        with self.assertRaisesRegex(ValueError, "Missing disk"):
            GameState.from_pegs([[3], [1], []])

    def test_from_pegs_rejects_wrong_peg_count(self):
        with self.assertRaisesRegex(ValueError, "Expected 3 pegs"):
            GameState.from_pegs([[2, 1], []])

    def test_validate_checks_history_against_move_count(self):
        st = GameState.new(2)
        st.move_count = 1
        with self.assertRaisesRegex(ValueError, "history"):
            st.validate()
        st.history.append(Move(0, 1, 1, 2))
        with self.assertRaisesRegex(ValueError, "sequence number"):
            st.validate()

    def test_clone_is_independent(self):
        st = GameState.new(3)
        cp = st.clone()
        cp.pegs[0].pop()
        cp.history.append(Move(0, 2, 1, 1))
        self.assertEqual(st.pegs[0], [3, 2, 1])
        self.assertEqual(st.history, [])
        self.assertEqual(GameState.new(3).pegs_snapshot(), ((3, 2, 1), (), ()))

    def test_is_solved(self):
        self.assertTrue(is_solved([[], [], [3, 2, 1]], 3))
        self.assertFalse(is_solved([[], [3, 2, 1], []], 3))
        self.assertFalse(is_solved([[1], [], [3, 2]], 3))

    def test_summary(self):
        s = GameState.new(2).summary()
        self.assertEqual(s["pegs"], [[2, 1], [], []])
        self.assertEqual(s["optimal_move_count"], 3)
        self.assertIsNone(s["selected_disk"])


if __name__ == "__main__":
    unittest.main()
