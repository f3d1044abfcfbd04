import unittest

from towers_of_hanoi.core import Game, GameState
from towers_of_hanoi.position import initial_position, parse_position, position_of


class TestPosition(unittest.TestCase):
    def test_initial_position(self):
        self.assertEqual(initial_position(3), "3,2,1//")
        self.assertEqual(initial_position(1), "1//")
        with self.assertRaises(ValueError):
            initial_position(0)

    def test_parse_mid_game(self):
        st = parse_position("3,2/1/")
        self.assertEqual(st.pegs, [[3, 2], [1], []])
        self.assertEqual(st.disk_count, 3)
        self.assertFalse(st.complete)

    def test_parse_tolerates_spaces(self):
        self.assertEqual(parse_position(" 4, 1 / 3 / 2 ").pegs, [[4, 1], [3], [2]])

    def test_position_of_tracks_moves(self):
        g = Game(parse_position(initial_position(3)))
        g.execute(0, 2)
        self.assertEqual(position_of(g.state), "3,2//1")
        self.assertEqual(position_of(GameState.new(2)), "2,1//")

    def test_malformed_input(self):
        for bad in ("3,2,1/", "3,2,1////", "3,x/1/", "3,-2/1/", "1,2//", "//", "2/2/1"):
            with self.assertRaises(ValueError, msg=bad):
                parse_position(bad)


if __name__ == "__main__":
    unittest.main()
