import unittest
from collections import deque

from towers_of_hanoi.core import Game, GameState, MAX_DISKS, MIN_DISKS, MoveIntent, minimal_moves
from towers_of_hanoi.solver import moves_remaining, next_hint, optimal_sequence


def _triples(seq):
    return [(m.source, m.target, m.disk) for m in seq]


def _neighbours(pegs):
    for s in range(3):
        if not pegs[s]:
            continue
        for t in range(3):
            if t != s and (not pegs[t] or pegs[t][-1] > pegs[s][-1]):
                nxt = list(pegs)
                nxt[s] = pegs[s][:-1]
                nxt[t] = pegs[t] + (pegs[s][-1],)
                yield tuple(nxt)


def _distances_to_goal(n):
    # moves are reversible, so a search outward from the goal gives every distance
    goal = ((), (), tuple(range(n, 0, -1)))
    dist = {goal: 0}
    queue = deque([goal])
    while queue:
        cur = queue.popleft()
        for nxt in _neighbours(cur):
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                queue.append(nxt)
    return dist


class TestOptimalSequence(unittest.TestCase):
    def test_minimal_moves(self):
        self.assertEqual([minimal_moves(n) for n in range(1, 6)], [1, 3, 7, 15, 31])

    def test_one_disk(self):
        self.assertEqual(_triples(optimal_sequence(GameState.new(1))), [(0, 2, 1)])

    def test_two_disks(self):
        self.assertEqual(
            _triples(optimal_sequence(GameState.new(2))),
            [(0, 1, 1), (0, 2, 2), (1, 2, 1)],
        )

    def test_three_disks_textbook_order(self):
        self.assertEqual(
            _triples(optimal_sequence(GameState.new(3))),
            [(0, 2, 1), (0, 1, 2), (2, 1, 1), (0, 2, 3), (1, 0, 1), (1, 2, 2), (0, 2, 1)],
        )

    def test_every_supported_size_is_optimal_and_legal(self):
        for n in range(MIN_DISKS, MAX_DISKS + 1):
            g = Game(GameState.new(n))
            seq = optimal_sequence(g.state)
            self.assertEqual(len(seq), minimal_moves(n))
            for m in seq:
                res = g.execute(m.source, m.target)
                self.assertTrue(res.ok, res.rejection)
                self.assertEqual(res.value.disk, m.disk)
            self.assertTrue(g.state.complete)

    def test_optimal_from_every_reachable_position(self):
        for n in range(1, 6):
            dist = _distances_to_goal(n)
            self.assertEqual(len(dist), 3 ** n)
            for pegs, d in dist.items():
                st = GameState.from_pegs([list(p) for p in pegs])
                seq = optimal_sequence(st)
                self.assertEqual(len(seq), d, pegs)
                self.assertEqual(moves_remaining(st), d, pegs)
                g = Game(st)
                self.assertTrue(g.validate_sequence(seq).ok, pegs)

    def test_resumes_from_mid_game(self):
        st = GameState.from_pegs([[3, 2], [1], []])
        seq = optimal_sequence(st)
        self.assertEqual(
            _triples(seq),
            [(1, 2, 1), (0, 1, 2), (2, 1, 1), (0, 2, 3), (1, 0, 1), (1, 2, 2), (0, 2, 1)],
        )
        g = Game(st)
        self.assertTrue(g.validate_sequence(seq).ok)

    def test_resumes_after_optimal_prefix(self):
        g = Game(GameState.new(4))
        full = optimal_sequence(g.state)
        for m in full[:6]:
            g.execute(m.source, m.target)
        self.assertEqual(optimal_sequence(g.state), full[6:])

    def test_largest_disk_already_home(self):
        st = GameState.from_pegs([[1], [2], [3]])
        self.assertEqual(_triples(optimal_sequence(st)), [(1, 2, 2), (0, 2, 1)])

    def test_solved_position_needs_nothing(self):
        st = GameState.from_pegs([[], [], [3, 2, 1]])
        self.assertEqual(optimal_sequence(st), [])
        self.assertIsNone(next_hint(st))
        self.assertEqual(moves_remaining(st), 0)

    def test_does_not_mutate_input(self):
        st = GameState.from_pegs([[3, 2], [1], []])
        before = st.clone()
        optimal_sequence(st)
        self.assertEqual(st, before)

    def test_accepts_plain_peg_lists(self):
        self.assertEqual(len(optimal_sequence([[2, 1], [], []])), 3)
        self.assertEqual(optimal_sequence([[2, 1], [], []], goal=1)[-1], MoveIntent(2, 1, 1))


class TestHints(unittest.TestCase):
    def test_next_hint_is_first_optimal_move(self):
        self.assertEqual(next_hint(GameState.new(3)), MoveIntent(0, 2, 1))
        self.assertEqual(next_hint(GameState.new(4)), MoveIntent(0, 1, 1))

    def test_moves_remaining_matches_sequence_length(self):
        positions = [
            [[3, 2, 1], [], []],
            [[3, 2], [1], []],
            [[3], [2], [1]],
            [[1], [3, 2], []],
            [[], [4, 1], [3, 2]],
            [[5, 4, 3, 2, 1], [], []],
        ]
        for pegs in positions:
            st = GameState.from_pegs(pegs)
            self.assertEqual(moves_remaining(st), len(optimal_sequence(st)), pegs)


if __name__ == "__main__":
    unittest.main()
