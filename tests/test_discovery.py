# tests/test_discovery.py
from breadboard_core.board import Board, Point
from breadboard_core.components import Battery, FixedResistor, Switch, Wire
from breadboard_core.simulation import explore, traversal_directions


def place(board, component, start, end):
    return board.place(component, Point(*start), Point(*end))


class TestLoops:

    def test_square_loop_in_placement_direction(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        r = place(board, FixedResistor("R"), (0, 1), (1, 1))
        w1 = place(board, Wire("W1"), (1, 1), (1, 0))
        w2 = place(board, Wire("W2"), (1, 0), (0, 0))

        exploration = explore(board, b)

        assert len(exploration.loops) == 1
        loop = exploration.loops[0]
        assert loop.path == (b, r, w1, w2)
        assert loop.forward == (True, True, True, True)
        assert loop.resistor_count == 1
        assert not loop.is_short
        assert loop.root is b
        assert exploration.touched == (b, r, w1, w2)

    def test_component_sharing_both_pegs_is_traversed_backward(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        r = place(board, FixedResistor("R"), (0, 0), (0, 1))

        loop, = explore(board, b).loops
        assert loop.members() == [(b, True), (r, False)]

    def test_conductor_only_loop_is_a_short(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        place(board, Wire("W"), (0, 0), (0, 1))

        exploration = explore(board, b)
        assert exploration.has_short
        assert exploration.loops[0].resistor_count == 0

    def test_parallel_branches_give_one_loop_each(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        r1 = place(board, FixedResistor("R1"), (0, 1), (0, 0))
        r2 = place(board, FixedResistor("R2"), (0, 1), (0, 0))

        loops = explore(board, b).loops
        assert [loop.path for loop in loops] == [(b, r1), (b, r2)]

    def test_open_switch_is_not_entered(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        r = place(board, FixedResistor("R"), (0, 1), (1, 1))
        w = place(board, Wire("W"), (1, 1), (1, 0))
        place(board, Switch("S"), (1, 0), (0, 0))

        exploration = explore(board, b)
        assert exploration.loops == ()
        assert exploration.touched == (b, r, w)

    def test_closed_switch_conducts(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        place(board, FixedResistor("R"), (0, 1), (1, 1))
        place(board, Wire("W"), (1, 1), (1, 0))
        place(board, Switch("S", closed=True), (1, 0), (0, 0))

        assert len(explore(board, b).loops) == 1

    def test_battery_alone_has_no_loop(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        exploration = explore(board, b)
        assert exploration.loops == ()
        assert exploration.touched == (b,)


class TestTraversalRules:

    def test_short_stops_scanning_the_closing_peg(self):
        board = Board()
        b = place(board, Battery("B"), (1, 1), (1, 2))
        w1 = place(board, Wire("W1"), (1, 2), (2, 2))
        w2 = place(board, Wire("W2"), (2, 2), (2, 1))
        w3 = place(board, Wire("W3"), (2, 1), (1, 1))
        place(board, Wire("Tail"), (1, 1), (0, 1))

        exploration = explore(board, b)
        assert len(exploration.loops) == 1
        assert exploration.touched == (b, w1, w2, w3)

    def test_solvable_loop_keeps_scanning_the_closing_peg(self):
        board = Board()
        b = place(board, Battery("B"), (1, 1), (1, 2))
        place(board, FixedResistor("R"), (1, 2), (2, 2))
        place(board, Wire("W2"), (2, 2), (2, 1))
        place(board, Wire("W3"), (2, 1), (1, 1))
        tail = place(board, Wire("Tail"), (1, 1), (0, 1))

        exploration = explore(board, b)
        assert len(exploration.loops) == 1
        assert tail in exploration.touched

    def test_returning_to_the_battery_end_abandons_the_branch(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        w1 = place(board, Wire("W1"), (0, 1), (1, 1))
        w2 = place(board, Wire("W2"), (1, 1), (0, 1))

        exploration = explore(board, b)
        assert exploration.loops == ()
        assert exploration.touched == (b, w1, w2)

    def test_abandoned_branch_skips_its_remaining_siblings(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        place(board, Wire("W1"), (0, 1), (1, 1))
        place(board, Wire("W2"), (1, 1), (0, 1))
        r = place(board, FixedResistor("R"), (0, 1), (0, 0))

        loops = explore(board, b).loops
        # Only the direct path; W1 -> W2 re-enters the battery's end peg and is dropped.
        assert [loop.path for loop in loops] == [(b, r)]
        assert loops[0].forward == (True, True)

    def test_traversal_directions_chain_from_root_start(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        r = place(board, FixedResistor("R"), (1, 1), (0, 1))
        w = place(board, Wire("W"), (1, 1), (0, 0))
        assert traversal_directions((b, r, w)) == (True, False, True)

    def test_exploration_leaves_the_board_unchanged(self):
        board = Board()
        b = place(board, Battery("B"), (0, 0), (0, 1))
        place(board, Wire("W"), (0, 0), (0, 1))
        before = [list(peg.components) for peg in board.pegs]

        explore(board, b)

        assert [list(peg.components) for peg in board.pegs] == before
        assert board.generation == 0
