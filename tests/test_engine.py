import unittest

from connectfour.core.bus import EventBus
from connectfour.core.events import EventType
from connectfour.core.types import GamePhase, MoveRejection, Player
from connectfour.game.engine import GameEngine, build_players, start_game


RED = Player.human("red")
BLUE = Player.human("blue")
GREEN = Player.human("green")

# Fills a 6x7 board with strict red/blue alternation and no four in a row.
# Final owner of (row, col) is red iff (row + col // 2) is even.
TIE_SEQUENCE = (
    [2] + [0] * 6 + [2] * 5
    + [3] + [1] * 6 + [3] * 5
    + [6] + [4] * 6 + [5] * 6 + [6] * 5
)

# Red completes the bottom row while blue stacks on top of it.
RED_WINS_HORIZONTAL = [0, 0, 1, 1, 2, 2, 3]


def new_engine(players=(RED, BLUE), **kwargs) -> GameEngine:
    engine = GameEngine(players, **kwargs)
    engine.new_game()
    return engine


class TestEngineSetup(unittest.TestCase):
    def test_initial_state(self):
        engine = new_engine()
        state = engine.state
        self.assertEqual(state.phase, GamePhase.AWAITING_MOVE)
        self.assertEqual(state.current_index, 0)
        self.assertEqual(state.current_player, RED)
        self.assertEqual(state.legal_moves, list(range(7)))
        self.assertEqual(state.turn_number, 1)
        self.assertEqual(engine.board_dimensions, (6, 7))
        self.assertTrue(engine.is_human_turn)
        self.assertFalse(engine.is_computer_turn)

    def test_player_count_limits(self):
        with self.assertRaises(ValueError):
            GameEngine([])
        with self.assertRaises(ValueError):
            GameEngine([RED, BLUE, GREEN, Player.human("pink")])

    def test_duplicate_colors_rejected(self):
        with self.assertRaises(ValueError):
            GameEngine([RED, Player.human("red")])

    def test_board_size_validated(self):
        with self.assertRaises(ValueError):
            GameEngine([RED, BLUE], height=3)

    def test_move_before_new_game(self):
        engine = GameEngine([RED, BLUE])
        self.assertFalse(engine.is_started)
        with self.assertRaises(RuntimeError):
            engine.apply_move(0)


class TestMoves(unittest.TestCase):
    def test_piece_lands_at_bottom(self):
        engine = new_engine()
        result = engine.apply_move(3)
        self.assertTrue(result.accepted)
        self.assertEqual((result.position.row, result.position.col), (5, 3))
        self.assertEqual(engine.get_cell_owner(5, 3), RED)
        result = engine.apply_move(3)
        self.assertEqual(result.position.row, 4)
        self.assertEqual(engine.get_cell_owner(4, 3), BLUE)

    def test_invalid_column(self):
        engine = new_engine()
        for column in (-1, 7, 100):
            result = engine.apply_move(column)
            self.assertFalse(result.accepted)
            self.assertEqual(result.rejection, MoveRejection.INVALID_COLUMN)
        self.assertEqual(engine.current_player, RED)
        self.assertEqual(engine.state.move_history, [])

    def test_full_column_rejected_without_turn_advance(self):
        engine = new_engine()
        for _ in range(6):
            self.assertTrue(engine.apply_move(0).accepted)
        self.assertEqual(engine.current_player, RED)
        before = engine.board.rows

        result = engine.apply_move(0)
        self.assertEqual(result.rejection, MoveRejection.COLUMN_FULL)
        self.assertEqual(engine.current_player, RED)
        self.assertEqual(engine.board.rows, before)
        self.assertNotIn(0, engine.state.legal_moves)

    def test_full_column_stays_full(self):
        engine = new_engine()
        for _ in range(6):
            engine.apply_move(0)
        for column in (1, 2, 1, 2, 3):
            engine.apply_move(column)
            self.assertIsNone(engine.board.find_lowest_empty_row(0))


class TestTurnOrder(unittest.TestCase):
    def test_two_players_alternate(self):
        engine = new_engine()
        expected = [RED, BLUE] * 3
        for column, player in zip([0, 1, 2, 0, 1, 2], expected):
            self.assertEqual(engine.current_player, player)
            engine.apply_move(column)
        self.assertEqual([m.player for m in engine.state.move_history], expected)

    def test_three_players_cycle(self):
        engine = new_engine(players=(RED, BLUE, GREEN))
        indices = []
        for column in [0, 1, 2, 3, 4, 5, 6]:
            indices.append(engine.state.current_index)
            engine.apply_move(column)
        self.assertEqual(indices, [0, 1, 2, 0, 1, 2, 0])

    def test_single_human_keeps_the_turn(self):
        engine = new_engine(players=(RED,))
        engine.apply_move(0)
        self.assertEqual(engine.current_player, RED)
        self.assertEqual(engine.state.current_index, 0)


class TestTerminalStates(unittest.TestCase):
    def test_horizontal_win(self):
        engine = new_engine()
        for column in RED_WINS_HORIZONTAL[:-1]:
            result = engine.apply_move(column)
            self.assertEqual(result.state.phase, GamePhase.AWAITING_MOVE)

        result = engine.apply_move(RED_WINS_HORIZONTAL[-1])
        state = result.state
        self.assertEqual(state.phase, GamePhase.WON)
        self.assertEqual(state.winner, RED)
        self.assertEqual(state.message, "Player red won!")
        self.assertEqual(len(state.winning_positions), 4)
        self.assertEqual(state.legal_moves, [])
        self.assertTrue(engine.is_game_over)

    def test_moves_after_win_are_ignored(self):
        engine = new_engine()
        for column in RED_WINS_HORIZONTAL:
            engine.apply_move(column)
        before = engine.board.rows

        for column in range(7):
            result = engine.apply_move(column)
            self.assertEqual(result.rejection, MoveRejection.GAME_ALREADY_OVER)
        self.assertEqual(engine.board.rows, before)
        self.assertEqual(engine.state.winner, RED)

    def test_full_board_without_line_is_a_tie(self):
        engine = new_engine()
        self.assertEqual(len(TIE_SEQUENCE), 42)
        for column in TIE_SEQUENCE[:-1]:
            result = engine.apply_move(column)
            self.assertTrue(result.accepted)
            self.assertEqual(result.state.phase, GamePhase.AWAITING_MOVE)

        state = engine.apply_move(TIE_SEQUENCE[-1]).state
        self.assertEqual(state.phase, GamePhase.TIED)
        self.assertIsNone(state.winner)
        self.assertEqual(state.message, "It's a tie!")
        self.assertTrue(engine.board.is_full())

        result = engine.apply_move(0)
        self.assertEqual(result.rejection, MoveRejection.GAME_ALREADY_OVER)

    def test_new_game_clears_board(self):
        engine = new_engine()
        for column in RED_WINS_HORIZONTAL:
            engine.apply_move(column)
        state = engine.new_game()
        self.assertEqual(state.phase, GamePhase.AWAITING_MOVE)
        self.assertEqual(state.move_history, [])
        self.assertIsNone(engine.get_cell_owner(5, 0))


class TestComputerPlayers(unittest.TestCase):
    def test_computer_answers_human_move(self):
        computer = Player.computer("yellow", seed=1)
        engine = new_engine(players=(RED, computer))
        self.assertTrue(engine.is_human_turn)

        result = engine.apply_move(3)
        self.assertTrue(result.accepted)
        self.assertEqual((result.position.row, result.position.col), (5, 3))
        history = result.state.move_history
        self.assertEqual(len(history), 2)
        self.assertEqual(history[1].player, computer)
        self.assertEqual(result.state.current_player, RED)

    def test_computer_moving_first(self):
        computer = Player.computer("yellow", seed=2)
        engine = new_engine(players=(computer, RED))
        state = engine.state
        self.assertEqual(len(state.move_history), 1)
        self.assertEqual(state.move_history[0].player, computer)
        self.assertEqual(state.current_player, RED)

    def test_computer_after_two_humans(self):
        computer = Player.computer("yellow", seed=3)
        engine = new_engine(players=(RED, BLUE, computer))
        engine.apply_move(0)
        self.assertEqual(len(engine.state.move_history), 1)
        engine.apply_move(1)
        history = engine.state.move_history
        self.assertEqual(len(history), 3)
        self.assertEqual(history[2].player, computer)
        self.assertEqual(engine.current_player, RED)

    def test_single_computer_plays_to_completion(self):
        engine = start_game(computer_color="green", seed=4)
        for _ in range(5):
            state = engine.state
            self.assertIn(state.phase, (GamePhase.WON, GamePhase.TIED))
            self.assertGreaterEqual(len(state.move_history), 4)
            if state.phase == GamePhase.WON:
                self.assertEqual(state.winner.color, "green")
            engine.new_game()

    def test_two_computers_finish_the_game(self):
        engine = new_engine(
            players=(Player.computer("orange", seed=5), Player.computer("purple", seed=6))
        )
        self.assertTrue(engine.is_game_over)
        players = [m.player.color for m in engine.state.move_history]
        self.assertEqual(players[:4], ["orange", "purple", "orange", "purple"])


class TestEvents(unittest.TestCase):
    def setUp(self):
        self.bus = EventBus()
        self.events = []
        self.bus.subscribe_all(self.events.append)

    def types(self):
        return [e.type for e in self.events]

    def test_win_events(self):
        engine = new_engine(bus=self.bus)
        for column in RED_WINS_HORIZONTAL:
            engine.apply_move(column)

        types = self.types()
        self.assertEqual(types[0], EventType.GAME_STARTED)
        self.assertEqual(types.count(EventType.MOVE_MADE), 7)
        self.assertEqual(types.count(EventType.TURN_CHANGED), 6)
        self.assertEqual(types[-1], EventType.GAME_WON)
        self.assertEqual(self.events[-1].data["winner"], "red")
        self.assertEqual(self.events[-1].data["message"], "Player red won!")

    def test_rejection_event(self):
        engine = new_engine(bus=self.bus)
        engine.apply_move(9)
        last = self.events[-1]
        self.assertEqual(last.type, EventType.INVALID_MOVE)
        self.assertEqual(last.data, {"column": 9, "reason": "invalid_column"})

    def test_tie_event(self):
        engine = new_engine(bus=self.bus)
        for column in TIE_SEQUENCE:
            engine.apply_move(column)
        self.assertEqual(self.types()[-1], EventType.GAME_DRAW)
        self.assertNotIn(EventType.GAME_WON, self.types())

    def test_computer_moves_are_flagged(self):
        engine = new_engine(players=(RED, Player.computer("yellow", seed=7)), bus=self.bus)
        engine.apply_move(0)
        moves = [e.data for e in self.events if e.type == EventType.MOVE_MADE]
        self.assertEqual([m["computer"] for m in moves], [False, True])

    def test_listeners_see_settled_state(self):
        engine = new_engine(bus=self.bus)
        seen = []
        self.bus.subscribe(
            EventType.MOVE_MADE,
            lambda event: seen.append((engine.state.phase, engine.current_player)),
        )
        for column in RED_WINS_HORIZONTAL:
            engine.apply_move(column)

        # Turn already passed on for ordinary moves
        self.assertEqual(seen[0], (GamePhase.AWAITING_MOVE, BLUE))
        self.assertEqual(seen[1], (GamePhase.AWAITING_MOVE, RED))
        self.assertEqual(seen[-1], (GamePhase.WON, RED))

        types = self.types()
        self.assertEqual(types[-2:], [EventType.MOVE_MADE, EventType.GAME_WON])

    def test_move_from_handler_is_refused(self):
        engine = new_engine(bus=self.bus)
        nested = []
        self.bus.subscribe(EventType.MOVE_MADE, lambda event: nested.append(engine.apply_move(6)))
        for column in RED_WINS_HORIZONTAL:
            engine.apply_move(column)

        reasons = [r.rejection for r in nested]
        self.assertEqual(len(reasons), 7)
        self.assertEqual(reasons[:-1], [MoveRejection.MOVE_IN_PROGRESS] * 6)
        self.assertEqual(reasons[-1], MoveRejection.GAME_ALREADY_OVER)
        self.assertIsNone(engine.get_cell_owner(5, 6))
        self.assertEqual(len(engine.state.move_history), 7)
        self.assertEqual(engine.state.phase, GamePhase.WON)

    def test_moves_accepted_again_after_processing(self):
        engine = new_engine(bus=self.bus)
        engine.apply_move(0)
        self.assertTrue(engine.apply_move(1).accepted)

    def test_move_during_computer_opening_is_refused(self):
        bus = EventBus()
        engine = GameEngine((Player.computer("yellow", seed=9), RED), bus=bus)
        nested = []
        bus.subscribe(EventType.MOVE_MADE, lambda event: nested.append(engine.apply_move(0)))
        engine.new_game()
        self.assertEqual([r.rejection for r in nested], [MoveRejection.MOVE_IN_PROGRESS])
        self.assertEqual(len(engine.state.move_history), 1)
        self.assertTrue(engine.is_human_turn)

    def test_reset(self):
        engine = new_engine(bus=self.bus)
        engine.reset()
        self.assertEqual(self.types()[-1], EventType.GAME_RESET)
        self.assertFalse(engine.is_started)


class TestStartGame(unittest.TestCase):
    def test_blank_colors_drop_slots(self):
        players = build_players("red", "", "green")
        self.assertEqual([p.color for p in players], ["red", "green"])
        self.assertFalse(players[0].is_computer)
        self.assertTrue(players[1].is_computer)

    def test_two_humans_and_computer_order(self):
        engine = start_game("red", "blue", "green", seed=8)
        self.assertEqual([p.color for p in engine.players], ["red", "blue", "green"])
        self.assertTrue(engine.is_human_turn)

    def test_no_players(self):
        with self.assertRaises(ValueError):
            start_game("", "  ", "")

    def test_custom_size(self):
        engine = start_game("red", "blue", height=5, width=9)
        self.assertEqual(engine.board_dimensions, (5, 9))
        self.assertEqual(engine.state.legal_moves, list(range(9)))


if __name__ == "__main__":
    unittest.main()
