import curses
import os
import sys
import unittest
from unittest.mock import MagicMock, call, patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from snake_input import KeyboardState  # noqa: E402
from snake_logic import Board, Cell, GameState, Key, Snake  # noqa: E402
from snake_shell import (BODY_CHAR, CURSES_KEYMAP, FOOD_CHAR, HEAD_CHAR,  # noqa: E402
                         CursesRenderer, game_loop_shell_curses, read_keys,
                         required_terminal_size)


class FixedRng:
    def integers(self, low, high):
        return low


def make_screen(rows=60, cols=80, keys=()):
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (rows, cols)
    stdscr.getch.side_effect = list(keys)
    return stdscr


class TestCursesRenderer(unittest.TestCase):
    def setUp(self):
        self.board = Board(10, 8)
        self.state = GameState(KeyboardState(), board=self.board, rng=FixedRng())

    def test_required_terminal_size(self):
        self.assertEqual(required_terminal_size(self.board), (11, 12))

    def test_draws_head_body_and_food(self):
        self.state.snake = Snake([(5, 4), (4, 4)])
        stdscr = make_screen()
        self.state.render(CursesRenderer(stdscr, self.board))

        stdscr.erase.assert_called_once()
        stdscr.addstr.assert_any_call(5, 6, HEAD_CHAR)
        stdscr.addstr.assert_any_call(5, 5, BODY_CHAR)
        stdscr.addstr.assert_any_call(1, 1, FOOD_CHAR)
        stdscr.addstr.assert_any_call(10, 2, "Score: 0")

    def test_head_char_resets_every_frame(self):
        stdscr = make_screen()
        renderer = CursesRenderer(stdscr, self.board)
        self.state.render(renderer)
        self.state.render(renderer)
        head_calls = [c for c in stdscr.addstr.call_args_list if c == call(5, 6, HEAD_CHAR)]
        self.assertEqual(len(head_calls), 2)

    def test_game_over_message(self):
        self.state.make_game_over()
        stdscr = make_screen()
        self.state.render(CursesRenderer(stdscr, self.board))
        stdscr.addstr.assert_any_call(5, 1, "Game Over")
        stdscr.addstr.assert_any_call(6, 0, "Press 'R' to restart")

    def test_out_of_board_cells_are_skipped(self):
        stdscr = make_screen()
        renderer = CursesRenderer(stdscr, self.board)
        renderer.draw_cell(Cell(10, 3))
        stdscr.addstr.assert_not_called()

    def test_small_screen_and_curses_errors_do_not_raise(self):
        stdscr = make_screen(rows=3, cols=3)
        stdscr.addstr.side_effect = curses.error
        self.state.render(CursesRenderer(stdscr, self.board))

    def test_borders_fit_the_minimum_terminal_size(self):
        rows, cols = required_terminal_size(self.board)
        stdscr = make_screen(rows=rows, cols=cols)
        CursesRenderer(stdscr, self.board).clear()
        full_row = "#" * cols
        stdscr.addstr.assert_any_call(0, 0, full_row)
        stdscr.addstr.assert_any_call(self.board.height + 1, 0, full_row)
        stdscr.addstr.assert_any_call(1, self.board.width + 1, "#")


class TestShellLoop(unittest.TestCase):
    def test_read_keys_drains_buffer(self):
        keyboard = KeyboardState(CURSES_KEYMAP)
        stdscr = make_screen(keys=[curses.KEY_UP, ord('x'), ord('r'), -1])
        read_keys(stdscr, keyboard)
        self.assertTrue(keyboard.is_pressed(Key.UP))
        self.assertTrue(keyboard.is_just_pressed(Key.RESTART))

    @patch("snake_shell.curses.curs_set")
    def test_terminal_too_small(self, _curs_set):
        state = GameState(KeyboardState(CURSES_KEYMAP), rng=FixedRng())
        stdscr = make_screen(rows=10, cols=10, keys=[ord(' ')])
        self.assertIsNone(game_loop_shell_curses(stdscr, state, state.input))
        stdscr.addstr.assert_any_call(0, 0, "Terminal is too small.")

    @patch("snake_shell.curses.curs_set")
    def test_quit_key_returns_score(self, _curs_set):
        keyboard = KeyboardState(CURSES_KEYMAP)
        state = GameState(keyboard, board=Board(10, 8), rng=FixedRng())
        state.score = 3
        stdscr = make_screen(keys=[-1, -1, ord('q'), -1])
        self.assertEqual(game_loop_shell_curses(stdscr, state, keyboard), 3)
        self.assertEqual(state.frame_counter, 2)

    @patch("snake_shell.curses.curs_set")
    def test_tapped_key_survives_until_the_next_step(self, _curs_set):
        keyboard = KeyboardState(CURSES_KEYMAP)
        state = GameState(keyboard, board=Board(10, 8), rng=FixedRng())
        # Una pulsación de flecha al principio y nada más hasta el paso
        keys = [curses.KEY_UP, -1] + [-1] * (state.speed - 1) + [ord('q'), -1]
        stdscr = make_screen(keys=keys)
        game_loop_shell_curses(stdscr, state, keyboard)
        self.assertEqual(state.snake.head, Cell(5, 3))
        self.assertFalse(keyboard.is_pressed(Key.UP))


if __name__ == '__main__':
    unittest.main()
