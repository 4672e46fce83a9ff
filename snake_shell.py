# snake_shell.py
import curses

from snake_input import KeyboardState
from snake_logic import DEFAULT_BOARD, GameState, Key

# --- Constantes de la Terminal ---
SHELL_FPS_DEFAULT = 60
BORDER_CHAR = "#"
HEAD_CHAR = "S"
BODY_CHAR = "s"
FOOD_CHAR = "*"

# Mapeo de teclas de curses a las teclas de la lógica
CURSES_KEYMAP = {
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    ord('r'): Key.RESTART,
    ord('R'): Key.RESTART,
    ord('q'): Key.QUIT,
    27: Key.QUIT,  # ESC
}


def required_terminal_size(board=DEFAULT_BOARD):
    """(filas, columnas): tablero + 2 bordes, y una fila más para el score."""
    return board.height + 3, board.width + 2


class CursesRenderer:
    """Adaptador de dibujo para la terminal. Una celda = un caracter."""

    def __init__(self, stdscr, board=DEFAULT_BOARD):
        self.stdscr = stdscr
        self.board = board
        self._head_pending = True

    def _put(self, row, col, text):
        rows, cols = self.stdscr.getmaxyx()
        if not (0 <= row < rows and 0 <= col and col + len(text) <= cols):
            return
        try:
            self.stdscr.addstr(row, col, text)
        except curses.error:
            pass

    def clear(self):
        self.stdscr.erase()
        self._head_pending = True

        full_row = BORDER_CHAR * (self.board.width + 2)
        self._put(0, 0, full_row)
        for r_idx in range(1, self.board.height + 1):
            self._put(r_idx, 0, BORDER_CHAR)
            self._put(r_idx, self.board.width + 1, BORDER_CHAR)
        self._put(self.board.height + 1, 0, full_row)

    def draw_cell(self, cell):
        # La primera celda que llega tras clear() es la cabeza
        char = HEAD_CHAR if self._head_pending else BODY_CHAR
        self._head_pending = False
        if self.board.contains(cell):
            self._put(cell.y + 1, cell.x + 1, char)

    def draw_food(self, cell):
        self._put(cell.y + 1, cell.x + 1, FOOD_CHAR)

    def draw_text(self, line, row):
        msg_r = self.board.height // 2 + 1 + row
        msg_c = max(0, (self.board.width + 2 - len(line)) // 2)
        self._put(msg_r, msg_c, line)

    def draw_score(self, text):
        self._put(self.board.height + 2, 2, text)

    def present(self):
        self.stdscr.refresh()


def read_keys(stdscr, keyboard):
    """Vacía el buffer de curses y registra cada tecla en el teclado."""
    while True:
        user_key = stdscr.getch()
        if user_key == -1:
            return
        keyboard.press_native(user_key)


def game_loop_shell_curses(stdscr, game_state, keyboard, fps=SHELL_FPS_DEFAULT):
    curses.curs_set(0)
    stdscr.nodelay(True)
    stdscr.timeout(max(1, 1000 // fps))

    term_rows, term_cols = stdscr.getmaxyx()
    min_req_rows, min_req_cols = required_terminal_size(game_state.board)

    if term_rows < min_req_rows or term_cols < min_req_cols:
        stdscr.clear()
        stdscr.addstr(0, 0, "Terminal is too small.")
        stdscr.addstr(1, 0, f"Required: {min_req_rows} rows, {min_req_cols} cols.")
        stdscr.addstr(2, 0, f"Available: {term_rows} rows, {term_cols} cols.")
        stdscr.addstr(4, 0, "Press any key to exit.")
        stdscr.nodelay(False)
        stdscr.getch()
        return None

    renderer = CursesRenderer(stdscr, game_state.board)
    while True:
        read_keys(stdscr, keyboard)
        if keyboard.is_just_pressed(Key.QUIT):
            return game_state.score

        stepped = game_state.tick()
        keyboard.end_frame()
        # curses no avisa al soltar una tecla: se da por soltada cuando
        # el paso de juego ya la ha leído
        if stepped or game_state.game_over:
            keyboard.release_all()

        game_state.render(renderer)
        renderer.present()


def main_shell():
    keyboard = KeyboardState(CURSES_KEYMAP)
    game_state = GameState(keyboard)

    try:
        final_score = curses.wrapper(game_loop_shell_curses, game_state, keyboard)
    except curses.error as e:
        print(f"Error de Curses: {e}")
        print("Asegúrate de que la terminal es compatible y tiene el tamaño adecuado.")
        return 1

    if final_score is not None:
        print(f"Partida terminada. Puntuación: {final_score}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main_shell())
