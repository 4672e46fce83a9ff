# snake_ui.py
import arcade

from snake_input import KeyboardState
from snake_logic import (GameState, Key, SCREEN_HEIGHT, SCREEN_WIDTH,
                         TILE_SIZE, cell_to_pixel)

# --- Constantes Visuales ---
UI_SCREEN_TITLE = "Snake Extra?"
UI_SCALE_DEFAULT = 2   # La resolución lógica (320x240) se dibuja a 2x
UI_FPS_DEFAULT = 60
UI_FONT_SIZE = 8       # Por unidad de escala
UI_LINE_SPACING = 16   # Píxeles lógicos entre las líneas de Game Over

# --- Colores ---
BACKGROUND_COLOR_UI = (0, 0, 0, 255)
SNAKE_COLOR_UI = (0, 255, 0, 255)
FOOD_COLOR_UI = (244, 12, 0, 23)
TEXT_COLOR_UI = arcade.color.WHITE

# --- Mapeo de teclas de arcade a las teclas de la lógica ---
ARCADE_KEYMAP = {
    arcade.key.LEFT: Key.LEFT,
    arcade.key.RIGHT: Key.RIGHT,
    arcade.key.UP: Key.UP,
    arcade.key.DOWN: Key.DOWN,
    arcade.key.R: Key.RESTART,
    arcade.key.Q: Key.QUIT,
    arcade.key.ESCAPE: Key.QUIT,
}


class ArcadeRenderer:
    """Adaptador de dibujo: convierte celdas en primitivas de arcade."""

    def __init__(self, window: arcade.Window, scale: int = UI_SCALE_DEFAULT):
        self.window = window
        self.scale = scale
        self.tile = TILE_SIZE * scale
        self.height = SCREEN_HEIGHT * scale
        self.width = SCREEN_WIDTH * scale

    def _flip_y(self, y):
        # arcade tiene el origen abajo a la izquierda, la lógica arriba a la izquierda
        return self.height - y

    def clear(self):
        self.window.clear()

    def draw_cell(self, cell):
        px, py = cell_to_pixel(cell, self.tile)
        arcade.draw_lbwh_rectangle_filled(
            px, self._flip_y(py) - self.tile, self.tile, self.tile, SNAKE_COLOR_UI)

    def draw_food(self, cell):
        px, py = cell_to_pixel(cell, self.tile)
        arcade.draw_circle_filled(px, self._flip_y(py), self.tile, FOOD_COLOR_UI)

    def draw_text(self, line, row):
        y = SCREEN_HEIGHT / 2 + row * UI_LINE_SPACING
        arcade.draw_text(line, self.width / 2, self._flip_y(y * self.scale),
                         TEXT_COLOR_UI, font_size=UI_FONT_SIZE * self.scale,
                         anchor_x="center")

    def draw_score(self, text):
        arcade.draw_text(text, 5 * self.scale, 5 * self.scale,
                         TEXT_COLOR_UI, font_size=UI_FONT_SIZE * self.scale)


class SnakeWindow(arcade.Window):
    def __init__(self, game_state: GameState, keyboard: KeyboardState,
                 scale: int = UI_SCALE_DEFAULT, fps: int = UI_FPS_DEFAULT,
                 verbose: bool = True):
        super().__init__(SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale,
                         UI_SCREEN_TITLE, update_rate=1 / fps)
        self.background_color = BACKGROUND_COLOR_UI

        self.game_state = game_state
        self.keyboard = keyboard
        self.renderer = ArcadeRenderer(self, scale)
        self.verbose = verbose

    def on_draw(self):
        self.game_state.render(self.renderer)

    def on_update(self, delta_time: float):
        was_over = self.game_state.game_over
        self.game_state.tick()
        self.keyboard.end_frame()

        if self.verbose and was_over != self.game_state.game_over:
            if self.game_state.game_over:
                print(f"Game Over. Puntuación: {self.game_state.score}")
            else:
                print("Partida reiniciada.")

    def on_key_press(self, key, modifiers):
        if self.keyboard.press_native(key) is Key.QUIT:
            arcade.exit()

    def on_key_release(self, key, modifiers):
        self.keyboard.release_native(key)

    def on_close(self):
        if self.verbose:
            print("Ventana UI cerrada por el usuario.")
        super().on_close()


def main_ui():
    keyboard = KeyboardState(ARCADE_KEYMAP)
    game_state = GameState(keyboard)
    SnakeWindow(game_state, keyboard)
    arcade.run()


if __name__ == "__main__":
    main_ui()
