# snake_input.py
from snake_logic import Key


class KeyboardState:
    """
    Adaptador de entrada que consume GameState.

    Las interfaces (arcade, curses) le pasan los eventos de teclado ya
    traducidos a Key mediante su keymap. is_just_pressed() solo es cierto
    durante el frame en que se pulsó la tecla; end_frame() lo limpia.
    """

    def __init__(self, keymap=None):
        self.keymap = keymap or {}
        self._held = set()
        self._just_pressed = set()

    def translate(self, native_key):
        return self.keymap.get(native_key)

    def press(self, key):
        if key is None:
            return
        if key not in self._held:
            self._just_pressed.add(key)
        self._held.add(key)

    def release(self, key):
        self._held.discard(key)

    def press_native(self, native_key):
        key = self.translate(native_key)
        self.press(key)
        return key

    def release_native(self, native_key):
        key = self.translate(native_key)
        if key is not None:
            self.release(key)
        return key

    def is_pressed(self, key: Key) -> bool:
        return key in self._held

    def is_just_pressed(self, key: Key) -> bool:
        return key in self._just_pressed

    def end_frame(self):
        self._just_pressed.clear()

    def release_all(self):
        # Para interfaces sin evento de soltar tecla (curses)
        self._held.clear()
        self._just_pressed.clear()
