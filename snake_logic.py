# snake_logic.py
from collections import deque
from enum import Enum
from itertools import islice
from typing import NamedTuple, Optional

import numpy as np

# --- Constantes de la Pantalla (resolución lógica, en píxeles) ---
SCREEN_WIDTH = 320
SCREEN_HEIGHT = 240
TILE_SIZE = 5

# --- Constantes del Juego ---
DEFAULT_SPEED = 10  # Frames entre cada paso de juego
MIN_SPEED = 2       # Suelo de la velocidad (más bajo = más rápido)

GAME_OVER_LINES = ("Game Over", "Press 'R' to restart")
SCORE_TEMPLATE = "Score: {}"


class Cell(NamedTuple):
    """Una casilla de la cuadrícula (coordenadas de celda, no de píxel)."""
    x: int
    y: int

    def moved(self, direction):
        return Cell(self.x + direction.dx, self.y + direction.dy)


class Direction(Enum):
    # y crece hacia abajo, como en la pantalla
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self):
        return self.value[0]

    @property
    def dy(self):
        return self.value[1]

    @property
    def axis(self):
        return "x" if self.dx != 0 else "y"


class Key(Enum):
    """Teclas abstractas; cada interfaz traduce sus códigos nativos a estas."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    RESTART = "restart"
    QUIT = "quit"


# Orden de prioridad cuando hay varias teclas pulsadas en el mismo paso:
# gana la primera que sea un giro válido.
DIRECTION_PRIORITY = (
    (Key.LEFT, Direction.LEFT),
    (Key.RIGHT, Direction.RIGHT),
    (Key.UP, Direction.UP),
    (Key.DOWN, Direction.DOWN),
)


class Board(NamedTuple):
    width: int
    height: int

    def contains(self, cell):
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    @property
    def center(self):
        return Cell(self.width // 2, self.height // 2)

    @property
    def area(self):
        return self.width * self.height


DEFAULT_BOARD = Board(SCREEN_WIDTH // TILE_SIZE, SCREEN_HEIGHT // TILE_SIZE)


def cell_to_pixel(cell, tile_size=TILE_SIZE):
    """Esquina superior izquierda de la celda en píxeles (origen arriba a la izquierda)."""
    return cell.x * tile_size, cell.y * tile_size


class Snake:
    """
    La serpiente: cuerpo ordenado de la cabeza (índice 0) a la cola.

    Attributes:
        body: deque de Cell, nunca vacío
        direction: Direction actual
        grow_pending: crecimientos pendientes, se aplica uno por move()
    """

    def __init__(self, body, direction: Direction = Direction.RIGHT, grow_pending: int = 0):
        if not body:
            raise ValueError("Snake body must contain at least one cell")
        if not isinstance(direction, Direction):
            raise ValueError(f"Invalid direction: {direction!r}")
        if grow_pending < 0:
            raise ValueError(f"grow_pending must be >= 0, got {grow_pending}")
        self.body = deque(Cell(*cell) for cell in body)
        self.direction = direction
        self.grow_pending = grow_pending

    @classmethod
    def new(cls, board: Board):
        """Serpiente de una sola celda en el centro del tablero, mirando a la derecha."""
        return cls([board.center], Direction.RIGHT)

    @property
    def head(self) -> Cell:
        return self.body[0]

    def __len__(self):
        return len(self.body)

    def move(self):
        self.body.appendleft(self.head.moved(self.direction))

        if self.grow_pending > 0:
            self.grow_pending -= 1  # Conservamos la cola: crece una celda
        else:
            self.body.pop()

    def set_direction(self, requested: Direction) -> bool:
        """Acepta el giro solo si cambia de eje. Devuelve True si se aplicó."""
        if requested.axis == self.direction.axis:
            return False
        self.direction = requested
        return True

    def grow(self, n=1):
        if n < 0:
            raise ValueError(f"Cannot grow by a negative amount ({n})")
        self.grow_pending += n

    def hits_itself(self):
        head = self.head
        return any(part == head for part in islice(self.body, 1, None))

    def __repr__(self):
        return f"<Snake head={self.head}, len={len(self)}, dir={self.direction.name}>"


class Food(NamedTuple):
    """Posición única de la comida. Se reemplaza (no se muta) al comerla."""
    position: Cell

    @classmethod
    def spawn(cls, board: Board, rng):
        # rng: numpy.random.Generator o cualquier objeto con integers(low, high)
        return cls(Cell(int(rng.integers(0, board.width)),
                        int(rng.integers(0, board.height))))

    def __repr__(self):
        return f"<Food {self.position}>"


class RenderSnapshot(NamedTuple):
    """Vista de solo lectura que se entrega a la capa de dibujo."""
    body: tuple
    food: Cell
    score: int
    game_over: bool


class GameState:
    """
    Estado completo de una partida y su máquina de estados Playing/GameOver.

    El driver externo llama a tick() una vez por frame y después a
    render(renderer). El input se inyecta: cualquier objeto con
    is_pressed(key) e is_just_pressed(key) sirve (ver snake_input).
    """

    def __init__(self, input_adapter, board: Board = DEFAULT_BOARD,
                 rng=None, seed: Optional[int] = None,
                 food_avoids_snake: bool = False):
        if board.width <= 0 or board.height <= 0:
            raise ValueError(f"Invalid board size: {board.width}x{board.height}")
        self.input = input_adapter
        self.board = board
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.food_avoids_snake = food_avoids_snake

        self.snake = None
        self.food = None
        self.score = 0
        self.speed = DEFAULT_SPEED
        self.game_over = False
        self.frame_counter = 0

        self.restart()

    def restart(self):
        self.snake = Snake.new(self.board)
        self.score = 0
        self.game_over = False
        self.food = self._spawn_food()
        self.speed = DEFAULT_SPEED
        self.frame_counter = 0

    def _spawn_food(self):
        food = Food.spawn(self.board, self.rng)
        if not self.food_avoids_snake:
            # Por defecto la comida puede aparecer bajo la serpiente
            return food

        if len(self.snake) >= self.board.area:
            return food  # No queda ninguna celda libre
        occupied = set(self.snake.body)
        while food.position in occupied:
            food = Food.spawn(self.board, self.rng)
        return food

    def tick(self) -> bool:
        """Un frame. Devuelve True si se ha ejecutado un paso de juego completo."""
        if self.game_over:
            if self.input.is_just_pressed(Key.RESTART):
                self.restart()
            return False

        self.frame_counter += 1
        if self.frame_counter < self.speed:
            return False
        self.frame_counter = 0

        self.update_direction()
        self.snake.move()
        self.check_collisions(self.snake.head)
        return True

    def update_direction(self):
        for key, direction in DIRECTION_PRIORITY:
            if self.input.is_pressed(key) and self.snake.set_direction(direction):
                break

    def make_game_over(self):
        self.game_over = True
        self.speed = DEFAULT_SPEED

    def check_collisions(self, head: Cell):
        # 1. Paredes
        if not self.board.contains(head):
            self.make_game_over()
        # 2. Consigo misma
        if self.snake.hits_itself():
            self.make_game_over()

        if not self.game_over:
            self.check_food_consumption(head)

    def check_food_consumption(self, head: Cell):
        if head != self.food.position:
            return
        self.score += 1
        self.snake.grow(1)
        self.food = self._spawn_food()

        if self.speed > MIN_SPEED:
            self.speed -= 1

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(tuple(self.snake.body), self.food.position,
                              self.score, self.game_over)

    def render(self, renderer):
        """Dibuja el estado a través del adaptador; no modifica nada."""
        view = self.snapshot()
        renderer.clear()
        for cell in view.body:
            renderer.draw_cell(cell)
        renderer.draw_food(view.food)

        if view.game_over:
            for row, line in enumerate(GAME_OVER_LINES):
                renderer.draw_text(line, row)

        renderer.draw_score(SCORE_TEMPLATE.format(view.score))

    def __repr__(self):
        return (f"<GameState score={self.score}, speed={self.speed}, "
                f"game_over={self.game_over}, snake={self.snake!r}, food={self.food!r}>")
