"""Single-board snake game: the board, the snake and the rules for moving it."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum


class Direction(IntEnum):
    """Direction of travel. The integer values are the ones clients send."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Point:
    """A cell on the board."""

    x: int
    y: int


@dataclass
class Snake:
    """A snake: its body from head to tail and the way it is heading."""

    body: list[Point]
    direction: Direction = Direction.RIGHT

    def head(self) -> Point:
        """Return the cell the head is on."""
        return self.body[0]

    def next_head(self) -> Point:
        """Return the cell the head moves to on the next step."""
        dx, dy = _DELTAS[self.direction]
        head = self.head()
        return Point(head.x + dx, head.y + dy)

    def occupies(self, point: Point) -> bool:
        """Tell whether any part of the snake is on ``point``."""
        return point in self.body


@dataclass(init=False)
class Game:
    """State of one game: board size, snake, food, score and whether it is over."""

    width: int
    height: int
    snake: Snake
    food: Point
    foods: list[Point] = field(default_factory=list)
    score: int = 0
    game_over: bool = False

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"board must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.snake = Snake([Point(width // 2, height // 2)], Direction.RIGHT)
        self.foods = []
        self.score = 0
        self.game_over = False
        self.rng = random.Random()
        self.generate_food()

    def _in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def generate_food(self) -> Point:
        """Place a new food on a free cell, record it and return it.

        Raises RuntimeError when every cell is taken by the snake or by food.
        """
        taken = set(self.snake.body) | set(self.foods)
        if len(taken) >= self.width * self.height:
            raise RuntimeError("no free cell left for food")
        while True:
            candidate = Point(self.rng.randrange(self.width), self.rng.randrange(self.height))
            if candidate not in taken:
                break
        self.foods.append(candidate)
        self.food = candidate
        return candidate

    def move(self) -> None:
        """Advance the snake one cell, ending the game on a wall or itself."""
        if self.game_over:
            return
        new_head = self.snake.next_head()
        if not self._in_bounds(new_head) or self.snake.occupies(new_head):
            self.game_over = True
            return
        self.snake.body.insert(0, new_head)
        if new_head == self.food:
            self.score += 1
            self.generate_food()
        else:
            self.snake.body.pop()

    def change_direction(self, direction: Direction) -> None:
        """Turn the snake, ignoring a turn straight back on itself."""
        direction = Direction(direction)
        if _OPPOSITES[direction] == self.snake.direction:
            return
        self.snake.direction = direction

    def __str__(self) -> str:
        board = [[" "] * self.width for _ in range(self.height)]
        board[self.food.y][self.food.x] = "*"
        for index, part in enumerate(self.snake.body):
            board[part.y][part.x] = "@" if index == 0 else "o"

        border = "+" + "-" * (self.width * 2) + "+\n"
        lines = [f"Score: {self.score}\n", border]
        lines.extend("|" + " ".join(row) + "|\n" for row in board)
        lines.append(border)
        if self.game_over:
            lines.append("Game Over!\n")
        return "".join(lines)