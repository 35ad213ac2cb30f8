"""Multiplayer snake server: players, the shared board and the game loop."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Any

from .game import Direction, Game, Point, Snake

logger = logging.getLogger(__name__)

_ADJECTIVES = ("快乐的", "勇敢的", "聪明的", "可爱的", "机智的")
_ANIMALS = ("蛇", "龙", "虎", "豹", "狮")
_SPAWN_MARGIN = 3
_INITIAL_FOODS = 3

_last_id_ns = 0


def generate_player_id() -> str:
    """Return a new player id built from the current time in nanoseconds."""
    global _last_id_ns
    _last_id_ns = max(time.time_ns(), _last_id_ns + 1)
    return f"player_{_last_id_ns}"


def generate_player_name() -> str:
    """Return a random player name made of an adjective and an animal."""
    return random.choice(_ADJECTIVES) + random.choice(_ANIMALS)


def _point_json(point: Point) -> dict[str, int]:
    return {"X": point.x, "Y": point.y}


@dataclass(eq=False)
class Player:
    """A connected player with its snake and connection."""

    id: str
    name: str
    snake: Snake
    conn: Any
    is_alive: bool = True
    is_ready: bool = False


class MultiplayerGame(Game):
    """A board shared by several players' snakes."""

    def __init__(self, width: int, height: int, max_players: int = 4) -> None:
        self.players: dict[str, Player] = {}
        self.max_players = max_players
        self.started = False
        super().__init__(width, height)

    def generate_food(self) -> Point:
        """Place food on a cell free of food and of every snake, and return it."""
        taken = set(self.foods) | set(self.snake.body)
        for player in self.players.values():
            taken.update(player.snake.body)
        if len(taken) >= self.width * self.height:
            raise RuntimeError("no free cell left for food")
        while True:
            candidate = Point(self.rng.randrange(self.width), self.rng.randrange(self.height))
            if candidate not in taken:
                break
        self.foods.append(candidate)
        self.food = candidate
        return candidate


class GameServer:
    """Runs one multiplayer game for the players connected to it.

    A connection is any object with awaitable ``send_json(data)`` and ``close()``.
    """

    tick_interval = 0.1

    def __init__(self, width: int, height: int) -> None:
        self.game = MultiplayerGame(width, height)
        self.clients: dict[Any, Player] = {}
        self.min_players = 2
        self._loop_task: asyncio.Task | None = None

    async def _reject(self, conn: Any, reason: str) -> None:
        await conn.send_json({"type": "error", "message": reason})
        await conn.close()

    async def handle_new_player(self, conn: Any) -> Player | None:
        """Admit a new connection as a player, or reject it and return None."""
        if self.game.started:
            await self._reject(conn, "游戏已经开始")
            return None
        if len(self.clients) >= self.game.max_players:
            await self._reject(conn, "游戏人数已满")
            return None

        player = Player(
            id=generate_player_id(),
            name=generate_player_name(),
            snake=self.create_new_snake(),
            conn=conn,
        )
        self.clients[conn] = player
        self.game.players[player.id] = player

        await self.broadcast_game_state()
        await self.check_all_players_ready()
        return player

    async def handle_message(self, player: Player, message: dict[str, Any]) -> None:
        """Act on one decoded message from a player."""
        kind = message.get("type")
        logger.debug("message from %s: %r", player.id, message)
        if kind == "ready":
            player.is_ready = True
            await self.check_all_players_ready()
            await self.broadcast_game_state()
        elif kind == "direction":
            payload = message.get("payload")
            if isinstance(payload, bool) or not isinstance(payload, int):
                return
            try:
                player.snake.direction = Direction(payload)
            except ValueError:
                return
        elif kind == "startGame":
            if self.can_start():
                await self.start_game()
            else:
                await player.conn.send_json(
                    {"type": "error", "message": "无法开始游戏：玩家未准备就绪或人数不足"}
                )

    async def remove_player(self, player: Player) -> None:
        """Drop a player, closing its connection and ending a game left short."""
        self.clients.pop(player.conn, None)
        self.game.players.pop(player.id, None)
        await player.conn.close()
        if self.game.started and len(self.clients) < self.min_players:
            self.end_game()
        await self.broadcast_game_state()

    def ready_state(self) -> dict[str, Any]:
        """Return the readiness message for all players."""
        players = [
            {"id": p.id, "name": p.name, "isReady": p.is_ready} for p in self.clients.values()
        ]
        return {
            "type": "readyState",
            "allReady": all(p.is_ready for p in self.clients.values()),
            "playerCount": len(self.clients),
            "players": players,
        }

    async def check_all_players_ready(self) -> None:
        """Tell every player who is ready."""
        await self.broadcast_message(self.ready_state())

    def can_start(self) -> bool:
        """Tell whether everyone is ready and the number of players allows a game."""
        if self.game.started:
            return False
        count = len(self.clients)
        all_ready = all(p.is_ready for p in self.clients.values())
        return all_ready and (count == 1 or count >= self.min_players)

    async def start_game(self) -> asyncio.Task:
        """Start the game, place the opening food and launch the game loop."""
        self.game.started = True
        for _ in range(_INITIAL_FOODS):
            self.game.generate_food()
        await self.broadcast_message({"type": "gameStart"})
        self._loop_task = asyncio.get_running_loop().create_task(self.game_loop())
        return self._loop_task

    async def tick(self) -> bool:
        """Run one step of the game; return whether the game goes on."""
        if not self.game.started:
            return False
        for player in list(self.game.players.values()):
            if player.is_alive:
                self.move_snake(player)

        alive = [p for p in self.game.players.values() if p.is_alive]
        if len(alive) <= 1:
            self.end_game()
            if alive:
                await self.broadcast_message({"type": "gameOver", "winner": alive[-1].id})
            return False

        await self.broadcast_game_state()
        return True

    async def game_loop(self) -> None:
        """Tick the game at a fixed interval until it ends."""
        while True:
            await asyncio.sleep(self.tick_interval)
            if not await self.tick():
                break

    def move_snake(self, player: Player) -> None:
        """Move one player's snake, killing it on a wall or any live snake."""
        snake = player.snake
        new_head = snake.next_head()
        if not (0 <= new_head.x < self.game.width and 0 <= new_head.y < self.game.height):
            player.is_alive = False
            return
        for other in self.game.players.values():
            if other.is_alive and other.snake.occupies(new_head):
                player.is_alive = False
                return

        snake.body.insert(0, new_head)
        if new_head in self.game.foods:
            self.game.foods.remove(new_head)
            self.game.generate_food()
        else:
            snake.body.pop()

    def game_state(self) -> dict[str, Any]:
        """Return the board message: every snake and every food."""
        return {
            "type": "gameState",
            "players": {
                player_id: {
                    "snake": [_point_json(p) for p in player.snake.body],
                    "isAlive": player.is_alive,
                }
                for player_id, player in self.game.players.items()
            },
            "foods": [_point_json(p) for p in self.game.foods],
        }

    async def broadcast_game_state(self) -> None:
        """Send the board to every player."""
        await self.broadcast_message(self.game_state())

    async def broadcast_message(self, message: Any) -> None:
        """Send a message to every connection, logging those that fail."""
        for conn in list(self.clients):
            try:
                await conn.send_json(message)
            except (OSError, RuntimeError) as exc:
                logger.warning("Error broadcasting message: %s", exc)

    def end_game(self) -> None:
        """Mark the game as no longer running."""
        self.game.started = False

    def create_new_snake(self) -> Snake:
        """Make a one-cell snake away from the edges and from other snakes."""
        span_x = self.game.width - 2 * _SPAWN_MARGIN
        span_y = self.game.height - 2 * _SPAWN_MARGIN
        if span_x <= 0 or span_y <= 0:
            raise ValueError("board too small to place a snake")
        rng = self.game.rng
        while True:
            start = Point(_SPAWN_MARGIN + rng.randrange(span_x), _SPAWN_MARGIN + rng.randrange(span_y))
            if not any(
                abs(p.x - start.x) < 2 and abs(p.y - start.y) < 2
                for player in self.game.players.values()
                for p in player.snake.body
            ):
                return Snake([start], Direction.RIGHT)