# snakearena

A snake game for the browser that several players can play at once. The server
holds the game state, runs the game loop and sends updates to every connected
player over a WebSocket. The package also has a single-player engine that you
can use on its own.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
snakearena
```

Options:

- `--addr`: the address to listen on, written `host:port` or `:port`. The
  default is `:8981`, which means every interface.
- `--static`: the directory that static files are served from. The default is
  `static`, relative to the current working directory.

```
snakearena --addr 127.0.0.1:9000 --static ./web
```

Players connect to the WebSocket endpoint at `/ws`. A request for `/` returns
`index.html` from the static directory, or 404 if that file is missing. If the
static directory exists, the files in it are served under `/`.

## What is not included

The package has no browser client. The server only serves whatever you put in
the static directory, so you have to supply the page that connects to `/ws`
and draws the board. The single-player engine has no interactive front end
either. It draws the board as text with `str(game)`, and you drive it yourself.

## How a game runs

The board is 30 by 20 cells. Each player who connects gets a snake with one
segment. The snake is placed at random, at least three cells from every wall
and not right next to another snake. At most four players may join, and a
connection that arrives after the game has started is refused with an `error`
message and then closed.

Clients send JSON objects of the form `{"type": ..., "payload": ...}`:

- `ready`: marks this player as ready.
- `direction`: sets the snake's direction. The payload is `0` (up), `1`
  (down), `2` (left) or `3` (right), and any other payload is ignored.
- `startGame`: starts the game. This works only if every player is ready and
  there is either exactly one player or at least two. Otherwise the sender gets
  an `error` message.

A message that is not valid JSON, or is not a JSON object, ends that player's
connection. Whenever a player disconnects, that player is removed from the
game. If a running game is left with fewer than two players, it stops.

The server broadcasts these messages:

- `readyState`: `allReady`, `playerCount`, and a `players` list that gives each
  player's `id`, `name` and `isReady`.
- `gameState`: `players`, which maps each player id to its `snake` (a list of
  `{"X": ..., "Y": ...}` points, head first) and `isAlive`. Also `foods`, the
  points where food lies.
- `gameStart`: the game has begun. Three pieces of food are placed on the
  board.
- `gameOver`: at most one snake is left alive. When exactly one is left,
  `winner` holds its player's id.
- `error`: a request was refused. The reason is in `message`.

The game advances every 100 ms. A snake dies when it runs into a wall or into
the body of any living snake, its own included. Eating food makes the snake
one segment longer, and new food is placed on a free cell.

## Using the engine directly

`snakearena.game` contains the single-player engine:

```python
from snakearena.game import Direction, Game

game = Game(30, 20)
game.change_direction(Direction.UP)
game.move()
print(game)  # the score and the board, drawn as text
```

- `Game.change_direction` ignores a turn straight back the way the snake came.
- `Game.move` sets `game_over` when the snake hits a wall or itself. When the
  snake reaches the food, it adds one to `score` and places new food.
- `Game.generate_food` raises `RuntimeError` when no free cell is left.
- `Game(width, height)` raises `ValueError` for a board smaller than 1x1.

## Embedding the server

`snakearena.server.GameServer` runs one multiplayer game. It works with any
connection object that has awaitable `send_json(data)` and `close()` methods.
The server uses these calls:

- `handle_new_player`: admits a player, or refuses the connection.
- `handle_message`: handles one decoded message from a player.
- `remove_player`: removes a player from the game.
- `tick`: runs one step of the game.
- `game_loop`: runs `tick` at a fixed interval.

To serve the game from your own aiohttp application, build one with
`snakearena.main.create_app(server, static_dir)`.