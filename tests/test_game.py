import pytest

from snakearena.game import Direction, Game, Point, Snake


def test_new_game_starts_in_centre_heading_right():
    game = Game(60, 40)
    assert game.snake.body == [Point(30, 20)]
    assert game.snake.direction == Direction.RIGHT
    assert game.score == 0
    assert game.game_over is False


def test_first_food_is_on_board_and_off_snake():
    for _ in range(50):
        game = Game(5, 4)
        assert 0 <= game.food.x < 5
        assert 0 <= game.food.y < 4
        assert not game.snake.occupies(game.food)
        assert game.foods == [game.food]


def test_only_free_cell_gets_the_food():
    game = Game(2, 1)
    assert game.snake.body == [Point(1, 0)]
    assert game.food == Point(0, 0)


def test_full_board_raises():
    with pytest.raises(RuntimeError):
        Game(1, 1)
    game = Game(2, 1)
    with pytest.raises(RuntimeError):
        game.generate_food()


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
def test_invalid_size_raises(width, height):
    with pytest.raises(ValueError):
        Game(width, height)


def test_snake_helpers():
    snake = Snake([Point(2, 2), Point(1, 2)], Direction.UP)
    assert snake.head() == Point(2, 2)
    assert snake.next_head() == Point(2, 1)
    assert snake.occupies(Point(1, 2))
    assert not snake.occupies(Point(3, 2))


@pytest.mark.parametrize(
    "direction,expected",
    [
        (Direction.UP, Point(5, 4)),
        (Direction.DOWN, Point(5, 6)),
        (Direction.LEFT, Point(4, 5)),
        (Direction.RIGHT, Point(6, 5)),
    ],
)
def test_move_in_each_direction(direction, expected):
    game = Game(10, 10)
    game.food = Point(0, 0)
    game.snake.direction = direction
    game.move()
    assert game.snake.body == [expected]
    assert game.game_over is False


def test_change_direction_blocks_reversal():
    game = Game(10, 10)
    game.change_direction(Direction.LEFT)
    assert game.snake.direction == Direction.RIGHT
    game.change_direction(Direction.UP)
    assert game.snake.direction == Direction.UP
    game.change_direction(Direction.DOWN)
    assert game.snake.direction == Direction.UP
    game.change_direction(Direction.LEFT)
    assert game.snake.direction == Direction.LEFT


def test_change_direction_accepts_int():
    game = Game(10, 10)
    game.change_direction(0)
    assert game.snake.direction == Direction.UP


def test_hitting_wall_ends_game():
    game = Game(4, 4)
    game.food = Point(0, 0)
    game.move()
    assert game.snake.body == [Point(3, 2)]
    game.move()
    assert game.game_over is True
    assert game.snake.body == [Point(3, 2)]


def test_move_after_game_over_does_nothing():
    game = Game(4, 4)
    game.game_over = True
    before = list(game.snake.body)
    game.move()
    assert game.snake.body == before


def test_eating_food_grows_and_scores():
    game = Game(10, 10)
    game.food = Point(6, 5)
    game.foods = [game.food]
    game.move()
    assert game.score == 1
    assert game.snake.body == [Point(6, 5), Point(5, 5)]
    assert len(game.foods) == 2
    assert not game.snake.occupies(game.food)


def test_running_into_itself_ends_game():
    game = Game(10, 10)
    game.food = Point(0, 0)
    game.snake.body = [Point(2, 2), Point(3, 2), Point(3, 3), Point(2, 3)]
    game.snake.direction = Direction.DOWN
    game.move()
    assert game.game_over is True


def test_string_rendering():
    game = Game(3, 2)
    game.food = Point(0, 0)
    assert str(game) == (
        "Score: 0\n"
        "+------+\n"
        "|*    |\n"
        "|  @  |\n"
        "+------+\n"
    )


def test_string_rendering_body_and_game_over():
    game = Game(3, 2)
    game.food = Point(0, 0)
    game.snake.body = [Point(2, 1), Point(1, 1)]
    game.score = 4
    game.game_over = True
    assert str(game) == (
        "Score: 4\n"
        "+------+\n"
        "|*    |\n"
        "|  o @|\n"
        "+------+\n"
        "Game Over!\n"
    )