from platformserver.physics import GRAVITY, JUMP_STRENGTH, ServerPlayer
from platformserver.protocol import PlayerInputState
from platformserver.world import TILE_SIZE, TileMap, build_default_map

DT = 1 / 60


def _fall_until_landed(player, tiles, limit=1000):
    for _ in range(limit):
        if player.step(DT, tiles):
            return True
    return False


def _room():
    # Six rows, floor on the last one, a wall in column 7 above the floor.
    rows = [[0] * 10 for _ in range(6)]
    rows[5] = [1] * 10
    for y in range(5):
        rows[y][7] = 1
    return TileMap(rows)


def test_default_player_values():
    player = ServerPlayer()
    assert (player.x, player.y, player.speed) == (400.0, 300.0, 200.0)
    assert player.is_on_ground is False
    assert player.needs_update is True


def test_gravity_accelerates_a_falling_player():
    tiles = build_default_map()
    player = ServerPlayer()
    player.step(DT, tiles)
    assert player.velocity_y == GRAVITY * DT
    assert player.y > 300.0
    assert player.is_on_ground is False


def test_player_lands_on_a_solid_tile():
    tiles = build_default_map()
    player = ServerPlayer(needs_update=False)
    assert _fall_until_landed(player, tiles)
    assert player.is_on_ground is True
    assert player.velocity_y == 0.0
    assert player.needs_update is True
    bottom = player.y + 32
    assert bottom % TILE_SIZE == 0
    assert tiles.is_solid(int((player.x - 32) / TILE_SIZE), int(bottom / TILE_SIZE))


def test_standing_still_needs_no_update():
    tiles = build_default_map()
    player = ServerPlayer()
    _fall_until_landed(player, tiles)
    y = player.y
    player.needs_update = False
    assert player.step(DT, tiles) is False
    assert player.y == y
    assert player.is_on_ground is True
    assert player.needs_update is False


def test_jump_from_ground():
    tiles = build_default_map()
    player = ServerPlayer()
    _fall_until_landed(player, tiles)
    ground_y = player.y
    player.last_input = PlayerInputState(jump=True)
    player.needs_update = False
    player.step(DT, tiles)
    assert player.velocity_y == JUMP_STRENGTH
    assert player.is_on_ground is False
    assert player.y < ground_y
    assert player.needs_update is True


def test_jump_in_the_air_does_nothing():
    tiles = build_default_map()
    player = ServerPlayer(last_input=PlayerInputState(jump=True))
    player.step(DT, tiles)
    assert player.velocity_y == GRAVITY * DT


def test_walking_into_a_wall_stops_at_it():
    tiles = _room()
    player = ServerPlayer(x=150.0, y=5 * TILE_SIZE - 32, is_on_ground=True)
    player.last_input = PlayerInputState(right=True)
    for _ in range(30):
        player.step(0.05, tiles)
    stopped = player.x
    assert stopped + 32 == 7 * TILE_SIZE
    player.step(0.05, tiles)
    assert player.x == stopped
    assert player.is_on_ground is True


def test_walking_left_moves_by_speed():
    tiles = _room()
    player = ServerPlayer(x=150.0, y=5 * TILE_SIZE - 32, is_on_ground=True)
    player.last_input = PlayerInputState(left=True)
    player.step(0.05, tiles)
    assert player.x == 150.0 - player.speed * 0.05


def test_walking_off_an_edge_starts_a_fall():
    tiles = TileMap([[0] * 10 for _ in range(10)])
    player = ServerPlayer(x=200.0, y=100.0, is_on_ground=True, needs_update=False)
    player.step(DT, tiles)
    assert player.is_on_ground is False
    assert player.velocity_y > 0
    assert player.needs_update is True


def test_ceiling_stops_upward_motion():
    rows = [[0] * 10 for _ in range(8)]
    rows[0] = [1] * 10
    tiles = TileMap(rows)
    player = ServerPlayer(x=200.0, y=TILE_SIZE + 33, velocity_y=JUMP_STRENGTH)
    player.step(DT, tiles)
    assert player.velocity_y == 0.0
    assert player.y - 32 == TILE_SIZE