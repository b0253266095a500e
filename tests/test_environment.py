import pytest

from shimectl.environment import SUBTICK_COUNT, ActiveWindow, Environment, Rect

GEOM = Rect(0, 0, 1920, 1080)
NO_WINDOW = ActiveWindow()


def _update(env, geometry=GEOM, available=GEOM, cursor=(10, 20),
            current=NO_WINDOW, previous=NO_WINDOW, windowed=False, scale=1.0):
    env.update(geometry, available, cursor, current, previous, windowed, scale)
    return env


def test_rect_edges_are_inclusive():
    r = Rect(10, 20, 100, 50)
    assert r.right() - r.x == r.width - 1
    assert r.bottom() - r.y == r.height - 1


def test_empty_rect_edges():
    r = Rect()
    assert r.right() == -1
    assert r.bottom() == -1


def test_screen_matches_geometry():
    geometry = Rect(100, 50, 800, 600)
    env = _update(Environment(), geometry=geometry, available=geometry)
    assert env.screen.top == geometry.y
    assert env.screen.left == geometry.x
    assert env.screen.right == geometry.right()
    assert env.screen.bottom == geometry.bottom()
    assert env.work_area == env.screen
    assert env.floor.y == geometry.bottom()
    assert (env.floor.start, env.floor.end) == (geometry.x, geometry.right())
    assert env.ceiling.y == geometry.y


def test_smaller_available_area_does_not_shrink_floor():
    # Available bottom above the screen bottom gives a negative taskbar height,
    # which is clamped to zero.
    available = Rect(0, 30, 1920, 1000)
    env = _update(Environment(), available=available)
    assert env.floor.y == GEOM.bottom()
    assert env.screen.top == GEOM.y


def test_larger_available_area_moves_floor_and_top():
    available = Rect(0, -20, 1920, 1140)
    env = _update(Environment(), available=available)
    taskbar = available.bottom() - GEOM.bottom()
    status = GEOM.y - available.y
    assert env.floor.y == GEOM.bottom() - taskbar
    assert env.work_area.bottom == GEOM.bottom() - taskbar
    assert env.screen.top == GEOM.y + status


def test_subtick_count_set():
    env = _update(Environment())
    assert env.subtick_count == SUBTICK_COUNT == 4


def test_cursor_delta_tracks_previous_position():
    env = Environment()
    _update(env, cursor=(10, 20))
    assert (env.cursor.x, env.cursor.y) == (10, 20)
    _update(env, cursor=(15, 12))
    assert (env.cursor.x, env.cursor.y) == (15, 12)
    assert env.cursor.dx == 15 - 10
    assert env.cursor.dy == 12 - 20


def test_no_active_window_hides_ie():
    env = _update(Environment())
    assert tuple(env.active_ie)[:4] == (-50, -50, -50, -50)
    assert not env.active_ie.visible


def test_active_window_sets_ie():
    win = ActiveWindow("w", 100, 200, 300, 400, True)
    env = _update(Environment(), current=win)
    assert env.active_ie.left == win.x
    assert env.active_ie.top == win.y
    assert env.active_ie.right == win.x + win.width
    assert env.active_ie.bottom == win.y + win.height
    assert (env.active_ie.dx, env.active_ie.dy) == (0, 0)
    assert env.active_ie.visible


def test_active_window_near_origin_is_ignored():
    win = ActiveWindow("w", 1, 200, 300, 400, True)
    env = _update(Environment(), current=win)
    assert env.active_ie.left == -50


def test_active_window_movement_delta():
    prev = ActiveWindow("w", 100, 200, 300, 400, True)
    cur = ActiveWindow("w", 130, 180, 300, 400, True)
    env = _update(Environment(), current=cur, previous=prev)
    assert env.active_ie.dx == cur.x - prev.x
    assert env.active_ie.dy == cur.y - prev.y


def test_active_window_resize_delta_when_not_moved():
    prev = ActiveWindow("w", 100, 200, 300, 400, True)
    cur = ActiveWindow("w", 100, 200, 350, 420, True)
    env = _update(Environment(), current=cur, previous=prev)
    assert env.active_ie.dx == cur.width - prev.width
    assert env.active_ie.dy == cur.height - prev.height


def test_different_window_has_no_delta():
    prev = ActiveWindow("a", 100, 200, 300, 400, True)
    cur = ActiveWindow("b", 130, 180, 300, 400, True)
    env = _update(Environment(), current=cur, previous=prev)
    assert (env.active_ie.dx, env.active_ie.dy) == (0, 0)


def test_windowed_mode_is_relative_to_sandbox():
    sandbox = Rect(200, 100, 640, 480)
    win = ActiveWindow("w", 100, 200, 300, 400, True)
    env = _update(Environment(), geometry=sandbox, available=None,
                  cursor=(250, 130), current=win, windowed=True)
    assert env.screen.left == 0 and env.screen.top == 0
    assert env.screen.right == sandbox.width
    assert env.screen.bottom == sandbox.height
    assert (env.cursor.x, env.cursor.y) == (250 - sandbox.x, 130 - sandbox.y)
    assert env.active_ie.left == -50


def test_windowed_mode_without_sandbox():
    env = _update(Environment(), geometry=None, available=None,
                  cursor=(250, 130), windowed=True)
    assert (env.cursor.x, env.cursor.y) == (0, 0)
    assert env.screen.right == Rect().right()


def test_scale_from_user_scale():
    assert _update(Environment(), scale=1.0).scale == 1.0
    assert _update(Environment(), scale=4.0).scale == 0.5


@pytest.mark.parametrize("bad", [0, -1.0])
def test_non_positive_scale_rejected(bad):
    with pytest.raises(ValueError):
        _update(Environment(), scale=bad)


def test_missing_geometry_outside_windowed_mode():
    with pytest.raises(ValueError):
        _update(Environment(), geometry=None)