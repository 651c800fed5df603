import pygame
import pytest

from graphviz_studio.grid import BackgroundGrid
from graphviz_studio.viewport import ViewportManager

WINDOW = (800, 600)


def split(lines):
    vertical = [line for line in lines if line.vertical]
    horizontal = [line for line in lines if not line.vertical]
    return vertical, horizontal


def test_update_drifts_and_wraps():
    grid = BackgroundGrid(WINDOW)
    grid.update(1.0)
    assert grid.offset == pytest.approx(BackgroundGrid.DRIFT_SPEED)
    grid.update(2.0)
    assert grid.offset == 0.0


def test_toggle_animation_stops_and_resets():
    grid = BackgroundGrid(WINDOW)
    grid.update(1.0)
    grid.toggle_animation()
    assert not grid.animated
    assert grid.offset == 0.0
    grid.update(1.0)
    assert grid.offset == 0.0
    grid.toggle_animation()
    assert grid.animated


def test_minor_lines_are_evenly_spaced_and_cover_view():
    grid = BackgroundGrid(WINDOW)
    lines = grid.grid_lines((400, 300), (800, 600))
    vertical, horizontal = split(lines)
    minor_x = [line.x for line in vertical if line.width == 1.0]
    assert all(
        b - a == pytest.approx(grid.grid_size) for a, b in zip(minor_x, minor_x[1:])
    )
    assert minor_x[0] <= 0
    assert minor_x[-1] >= 800
    minor_y = [line.y for line in horizontal if line.height == 1.0]
    assert minor_y[0] <= 0
    assert minor_y[-1] >= 600


def test_major_lines_are_five_minor_steps_apart():
    grid = BackgroundGrid(WINDOW)
    lines = grid.grid_lines((400, 300), (800, 600))
    vertical, _ = split(lines)
    major_x = [line.x for line in vertical if line.width == 2.0]
    assert len(major_x) >= 2
    assert all(
        b - a == pytest.approx(grid.grid_size * 5) for a, b in zip(major_x, major_x[1:])
    )


def test_grid_size_stays_in_range_when_zoomed():
    grid = BackgroundGrid(WINDOW)
    for factor in (0.1, 0.5, 1.0, 2.0, 3.7, 10.0):
        grid.grid_lines((400, 300), (800 * factor, 600 * factor))
        assert 30.0 <= grid.grid_size <= 100.0


def test_major_lines_are_brighter():
    grid = BackgroundGrid(WINDOW)
    lines = grid.grid_lines((400, 300), (800, 600))
    minor_alpha = {line.color.a for line in lines if line.width == 1.0 or line.height == 1.0}
    major_alpha = {line.color.a for line in lines if line.width == 2.0 or line.height == 2.0}
    assert max(minor_alpha) <= min(major_alpha)


def test_zero_opacity_gives_invisible_lines():
    grid = BackgroundGrid(WINDOW)
    grid.opacity = 0.0
    lines = grid.grid_lines((400, 300), (800, 600))
    assert lines
    assert all(line.color.a == 0 for line in lines)


def test_offset_shifts_lines():
    grid = BackgroundGrid(WINDOW)
    grid.offset = 10.0
    vertical, _ = split(grid.grid_lines((400, 300), (800, 600)))
    minor_x = [line.x for line in vertical if line.width == 1.0]
    assert all((x - 10.0) % grid.grid_size == pytest.approx(0.0) for x in minor_x)


def test_draw_paints_lines_on_surface():
    size = (200, 100)
    grid = BackgroundGrid(size)
    grid.opacity = 1.0
    viewport = ViewportManager(size)
    surface = pygame.Surface(size)
    surface.fill((0, 0, 0))
    grid.draw(surface, viewport)
    assert tuple(surface.get_at((50, 10)))[:3] == (255, 255, 255)
    assert tuple(surface.get_at((25, 10)))[:3] == (0, 0, 0)