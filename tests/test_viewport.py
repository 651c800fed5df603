import pygame
import pytest

from graphviz_studio.viewport import Rect, ViewportManager

WINDOW = (800, 600)


def make_viewport():
    vm = ViewportManager(WINDOW)
    vm.bounds = Rect(-10000, -10000, 20000, 20000)
    return vm


def test_rect_contains_is_half_open():
    rect = Rect(10, 20, 30, 40)
    assert rect.contains((10, 20))
    assert rect.contains((39.9, 59.9))
    assert not rect.contains((40, 30))
    assert not rect.contains((20, 60))
    assert not rect.contains((5, 30))


def test_rect_with_negative_size():
    rect = Rect(10, 10, -5, -5)
    assert rect.contains((7, 7))
    assert not rect.contains((11, 7))


def test_default_view_is_identity():
    vm = ViewportManager(WINDOW)
    assert vm.screen_to_world((100, 200)) == pytest.approx((100, 200))
    assert vm.world_to_screen((321, 123)) == pytest.approx((321, 123))
    assert vm.zoom_level == 1.0


def test_round_trip_after_zoom_and_pan():
    vm = make_viewport()
    vm.zoom_at(300, 200, 1)
    vm.begin_drag(100, 100)
    vm.drag_to(60, 130)
    for point in [(0, 0), (123.5, 456.25), (799, 599)]:
        assert vm.world_to_screen(vm.screen_to_world(point)) == pytest.approx(point)


def test_zoom_in_keeps_point_under_mouse():
    vm = make_viewport()
    before = vm.screen_to_world((200, 150))
    vm.zoom_at(200, 150, 1)
    assert vm.zoom_level == pytest.approx(0.9)
    assert vm.screen_to_world((200, 150)) == pytest.approx(before)
    assert vm.view_size == pytest.approx((WINDOW[0] * 0.9, WINDOW[1] * 0.9))


def test_zoom_out_factor():
    vm = make_viewport()
    vm.zoom_at(400, 300, -1)
    assert vm.zoom_level == pytest.approx(1.1)


def test_zoom_stays_within_limits():
    vm = make_viewport()
    for _ in range(200):
        vm.zoom_at(400, 300, 1)
    assert vm.zoom_level >= ViewportManager.MIN_ZOOM
    low = vm.zoom_level
    vm.zoom_at(400, 300, 1)
    assert vm.zoom_level == low

    for _ in range(400):
        vm.zoom_at(400, 300, -1)
    assert vm.zoom_level <= ViewportManager.MAX_ZOOM


def test_drag_moves_view_against_mouse():
    vm = make_viewport()
    cx, cy = vm.view_center
    vm.begin_drag(100, 100)
    vm.drag_to(90, 80)
    assert vm.view_center == pytest.approx((cx + (100 - 90), cy + (100 - 80)))
    vm.end_drag()
    assert not vm.dragging


def test_small_bounds_centre_the_view():
    vm = ViewportManager(WINDOW)
    rect = Rect(0, 0, 100, 100)
    vm.bounds = rect
    assert vm.view_center == pytest.approx(
        (rect.left + rect.width / 2, rect.top + rect.height / 2)
    )


def test_view_is_clamped_inside_bounds():
    vm = ViewportManager(WINDOW)
    vm.bounds = Rect(0, 0, 1000, 1000)
    vm.begin_drag(0, 0)
    vm.drag_to(-5000, -5000)
    half_w, half_h = vm.view_size[0] / 2, vm.view_size[1] / 2
    assert vm.view_center == pytest.approx((1000 - half_w, 1000 - half_h))


def test_reset_restores_default():
    vm = make_viewport()
    vm.zoom_at(10, 10, 1)
    vm.reset()
    assert vm.zoom_level == 1.0
    assert vm.view_size == pytest.approx(WINDOW)
    assert vm.view_center == pytest.approx((WINDOW[0] / 2, WINDOW[1] / 2))


def test_handle_event_middle_drag():
    vm = make_viewport()
    cx, cy = vm.view_center
    vm.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=2, pos=(100, 100)))
    assert vm.dragging
    vm.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(90, 100), rel=(-10, 0), buttons=(0, 1, 0)))
    assert vm.view_center == pytest.approx((cx + 10, cy))
    vm.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=2, pos=(90, 100)))
    assert not vm.dragging


def test_handle_event_ignores_left_button():
    vm = make_viewport()
    vm.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(100, 100)))
    assert not vm.dragging


def test_handle_event_wheel_zooms():
    vm = make_viewport()
    vm.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1, pos=(400, 300)))
    assert vm.zoom_level == pytest.approx(0.9)