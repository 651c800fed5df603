import pygame
import pytest

from graphviz_studio import theme
from graphviz_studio.node import SELECTED_SCALE, Node


def identity(point):
    return point


def test_new_node_defaults():
    node = Node(10, 20, 3)
    assert node.id == 3
    assert node.position == (10.0, 20.0)
    assert node.radius == theme.NODE_RADIUS
    assert node.color == theme.NODE_FILL
    assert node.fill_color == theme.NODE_FILL
    assert node.scale == 1.0
    assert node.selected is False


def test_contains_inside_and_outside():
    node = Node(0, 0, 0)
    assert node.contains((theme.NODE_RADIUS - 1, 0))
    assert node.contains((0, theme.NODE_RADIUS))
    assert not node.contains((theme.NODE_RADIUS + 1, 0))


def test_contains_respects_scale():
    node = Node(0, 0, 0)
    node.scale = 2.0
    assert node.contains((theme.NODE_RADIUS * 1.5, 0))


def test_selection_grows_node_and_sets_outline():
    node = Node(0, 0, 0)
    node.selected = True
    node.update(theme.ANIMATION_DURATION)
    assert node.scale == pytest.approx(SELECTED_SCALE)
    assert node.outline_color == theme.NODE_SELECTED


def test_deselection_shrinks_and_fades_outline():
    node = Node(0, 0, 0)
    node.selected = True
    node.update(theme.ANIMATION_DURATION)
    node.selected = False
    node.update(theme.ANIMATION_DURATION)
    assert node.scale == pytest.approx(1.0)
    assert node.outline_color == theme.NODE_OUTLINE.with_alpha(0)


def test_selecting_twice_does_not_restart():
    node = Node(0, 0, 0)
    node.selected = True
    node.update(theme.ANIMATION_DURATION)
    node.selected = True
    node.update(theme.ANIMATION_DURATION)
    assert node.scale == pytest.approx(SELECTED_SCALE)


def test_set_color_fades_fill():
    node = Node(0, 0, 0)
    node.set_color(theme.BLACK)
    assert node.color == theme.BLACK
    assert node.fill_color == theme.NODE_FILL
    node.update(theme.ANIMATION_DURATION / 2)
    assert node.fill_color == theme.NODE_FILL.lerp(theme.BLACK, 0.5)
    node.update(theme.ANIMATION_DURATION)
    assert node.fill_color == theme.BLACK


def test_set_same_color_starts_no_fade():
    node = Node(0, 0, 0)
    node.set_color(theme.NODE_FILL)
    node.fill_color = theme.WHITE
    node.update(theme.ANIMATION_DURATION)
    assert node.fill_color == theme.WHITE


def test_set_state_color_applies_immediately_when_idle():
    node = Node(0, 0, 0)
    node.set_state_color(theme.MST_IN_MST)
    assert node.fill_color == theme.MST_IN_MST
    assert node.color == theme.MST_IN_MST


def test_set_state_color_during_fade_only_records():
    node = Node(0, 0, 0)
    node.set_color(theme.BLACK)
    node.set_state_color(theme.MST_REJECTED)
    assert node.color == theme.MST_REJECTED
    assert node.fill_color == theme.NODE_FILL


def test_draw_fills_circle_and_outline():
    surface = pygame.Surface((200, 200))
    node = Node(100, 100, 0)
    node.draw(surface, identity)
    assert tuple(surface.get_at((125, 100)))[:3] == tuple(theme.NODE_FILL)[:3]
    assert tuple(surface.get_at((136, 100)))[:3] == tuple(theme.NODE_OUTLINE)[:3]
    assert tuple(surface.get_at((5, 5)))[:3] == (0, 0, 0)


def test_draw_highlight_glow():
    surface = pygame.Surface((200, 200))
    node = Node(100, 100, 0)
    node.highlighted = True
    node.status_label = "Component 0"
    node.draw(surface, identity)
    r, g, b = tuple(surface.get_at((100 + 44, 100)))[:3]
    assert b == 0
    assert r > 0 and g > 0