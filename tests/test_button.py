import pygame

from graphviz_studio import theme
from graphviz_studio.button import Button


def make_button(callback=None, text="Step"):
    return Button(text, (10, 10), (100, 40), callback)


def test_contains_inside_and_outside():
    button = make_button()
    assert button.contains((50, 30))
    assert not button.contains((200, 30))
    assert not button.contains((50, 100))


def test_contains_includes_outline():
    button = make_button()
    assert button.contains((9, 9))
    assert not button.contains((8.5, 30))
    assert not button.contains((111, 30))


def test_handle_click_runs_callback():
    calls = []
    button = make_button(lambda: calls.append("clicked"))
    button.handle_click()
    button.handle_click()
    assert calls == ["clicked", "clicked"]


def test_text_can_be_changed():
    button = make_button(text="Run Animation")
    button.text = "Pause Animation"
    assert button.text == "Pause Animation"


def test_hover_fade_reaches_full_alpha():
    button = make_button()
    button.hovered = True
    assert button.hovered
    button.update(theme.ANIMATION_DURATION / 2)
    assert 204 <= button.fill_color.a < 255
    button.update(theme.ANIMATION_DURATION)
    assert button.fill_color.a == 255
    assert button.fill_color.with_alpha(255) == theme.PANEL_BACKGROUND


def test_hover_unchanged_starts_no_fade():
    button = make_button()
    button.hovered = False
    button.update(0.01)
    assert button.fill_color == theme.PANEL_BACKGROUND


def test_unhover_fade_runs_from_low_alpha():
    button = make_button()
    button.hovered = True
    button.update(1.0)
    button.hovered = False
    button.update(0.0)
    assert button.fill_color.a < 255
    button.update(1.0)
    assert button.fill_color.a == 255


def test_draw_paints_fill_and_outline():
    surface = pygame.Surface((200, 100))
    make_button(text="OK").draw(surface)
    assert tuple(surface.get_at((11, 11)))[:3] == tuple(theme.PANEL_BACKGROUND)[:3]
    assert tuple(surface.get_at((9, 9)))[:3] == tuple(theme.NODE_OUTLINE)[:3]
    assert tuple(surface.get_at((150, 80)))[:3] == (0, 0, 0)