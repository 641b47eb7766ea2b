import random

import pytest

from nbody.presets import (
    dim_color,
    SCENARIOS,
    random_color,
    template_figure_eight,
    template_random,
    template_solar,
)


def test_figure_eight_initial_conditions():
    a, b, c = template_figure_eight()
    assert a.position == (0.97000436, -0.24308753)
    assert b.position == (-0.97000436, 0.24308753)
    assert c.position == (0.0, 0.0)
    assert c.velocity == pytest.approx((-0.93240737, -0.86473146))
    assert a.velocity == pytest.approx((0.4662036850, 0.4323657300))
    assert a.velocity == b.velocity
    assert all(body.mass == 1.0 for body in (a, b, c))


def test_solar_layout():
    star, p1, p2 = template_solar()
    assert (star.mass, p1.mass, p2.mass) == (10.0, 1.0, 2.0)
    assert p1.velocity == (0.0, 1.8)
    assert p2.position == (5.0, 0.0)


def test_random_is_seedable_and_in_range():
    first = template_random(random.Random(3))
    second = template_random(random.Random(3))
    assert len(first) == 5
    assert [b.position for b in first] == [b.position for b in second]
    for b in first:
        assert -2.0 <= b.position[0] < 2.0 and -2.0 <= b.position[1] < 2.0
        assert -0.25 <= b.velocity[0] < 0.25 and -0.25 <= b.velocity[1] < 0.25
        assert 0.5 <= b.mass < 1.5


def test_random_color_is_rgb():
    color = random_color(random.Random(1))
    assert len(color) == 3
    assert all(0 <= c <= 255 for c in color)


def test_every_scenario_builds():
    for key, (display, builder, scale) in SCENARIOS.items():
        assert display
        assert scale > 0
        builder(random.Random(0))


def test_dim_color():
    assert dim_color((200, 100, 51), 0.5) == (100, 50, 25)
    assert dim_color((200, 100, 51), 1.0) == (200, 100, 51)
    assert dim_color((200, 100, 51), 3.0) == (200, 100, 51)
    assert dim_color((200, 100, 51), -1.0) == (0, 0, 0)
