import math

import pytest

from nbody.data_models import Body
from nbody.physics import (
    GravityModel,
    center_of_mass,
    kinetic_energy,
    potential_energy,
    total_momentum,
)
from nbody.state_vector import flatten


def test_velocity_passes_through():
    bodies = [Body("a", 1.0, (0.0, 0.0), (1.5, -2.0)), Body("b", 1.0, (3.0, 4.0), (0.5, 0.25))]
    d = GravityModel().derivatives(flatten(bodies), [1.0, 1.0])
    assert len(d) == 8
    assert d[0:2] == [1.5, -2.0]
    assert d[4:6] == [0.5, 0.25]


def test_two_body_symmetry():
    bodies = [Body("a", 2.0, (-1.0, 0.0), (0.0, -0.5)), Body("b", 2.0, (1.0, 0.0), (0.0, 0.5))]
    d = GravityModel().derivatives(flatten(bodies), [2.0, 2.0])
    ax0, ay0 = d[2], d[3]
    ax1, ay1 = d[6], d[7]
    assert ax0 > 0
    assert ax0 == -ax1
    assert ay0 == -ay1 == 0.0


def test_softened_magnitude_matches_formula():
    model = GravityModel(g=1.0, softening=0.1)
    state = [0.0, 0.0, 0.0, 0.0, 3.0, 4.0, 0.0, 0.0]
    d = model.derivatives(state, [1.0, 5.0])
    f = 5.0 / (25.0 + 0.1) ** 1.5
    assert d[2] == pytest.approx(f * 3.0)
    assert d[3] == pytest.approx(f * 4.0)


def test_acceleration_scales_with_other_mass_only():
    state = [0.0, 0.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0]
    light = GravityModel().derivatives(state, [1.0, 1.0])
    heavy_self = GravityModel().derivatives(state, [100.0, 1.0])
    assert light[2] == heavy_self[2]


def test_single_body_has_no_acceleration():
    d = GravityModel().derivatives([1.0, 2.0, 0.3, -0.4], [7.0])
    assert d == [0.3, -0.4, 0.0, 0.0]


@pytest.mark.parametrize("offset", [0.0, 1e-12, 1e-6, 0.2236, 1.0])
def test_softening_bounds_close_encounters(offset):
    mass, soft = 3.0, 0.1
    state = [0.5, 0.5, 0.0, 0.0, 0.5 + offset, 0.5, 0.0, 0.0]
    d = GravityModel(softening=soft).derivatives(state, [mass, mass])
    for a in d[2:4] + d[6:8]:
        assert math.isfinite(a)
        assert abs(a) <= mass / soft ** 1.5


def test_set_softening_clamps_negative():
    model = GravityModel()
    model.set_softening(-1.0)
    assert model.softening == 0.0
    model.set_softening(0.25)
    assert model.softening == 0.25


def test_energy_terms():
    bodies = [Body("a", 2.0, (0.0, 0.0), (1.0, 0.0)), Body("b", 1.0, (3.0, 4.0), (0.0, -2.0))]
    assert kinetic_energy(bodies) == pytest.approx(0.5 * 2.0 * 1.0 + 0.5 * 1.0 * 4.0)
    assert potential_energy(bodies, g=1.0, softening=0.0) == pytest.approx(-2.0 / 5.0)
    assert potential_energy(bodies, g=1.0, softening=0.1) == pytest.approx(-2.0 / math.sqrt(25.1))


def test_momentum_and_center_of_mass():
    bodies = [Body("a", 1.0, (-1.0, 0.0), (0.0, 2.0)), Body("b", 3.0, (1.0, 2.0), (1.0, -1.0))]
    assert total_momentum(bodies) == (3.0, -1.0)
    assert center_of_mass(bodies) == (0.5, 1.5)
    assert center_of_mass([]) == (0.0, 0.0)
