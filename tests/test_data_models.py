import math

import pytest

from nbody.data_models import Body


@pytest.mark.parametrize("mass", [0.0, -1.0, math.nan, math.inf])
def test_rejects_non_positive_or_non_finite_mass(mass):
    with pytest.raises(ValueError):
        Body("bad", mass, (0.0, 0.0), (0.0, 0.0))


def test_coerces_vectors_to_float_tuples():
    b = Body("b", 2, [1, 2], [3, 4])
    assert b.mass == 2.0
    assert b.position == (1.0, 2.0)
    assert b.velocity == (3.0, 4.0)


def test_record_trail_point():
    b = Body("b", 1.0, (0.0, 0.0), (0.0, 0.0))
    assert b.record_trail_point(0.05)
    assert not b.record_trail_point(0.05)
    b.position = (0.05, 0.0)
    assert not b.record_trail_point(0.05)
    b.position = (0.06, 0.0)
    assert b.record_trail_point(0.05)
    assert list(b.trail) == [(0.0, 0.0), (0.06, 0.0)]
