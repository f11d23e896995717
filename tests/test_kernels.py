import pytest

from sphfluid.kernels import (
    SMOOTHING_RADIUS,
    kernel_poly6,
    kernel_spiky_gradient,
    kernel_viscosity,
)


def test_peak_at_origin_is_one():
    h = SMOOTHING_RADIUS
    assert kernel_poly6(0.0, h) == pytest.approx(1.0)
    assert kernel_spiky_gradient(0.0, h) == pytest.approx(1.0)
    assert kernel_viscosity(0.0, h) == pytest.approx(1.0)


@pytest.mark.parametrize("r", [SMOOTHING_RADIUS, SMOOTHING_RADIUS * 1.5, 10.0])
def test_zero_at_and_beyond_support(r):
    h = SMOOTHING_RADIUS
    assert kernel_poly6(r, h) == pytest.approx(0.0)
    assert kernel_spiky_gradient(r, h) == pytest.approx(0.0)
    assert kernel_viscosity(r, h) == pytest.approx(0.0)


@pytest.mark.parametrize(
    "kernel", [kernel_poly6, kernel_spiky_gradient, kernel_viscosity]
)
def test_monotonically_decreasing_inside_support(kernel):
    h = SMOOTHING_RADIUS
    radii = [h * k / 20.0 for k in range(21)]
    values = [kernel(r, h) for r in radii]
    for nearer, farther in zip(values, values[1:]):
        assert nearer > farther
    assert values[-1] == pytest.approx(0.0)


def test_values_bounded_between_zero_and_one():
    h = 0.5
    for k in range(30):
        r = h * k / 20.0
        assert 0.0 <= kernel_poly6(r, h) <= 1.0
        assert 0.0 <= kernel_spiky_gradient(r, h) <= 1.0
        assert 0.0 <= kernel_viscosity(r, h) <= 1.0


@pytest.mark.parametrize("r, h", [(0.01, 0.08), (0.03, 0.08), (0.07, 0.08)])
def test_scale_invariance(r, h):
    assert kernel_poly6(r * 4.0, h * 4.0) == pytest.approx(kernel_poly6(r, h))
    assert kernel_spiky_gradient(r * 4.0, h * 4.0) == pytest.approx(
        kernel_spiky_gradient(r, h)
    )
    assert kernel_viscosity(r * 4.0, h * 4.0) == pytest.approx(kernel_viscosity(r, h))


def test_poly6_at_half_radius():
    assert kernel_poly6(0.04, 0.08) == pytest.approx(0.421875)


def test_spiky_gradient_at_half_radius():
    assert kernel_spiky_gradient(0.04, 0.08) == pytest.approx(0.25)


def test_viscosity_at_half_radius():
    assert kernel_viscosity(0.04, 0.08) == pytest.approx(0.5)


def test_spiky_falls_faster_than_viscosity():
    h = SMOOTHING_RADIUS
    for k in range(1, 20):
        r = h * k / 20.0
        assert kernel_spiky_gradient(r, h) < kernel_viscosity(r, h)


def test_spiky_is_square_of_viscosity_inside_support():
    h = SMOOTHING_RADIUS
    for k in range(20):
        r = h * k / 20.0
        assert kernel_spiky_gradient(r, h) == pytest.approx(kernel_viscosity(r, h) ** 2)