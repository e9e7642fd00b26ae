import math

import numpy as np
import pytest

from ratecurve.errors import ConfigurationError, DomainError, ExtrapolationError
from ratecurve.interpolation import (
    BackwardFlatInterpolator,
    CubicSplineInterpolator,
    ForwardFlatInterpolator,
    InterpolationMethod,
    LinearInterpolator,
    LogLinearInterpolator,
    create_interpolator,
    get_interpolation_method,
    is_global,
)


def test_linear_values_primitive_and_derivative():
    interp = LinearInterpolator([0.0, 1.0, 2.0], [1.0, 3.0, 2.0])
    assert interp(0.5) == pytest.approx(2.0)
    assert interp(1.0) == pytest.approx(3.0)
    assert interp.primitive(2.0) == pytest.approx(4.5)
    assert interp.primitive(0.5) == pytest.approx(0.5 * (1.0 + 2.0) / 2.0)
    assert interp.derivative(0.5) == pytest.approx(2.0)
    assert interp.derivative(1.5) == pytest.approx(-1.0)
    np.testing.assert_allclose(interp.interpolate_many([0.0, 0.5, 1.5]), [1.0, 2.0, 2.5])


def test_extrapolation_toggle():
    interp = LinearInterpolator([0.0, 1.0, 2.0], [1.0, 3.0, 2.0])
    with pytest.raises(ExtrapolationError):
        interp(2.5)
    assert interp(2.5, allow_extrapolation=True) == pytest.approx(1.5)

    interp.enable_extrapolation()
    assert interp(2.5) == pytest.approx(1.5)
    interp.disable_extrapolation()
    with pytest.raises(ExtrapolationError):
        interp.primitive(3.0)


def test_log_linear_gives_flat_forwards():
    values = [1.0, math.exp(-0.05), math.exp(-0.11)]
    interp = LogLinearInterpolator([0.0, 1.0, 2.0], values)
    assert interp(0.5) == pytest.approx(math.exp(-0.025), abs=1e-15)
    assert interp(1.5) == pytest.approx(math.exp(-0.08), abs=1e-15)
    assert interp.derivative(0.5) / interp(0.5) == pytest.approx(-0.05)
    assert interp.primitive(1.0) == pytest.approx((1.0 - math.exp(-0.05)) / 0.05)


def test_log_linear_rejects_non_positive_values():
    with pytest.raises(DomainError):
        LogLinearInterpolator([0.0, 1.0], [1.0, 0.0])


def test_backward_flat():
    interp = BackwardFlatInterpolator([0.0, 1.0, 2.0], [0.01, 0.02, 0.03])
    assert interp(0.0) == 0.01
    assert interp(0.5) == 0.02
    assert interp(1.0) == 0.02
    assert interp(1.5) == 0.03
    assert interp.primitive(1.5) == pytest.approx(0.02 + 0.5 * 0.03)
    assert interp.derivative(0.5) == 0.0


def test_forward_flat():
    interp = ForwardFlatInterpolator([0.0, 1.0, 2.0], [0.01, 0.02, 0.03])
    assert interp(0.5) == 0.01
    assert interp(1.0) == 0.02
    assert interp(2.0) == 0.03
    assert interp.primitive(1.5) == pytest.approx(0.01 + 0.5 * 0.02)
    assert interp.primitive(2.5, allow_extrapolation=True) == pytest.approx(
        0.01 + 0.02 + 0.5 * 0.03
    )


def test_cubic_spline_reproduces_a_line():
    x = [0.0, 0.5, 1.2, 2.0]
    interp = CubicSplineInterpolator(x, [2.0 * v + 1.0 for v in x])
    assert interp(0.7) == pytest.approx(2.4)
    assert interp.derivative(1.7) == pytest.approx(2.0)
    assert interp.primitive(2.0) == pytest.approx(6.0)


def test_cubic_spline_hits_nodes_with_natural_ends():
    x = np.array([0.0, 1.0, 2.5, 4.0])
    y = np.array([1.0, 0.97, 0.93, 0.88])
    interp = CubicSplineInterpolator(x, y)
    for xi, yi in zip(x, y):
        assert interp(xi) == pytest.approx(yi, abs=1e-14)
    # second derivative vanishes at both ends
    assert interp.c[0] == 0.0
    assert 2.0 * interp.c[-1] + 6.0 * interp.d[-1] * (x[-1] - x[-2]) == pytest.approx(0.0, abs=1e-12)
    assert interp.is_global


def test_cubic_spline_with_two_points_is_linear():
    interp = CubicSplineInterpolator([0.0, 2.0], [1.0, 0.9])
    assert interp(1.0) == pytest.approx(0.95)


def test_pillars_must_increase():
    with pytest.raises(ConfigurationError):
        LinearInterpolator([0.0, 1.0, 1.0], [1.0, 2.0, 3.0])
    with pytest.raises(ConfigurationError):
        LinearInterpolator([0.0], [1.0])


@pytest.mark.parametrize(
    "name, cls",
    [
        ("LINEAR", LinearInterpolator),
        ("linear_df", LinearInterpolator),
        ("STEP_FORWARD", LogLinearInterpolator),
        ("STEP_FORWARD_CONTINUOUS", LogLinearInterpolator),
        ("loglinear", LogLinearInterpolator),
        ("NATURAL_CUBIC", CubicSplineInterpolator),
        ("PIECEWISE_CONSTANT", ForwardFlatInterpolator),
        ("BACKWARD_FLAT", BackwardFlatInterpolator),
        (InterpolationMethod.CUBIC_SPLINE, CubicSplineInterpolator),
    ],
)
def test_factory(name, cls):
    assert isinstance(create_interpolator(name, [0.0, 1.0, 2.0], [1.0, 0.99, 0.97]), cls)


def test_factory_unknown_method():
    with pytest.raises(ConfigurationError):
        get_interpolation_method("MONOTONE_CONVEX")


def test_is_global():
    assert is_global("CUBIC")
    assert not is_global(InterpolationMethod.LOG_LINEAR)
