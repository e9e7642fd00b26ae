import math
from datetime import date

import numpy as np
import pandas as pd
import pytest

from ratecurve.bootstrap import BootstrapConfig, BootstrapState, IterativeBootstrap
from ratecurve.conventions import ACT_360
from ratecurve.curves import Discount, InterpolatedCurve, PiecewiseYieldCurve
from ratecurve.errors import (
    ConfigurationError,
    ConvergenceError,
    ExtrapolationError,
    QuoteError,
)
from ratecurve.quotes import SimpleQuote

REPRICING_TOLERANCE = 1e-9


def assert_reprices(curve, helpers):
    for helper in helpers:
        assert helper.quote_error(curve) == pytest.approx(0.0, abs=REPRICING_TOLERANCE)


class OneShotDiscount(Discount):
    def max_iterations(self):
        return 1


# ----------------------------------------------------------------------
# Two-deposit scenario
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "trait, interpolation",
    [("DISCOUNT", "LOG_LINEAR"), ("ZERO_YIELD", "LINEAR"), ("FORWARD_RATE", "BACKWARD_FLAT")],
)
def test_two_deposits_give_simple_discount_factors(reference_date, two_deposits, trait, interpolation):
    curve = PiecewiseYieldCurve(reference_date, two_deposits, trait=trait, interpolation=interpolation)

    for helper, rate in zip(two_deposits, (0.0200, 0.0250)):
        tau = ACT_360.year_fraction(reference_date, helper.latest_date)
        assert curve.discount(helper.latest_date) == pytest.approx(1.0 / (1.0 + rate * tau), abs=1e-12)
        assert helper.quote_error(curve) == pytest.approx(0.0, abs=1e-12)

    assert curve.dates() == (reference_date, date(2024, 4, 2), date(2025, 1, 2))
    assert curve.discount(reference_date) == pytest.approx(1.0, abs=1e-15)
    assert curve.report.max_abs_error < 1e-12
    assert curve.state == BootstrapState.CONVERGED


def test_two_deposits_zero_yield(reference_date, two_deposits):
    curve = PiecewiseYieldCurve(reference_date, two_deposits, trait="ZERO_YIELD", interpolation="LINEAR")
    helper = two_deposits[1]
    tau = ACT_360.year_fraction(reference_date, helper.latest_date)
    t = curve.time_from_reference(helper.latest_date)
    assert curve.zero_rate(helper.latest_date) == pytest.approx(math.log(1.0 + 0.025 * tau) / t, abs=1e-12)
    # node 0 follows node 1
    data = curve.data()
    assert data[0] == data[1]


# ----------------------------------------------------------------------
# Repricing across traits and interpolations
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "trait, interpolation",
    [
        ("DISCOUNT", "LOG_LINEAR"),
        ("DISCOUNT", "LINEAR"),
        ("DISCOUNT", "CUBIC_SPLINE"),
        ("ZERO_YIELD", "LINEAR"),
        ("ZERO_YIELD", "CUBIC_SPLINE"),
        ("FORWARD_RATE", "BACKWARD_FLAT"),
        ("FORWARD_RATE", "LINEAR"),
    ],
)
def test_reprices_every_helper(reference_date, market_helpers, trait, interpolation):
    curve = PiecewiseYieldCurve(reference_date, market_helpers, trait=trait, interpolation=interpolation)
    assert_reprices(curve, market_helpers)
    assert curve.report.max_abs_error < REPRICING_TOLERANCE
    assert curve.discount(reference_date) == pytest.approx(1.0, abs=1e-15)

    discounts = [curve.discount(d) for d in curve.dates()]
    assert np.all(np.diff(discounts) < 0.0)


@pytest.mark.parametrize("solver", ["BRENT", "BISECTION", "NEWTON_SAFE"])
def test_solvers_agree(reference_date, market_helpers, solver):
    reference = PiecewiseYieldCurve(reference_date, market_helpers)
    curve = PiecewiseYieldCurve(reference_date, market_helpers, solver=solver)
    assert_reprices(curve, market_helpers)
    np.testing.assert_allclose(curve.data(), reference.data(), atol=1e-10)


def test_cubic_spline_needs_several_passes(reference_date, market_helpers):
    curve = PiecewiseYieldCurve(reference_date, market_helpers, interpolation="CUBIC_SPLINE")
    assert curve.report.passes > 1
    assert curve.report.last_change <= 1e-12


@pytest.mark.parametrize("interpolation", ["LOG_LINEAR", "LINEAR"])
def test_local_interpolation_needs_one_pass(reference_date, market_helpers, interpolation):
    curve = PiecewiseYieldCurve(reference_date, market_helpers, interpolation=interpolation)
    assert curve.report.passes == 1
    assert_reprices(curve, market_helpers)


def test_pass_cap_counts_every_pass(reference_date, market_helpers):
    passes = PiecewiseYieldCurve(
        reference_date, market_helpers, interpolation="CUBIC_SPLINE"
    ).report.passes
    capped = PiecewiseYieldCurve(
        reference_date,
        market_helpers,
        interpolation="CUBIC_SPLINE",
        config=BootstrapConfig(max_iterations=passes),
    )
    assert capped.report.passes == passes

    short = PiecewiseYieldCurve(
        reference_date,
        market_helpers,
        interpolation="CUBIC_SPLINE",
        config=BootstrapConfig(max_iterations=passes - 1),
    )
    with pytest.raises(ConvergenceError, match=f"after {passes - 1} passes"):
        short.recalculate()


def test_swaps_with_exogenous_discount_curve(reference_date, make_deposit, make_swap):
    ois = PiecewiseYieldCurve(
        reference_date,
        [make_deposit("6M", 0.019), make_deposit("1Y", 0.021), make_deposit("2Y", 0.023)],
        allow_extrapolation=True,
    )
    helpers = [make_deposit("6M", 0.0215)] + [make_swap(t, q, discount_curve=ois) for t, q in (("2Y", 0.0265), ("5Y", 0.029))]
    curve = PiecewiseYieldCurve(reference_date, helpers)
    assert_reprices(curve, helpers)


# ----------------------------------------------------------------------
# Node layout
# ----------------------------------------------------------------------
def test_nodes_sorted_and_times_increasing(reference_date, market_helpers):
    curve = PiecewiseYieldCurve(reference_date, list(reversed(market_helpers)))
    dates = curve.dates()
    times = curve.times()
    assert dates[0] == reference_date
    assert times[0] == 0.0
    assert list(dates) == sorted(dates)
    assert np.all(np.diff(times) > 0.0)
    assert len(dates) == len(market_helpers) + 1
    assert curve.max_date == dates[-1]


def test_queries_past_last_pillar(reference_date, two_deposits):
    curve = PiecewiseYieldCurve(reference_date, two_deposits)
    with pytest.raises(ExtrapolationError):
        curve.discount(date(2025, 6, 1))
    assert curve.discount(date(2025, 6, 1), extrapolate=True) < curve.discount(curve.max_date)


# ----------------------------------------------------------------------
# Configuration errors surface at construction
# ----------------------------------------------------------------------
def test_duplicate_pillar_rejected_before_solving(reference_date, make_deposit):
    helpers = [make_deposit("3M", 0.02), make_deposit("3M", 0.021)]
    with pytest.raises(ConfigurationError, match="2024-04-02"):
        PiecewiseYieldCurve(reference_date, helpers)


def test_empty_helper_set(reference_date):
    with pytest.raises(ConfigurationError):
        PiecewiseYieldCurve(reference_date, [])


def test_expired_helper(reference_date, make_deposit):
    expired = make_deposit("3M", 0.02, ref=date(2023, 1, 2))
    with pytest.raises(ConfigurationError):
        PiecewiseYieldCurve(reference_date, [expired, make_deposit("1Y", 0.025)])


def test_jump_mismatch(reference_date, two_deposits):
    with pytest.raises(ConfigurationError, match="Mismatch"):
        PiecewiseYieldCurve(
            reference_date, two_deposits, jumps=[0.999], jump_dates=[date(2024, 6, 28), date(2024, 12, 31)]
        )
    with pytest.raises(ConfigurationError):
        PiecewiseYieldCurve(reference_date, two_deposits, jump_dates=[date(2024, 12, 31)])


def test_invalid_config():
    with pytest.raises(ConfigurationError):
        BootstrapConfig(accuracy=0.0)
    with pytest.raises(ConfigurationError):
        BootstrapConfig(max_iterations=0)
    with pytest.raises(ConfigurationError):
        BootstrapConfig(solver="SECANT")


def test_invalid_quote(reference_date, make_deposit):
    helpers = [make_deposit("3M", math.nan), make_deposit("1Y", 0.025)]
    curve = PiecewiseYieldCurve(reference_date, helpers)
    with pytest.raises(QuoteError):
        curve.discount(date(2024, 3, 1))
    assert curve.state == BootstrapState.FAILED


# ----------------------------------------------------------------------
# Convergence failures
# ----------------------------------------------------------------------
def test_trait_with_one_iteration_does_not_converge(reference_date, market_helpers):
    curve = PiecewiseYieldCurve(reference_date, market_helpers, trait=OneShotDiscount())
    with pytest.raises(ConvergenceError):
        curve.discount(date(2025, 1, 2))
    assert curve.state == BootstrapState.FAILED
    assert curve.last_converged is None


def test_global_pass_cap(reference_date, market_helpers):
    config = BootstrapConfig(max_iterations=1, max_evaluations=100)
    curve = PiecewiseYieldCurve(
        reference_date, market_helpers, interpolation="CUBIC_SPLINE", config=config
    )
    with pytest.raises(ConvergenceError, match="passes"):
        curve.recalculate()


def test_unbracketed_quote(reference_date, two_deposits):
    # negative rates are excluded by default
    two_deposits[0].quote.set_value(-0.5)
    curve = PiecewiseYieldCurve(reference_date, two_deposits)
    with pytest.raises(ConvergenceError) as excinfo:
        curve.discount(0.1)
    assert isinstance(excinfo.value, RuntimeError)


# ----------------------------------------------------------------------
# Lazy recalculation
# ----------------------------------------------------------------------
def test_recalculation_is_idempotent(reference_date, market_helpers):
    curve = PiecewiseYieldCurve(reference_date, market_helpers)
    before = curve.data()
    report = curve.recalculate()
    assert report.passes == 1
    np.testing.assert_array_equal(curve.data(), before)


def test_unchanged_quotes_do_not_recalculate(reference_date, two_deposits):
    curve = PiecewiseYieldCurve(reference_date, two_deposits)
    snapshot = curve.snapshot()
    curve.discount(date(2024, 6, 3))
    assert curve.snapshot() is snapshot

    curve.update()
    assert curve.snapshot() is not snapshot


def test_quote_change_triggers_recalculation(reference_date, two_deposits):
    curve = PiecewiseYieldCurve(reference_date, two_deposits)
    pillar = two_deposits[0].latest_date
    tau = ACT_360.year_fraction(reference_date, pillar)
    assert curve.discount(pillar) == pytest.approx(1.0 / (1.0 + 0.02 * tau), abs=1e-10)

    two_deposits[0].quote.set_value(0.021)
    assert curve.discount(pillar) == pytest.approx(1.0 / (1.0 + 0.021 * tau), abs=1e-10)
    assert_reprices(curve, two_deposits)


@pytest.mark.parametrize(
    "trait, interpolation",
    [("ZERO_YIELD", "LINEAR"), ("FORWARD_RATE", "BACKWARD_FLAT"), ("FORWARD_RATE", "LINEAR")],
)
def test_large_quote_move_rebuilds_from_scratch(reference_date, two_deposits, trait, interpolation):
    curve = PiecewiseYieldCurve(reference_date, two_deposits, trait=trait, interpolation=interpolation)
    curve.snapshot()

    two_deposits[0].quote.set_value(0.06)
    two_deposits[1].quote.set_value(0.07)
    for helper, rate in zip(two_deposits, (0.06, 0.07)):
        tau = ACT_360.year_fraction(reference_date, helper.latest_date)
        assert curve.discount(helper.latest_date) == pytest.approx(1.0 / (1.0 + rate * tau), abs=1e-12)
    assert curve.state == BootstrapState.CONVERGED

    fresh = PiecewiseYieldCurve(reference_date, two_deposits, trait=trait, interpolation=interpolation)
    np.testing.assert_allclose(curve.data(), fresh.data(), atol=1e-12)


def test_failed_run_keeps_previous_curve(reference_date, two_deposits):
    curve = PiecewiseYieldCurve(reference_date, two_deposits)
    good = curve.snapshot()
    good_discount = curve.discount(good.max_date)

    two_deposits[1].quote.set_value(math.nan)
    with pytest.raises(QuoteError):
        curve.discount(0.5)
    assert curve.last_converged is good
    assert good.discount(good.max_date) == good_discount

    two_deposits[1].quote.set_value(0.025)
    assert curve.discount(good.max_date) == pytest.approx(good_discount, abs=1e-10)
    assert curve.state == BootstrapState.CONVERGED


def test_jump_quote_change_triggers_recalculation(reference_date, market_helpers):
    jump = SimpleQuote(0.9995)
    curve = PiecewiseYieldCurve(reference_date, market_helpers, jumps=[jump])
    assert curve.jump_dates == [date(2024, 12, 31)]
    assert_reprices(curve, market_helpers)
    first = curve.data()

    jump.set_value(0.999)
    assert_reprices(curve, market_helpers)
    assert not np.allclose(curve.data(), first)


# ----------------------------------------------------------------------
# Direct use of the bootstrap on a working curve
# ----------------------------------------------------------------------
def test_bootstrap_on_interpolated_curve(reference_date, two_deposits):
    curve = InterpolatedCurve(reference_date, trait="DISCOUNT", interpolation="LOG_LINEAR")
    bootstrap = IterativeBootstrap(BootstrapConfig(verbose=True))
    assert bootstrap.state == BootstrapState.UNINITIALIZED

    report = bootstrap.calculate(curve, two_deposits)
    assert bootstrap.state == BootstrapState.CONVERGED
    assert [n.pillar_date for n in report.nodes] == [h.latest_date for h in two_deposits]
    assert_reprices(curve, two_deposits)

    frame = report.to_frame()
    assert isinstance(frame, pd.DataFrame)
    assert list(frame.index) == [h.latest_date for h in two_deposits]
    assert {"value", "discount_factor", "market_quote", "implied_quote", "error"} <= set(frame.columns)


def test_seed_must_match_node_count(reference_date, two_deposits):
    curve = InterpolatedCurve(reference_date)
    with pytest.raises(ConfigurationError):
        IterativeBootstrap().calculate(curve, two_deposits, seed=[1.0, 0.99])
