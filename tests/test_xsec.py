import math

import pytest

from darkbrem.particles import ELECTRON_MASS, MUON_MASS
from darkbrem.xsec import (
    GEV,
    PICOBARN,
    XsecMethod,
    cross_section,
    flux_factor_chi,
    integrate,
)

ELECTRON_GEV = ELECTRON_MASS / GEV
MUON_GEV = MUON_MASS / GEV
TUNGSTEN = (183.84, 74.0)
CARBON = (12.0, 6.0)


def test_integrate_sine_over_half_period():
    assert integrate(math.sin, 0.0, math.pi) == pytest.approx(2.0, rel=1e-9)


def test_integrate_exponential():
    assert integrate(math.exp, 0.0, 1.0) == pytest.approx(math.e - 1.0, rel=1e-9)


def test_integrate_reversed_limits_flip_sign():
    forward = integrate(lambda x: x * x + 1.0, 0.5, 2.0)
    backward = integrate(lambda x: x * x + 1.0, 2.0, 0.5)
    assert backward == pytest.approx(-forward)


def test_integrate_empty_range_is_zero():
    assert integrate(math.cos, 1.0, 1.0) == 0.0


def test_flux_factor_zero_on_empty_range():
    assert flux_factor_chi(*TUNGSTEN, 1e-6, 1e-6) == 0.0


def test_flux_factor_positive():
    assert flux_factor_chi(*TUNGSTEN, 1e-8, 16.0) > 0.0


def test_flux_factor_grows_with_upper_limit():
    low = flux_factor_chi(*TUNGSTEN, 1e-8, 1e-3)
    high = flux_factor_chi(*TUNGSTEN, 1e-8, 1.0)
    assert high > low


def test_flux_factor_grows_with_nucleus_charge():
    light = flux_factor_chi(*CARBON, 1e-8, 1.0)
    heavy = flux_factor_chi(*TUNGSTEN, 1e-8, 1.0)
    assert heavy > light


def test_flux_factor_rejects_non_positive_tmin():
    with pytest.raises(ValueError):
        flux_factor_chi(*TUNGSTEN, 0.0, 1.0)


def test_auto_method_must_be_resolved_first():
    with pytest.raises(ValueError):
        cross_section(XsecMethod.AUTO, 4000.0, *TUNGSTEN, 0.1, ELECTRON_GEV)


@pytest.mark.parametrize("method", list(XsecMethod)[:3])
def test_zero_below_one_kev(method):
    assert cross_section(method, 0.5e-3, *TUNGSTEN, 0.1, ELECTRON_GEV) == 0.0


@pytest.mark.parametrize("method", list(XsecMethod)[:3])
def test_zero_below_threshold(method):
    value = cross_section(
        method, 4000.0, *TUNGSTEN, 0.1, ELECTRON_GEV, epsilon=1.0, threshold=5.0
    )
    assert value == 0.0


def test_full_zero_when_lepton_cannot_make_aprime():
    value = cross_section(XsecMethod.FULL, 50.0, *TUNGSTEN, 0.1, ELECTRON_GEV)
    assert value == 0.0


@pytest.mark.parametrize("method", [XsecMethod.IMPROVED, XsecMethod.HYPER_IMPROVED])
def test_electron_on_tungsten_is_positive(method):
    value = cross_section(method, 4000.0, *TUNGSTEN, 0.1, ELECTRON_GEV)
    assert value > 0.0
    assert math.isfinite(value / PICOBARN)


@pytest.mark.parametrize("method", [XsecMethod.IMPROVED, XsecMethod.HYPER_IMPROVED])
def test_scales_with_epsilon_squared(method):
    unit = cross_section(method, 4000.0, *TUNGSTEN, 0.1, ELECTRON_GEV, epsilon=1.0)
    half = cross_section(method, 4000.0, *TUNGSTEN, 0.1, ELECTRON_GEV, epsilon=0.5)
    assert half == pytest.approx(unit * 0.25, rel=1e-12)


def test_heavier_nucleus_gives_larger_cross_section():
    light = cross_section(XsecMethod.IMPROVED, 4000.0, *CARBON, 0.1, ELECTRON_GEV)
    heavy = cross_section(XsecMethod.IMPROVED, 4000.0, *TUNGSTEN, 0.1, ELECTRON_GEV)
    assert heavy > light > 0.0


def test_muons_positive_with_hyper_improved():
    value = cross_section(
        XsecMethod.HYPER_IMPROVED, 100000.0, 63.546, 29.0, 1.0, MUON_GEV
    )
    assert value > 0.0