"""Total dark brem cross sections in the Weizsacker-Williams approximation.

Energies given to cross_section are MeV for the lepton kinetic energy and
GeV for the masses and the threshold; the result is an area in mm^2.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable

from scipy.integrate import quad

GEV = 1000.0
"""One GeV in MeV."""

KEV = 1.0e-3
"""One keV in MeV."""

PICOBARN = 1.0e-34
"""One picobarn in mm^2."""

GEV_TO_PB = 3.894e08
"""Conversion from GeV^-2 to picobarns."""

ALPHA_EW = 1.0 / 137.0
THETA_MAX = 0.3
"""Largest A' emission angle integrated over by the full method."""

_PROTON_FACTOR = (2.79 * 2.79 - 1) / (4 * 0.938 * 0.938)
_ELECTRON_MASS_GEV = 0.000511
_INELASTIC_D = 0.71
_MAX_SUBINTERVALS = 32
_RELATIVE_TOLERANCE = 1e-9


class XsecMethod(enum.Enum):
    """How the total cross section is calculated."""

    FULL = 1
    """Integrate over x and theta, evaluating chi at every point."""

    IMPROVED = 2
    """Neglect theta in the integrand; integrate over x with chi(x, 0)."""

    HYPER_IMPROVED = 3
    """Evaluate chi once and integrate dsigma/dx over x."""

    AUTO = 4
    """Full or Improved, picked from the A' to lepton mass ratio."""


def integrate(func: Callable[[float], float], low: float, high: float) -> float:
    """Adaptive Gauss-Kronrod integral of func from low to high."""
    result = quad(
        func,
        low,
        high,
        epsabs=0.0,
        epsrel=_RELATIVE_TOLERANCE,
        limit=_MAX_SUBINTERVALS,
        full_output=1,
    )
    return float(result[0])


def flux_factor_chi(
    atomic_a: float, atomic_z: float, tmin: float, tmax: float
) -> float:
    """Photon flux factor chi from elastic and inelastic form factors.

    The integral over t is done in ln(t) since the integrand peaks
    sharply close to tmin; tmin must be positive.
    """
    ael = 111.0 * atomic_z ** (-1.0 / 3.0) / _ELECTRON_MASS_GEV
    del_ = 0.164 * atomic_a ** (-2.0 / 3.0)
    ain = 773.0 * atomic_z ** (-2.0 / 3.0) / _ELECTRON_MASS_GEV
    ael_inv2 = ael**-2
    ain_inv2 = ain**-2

    def integrand(lnt: float) -> float:
        t = math.exp(lnt)
        ael_factor = 1.0 / (ael_inv2 + t)
        del_factor = 1.0 / (1.0 + t / del_)
        ain_factor = 1.0 / (ain_inv2 + t)
        din_factor = 1.0 / (1.0 + t / _INELASTIC_D)
        nucl = 1.0 + t * _PROTON_FACTOR
        elastic = (ael_factor * del_factor * atomic_z) ** 2
        inelastic = atomic_z * ain_factor**2 * nucl * din_factor**4
        return (elastic + inelastic) * (t - tmin) * t

    return integrate(integrand, math.log(tmin), math.log(tmax))


def _full(a, z, lepton_e, ma, ml, epsilon, xmax):
    ma2 = ma * ma
    ml2 = ml * ml
    e2 = lepton_e * lepton_e
    prefactor = 2.0 * epsilon**2 * ALPHA_EW**3

    def diff_cross(x: float, theta: float) -> float:
        if x * lepton_e < ma:
            return 0.0
        x2 = x * x
        utilde = -x * e2 * theta * theta - ma2 * (1.0 - x) / x - ml2 * x
        utilde2 = utilde * utilde
        tmin = utilde2 / (4.0 * e2 * (1.0 - x) * (1.0 - x))
        tmax = e2
        if tmin < 0 or tmax < tmin:
            return 0.0
        chi = flux_factor_chi(a, z, tmin, tmax)
        factor1 = 2.0 * (2.0 - 2.0 * x + x2) / (1.0 - x)
        factor2 = 4.0 * (ma2 + 2.0 * ml2) / utilde2
        factor3 = utilde * x + ma2 * (1.0 - x) + ml2 * x2
        amplitude2 = factor1 + factor2 * factor3
        return (
            prefactor
            * math.sqrt(x2 * e2 - ma2)
            * lepton_e
            * (1.0 - x)
            * (chi / utilde2)
            * amplitude2
            * math.sin(theta)
        )

    return integrate(
        lambda x: integrate(lambda theta: diff_cross(x, theta), 0.0, THETA_MAX),
        0.0,
        xmax,
    )


def _improved(a, z, lepton_e, ma, ml, epsilon, xmax):
    ma2 = ma * ma
    ml2 = ml * ml
    e2 = lepton_e * lepton_e
    prefactor = 4.0 * epsilon**2 * ALPHA_EW**3

    def dsigma_dx(x: float) -> float:
        if x * lepton_e < ma:
            return 0.0
        utilde = -ma2 * (1.0 - x) / x - ml2 * x
        utilde2 = utilde * utilde
        tmin = utilde2 / (4.0 * e2 * (1.0 - x) * (1.0 - x))
        tmax = e2
        if tmin < 0 or tmax < tmin:
            return 0.0
        chi = flux_factor_chi(a, z, tmin, tmax)
        beta = math.sqrt(1.0 - ma2 / e2)
        nume = 1.0 - x + x * x / 3.0
        deno = ma2 * (1.0 - x) / x + ml2
        return prefactor * chi * beta * nume / deno

    return integrate(dsigma_dx, 0.0, xmax)


def _hyper_improved(a, z, lepton_e, ma, ml, epsilon, xmax):
    ma2 = ma * ma
    ml2 = ml * ml
    e2 = lepton_e * lepton_e
    chi = flux_factor_chi(a, z, ma2 * ma2 / (4.0 * e2), ma2 + ml2)
    prefactor = 4.0 * epsilon**2 * ALPHA_EW**3 * chi

    def dsigma_dx(x: float) -> float:
        if x * lepton_e < ma:
            return 0.0
        beta = math.sqrt(1.0 - ma2 / e2)
        nume = 1.0 - x + x * x / 3.0
        deno = ma2 * (1.0 - x) / x + ml2
        return prefactor * beta * nume / deno

    return integrate(dsigma_dx, 0.0, xmax)


_METHODS = {
    XsecMethod.FULL: _full,
    XsecMethod.IMPROVED: _improved,
    XsecMethod.HYPER_IMPROVED: _hyper_improved,
}


def cross_section(
    method: XsecMethod,
    lepton_ke: float,
    atomic_a: float,
    atomic_z: float,
    aprime_mass: float,
    lepton_mass: float,
    epsilon: float = 1.0,
    threshold: float = 0.0,
) -> float:
    """Dark brem cross section per atom [mm^2].

    lepton_ke is in MeV; aprime_mass, lepton_mass and threshold in GeV.
    Zero below 1 keV or below the threshold. XsecMethod.AUTO must be
    resolved by the caller; passing it raises ValueError.
    """
    try:
        calculate = _METHODS[method]
    except KeyError:
        raise ValueError(
            f"Unrecognized XsecMethod {method!r}, should be Full, Improved or "
            "HyperImproved."
        ) from None

    if lepton_ke < KEV or lepton_ke < threshold * GEV:
        return 0.0

    lepton_e = lepton_ke / GEV + lepton_mass
    xmax = 1.0 - max(lepton_mass, aprime_mass) / lepton_e
    integrated = calculate(
        atomic_a, atomic_z, lepton_e, aprime_mass, lepton_mass, epsilon, xmax
    )
    cross = integrated * GEV_TO_PB * PICOBARN
    return max(cross, 0.0)