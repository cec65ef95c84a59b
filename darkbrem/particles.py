"""The dark photon (A') particle definition and the lepton masses.

All masses are in MeV.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

ELECTRON_MASS = 0.51099895
"""Electron mass in MeV."""

MUON_MASS = 105.6583755
"""Muon mass in MeV."""

DEFAULT_PDG_ID = 62
"""PDG ID given to the A' unless another is requested."""


class DecayMode(enum.Enum):
    """How decays of the A' are handled."""

    NO_DECAY = 1
    """Stable, never decays (the default)."""

    FLAT_DECAY = 2
    """Decay to e-/e+ at a flight distance drawn uniformly by the model."""

    GEANT_DECAY = 3
    """Decay to e-/e+ with the configured proper lifetime."""


@dataclass(frozen=True)
class APrime:
    """The single dark photon definition shared by the whole run."""

    mass: float
    pdg_id: int = DEFAULT_PDG_ID
    decay_mode: DecayMode = DecayMode.NO_DECAY
    lifetime: float = -1.0
    """Proper lifetime in seconds; -1 when stable, 0 for flat decays."""
    name: str = "A^1"
    long_name: str = "APrime"
    charge: float = 0.0
    width: float = 0.0

    @property
    def stable(self) -> bool:
        """True if the A' never decays."""
        return self.decay_mode is DecayMode.NO_DECAY

    @property
    def decay_channels(self) -> tuple[tuple[float, tuple[str, ...]], ...]:
        """Decay channels as (branching ratio, daughters) pairs."""
        if self.stable:
            return ()
        return ((1.0, ("e-", "e+")),)


class _Registry:
    """Holds the one A' definition of the run."""

    def __init__(self) -> None:
        self.current: APrime | None = None


_registry = _Registry()


def initialize(
    mass: float,
    pdg_id: int = DEFAULT_PDG_ID,
    tau: float = -1.0,
    decay_mode: DecayMode = DecayMode.NO_DECAY,
) -> APrime:
    """Define the A' with the given mass [MeV]; may only be done once.

    Raises RuntimeError if the A' is already defined and ValueError if
    Geant-style decays are requested with a negative lifetime.
    """
    if _registry.current is not None:
        raise RuntimeError(
            "Attempting to initialize the APrime particle more than once."
        )
    if decay_mode is DecayMode.GEANT_DECAY and tau < 0.0:
        raise ValueError(
            "Invalid configuration: DecayMode set to GeantDecay but tau is negative."
        )

    if decay_mode is DecayMode.NO_DECAY:
        lifetime = -1.0
    elif decay_mode is DecayMode.FLAT_DECAY:
        lifetime = 0.0
    else:
        lifetime = tau

    particle = APrime(
        mass=mass, pdg_id=pdg_id, decay_mode=decay_mode, lifetime=lifetime
    )
    _registry.current = particle
    return particle


def aprime() -> APrime:
    """Return the A' definition; RuntimeError if it was never initialized."""
    if _registry.current is None:
        raise RuntimeError(
            "Attempting to access the APrime particle before it has been initialized."
        )
    return _registry.current


def reset() -> None:
    """Forget the current A' definition so that it can be defined again."""
    _registry.current = None


def lepton_mass(muons: bool) -> float:
    """Mass in MeV of the muon if muons is true, of the electron otherwise."""
    return MUON_MASS if muons else ELECTRON_MASS