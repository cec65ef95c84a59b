"""Immutable three-vectors and four-vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ThreeVector:
    """A Cartesian three-vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def mag2(self) -> float:
        """Squared magnitude."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def mag(self) -> float:
        """Magnitude."""
        return math.sqrt(self.mag2())

    def perp(self) -> float:
        """Component transverse to the z axis."""
        return math.hypot(self.x, self.y)

    def phi(self) -> float:
        """Azimuthal angle around the z axis."""
        return math.atan2(self.y, self.x)

    def unit(self) -> ThreeVector:
        """Vector of length one in the same direction (zero stays zero)."""
        length = self.mag()
        if length == 0.0:
            return self
        return self * (1.0 / length)

    @classmethod
    def from_angles(cls, theta: float, phi: float, mag: float) -> ThreeVector:
        """Build from polar angle, azimuthal angle and magnitude."""
        sin_theta = math.sin(theta)
        return cls(
            mag * sin_theta * math.cos(phi),
            mag * sin_theta * math.sin(phi),
            mag * math.cos(theta),
        )

    def __add__(self, other: ThreeVector) -> ThreeVector:
        return ThreeVector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: ThreeVector) -> ThreeVector:
        return ThreeVector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> ThreeVector:
        return ThreeVector(-self.x, -self.y, -self.z)

    def __mul__(self, factor: float) -> ThreeVector:
        return ThreeVector(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__


@dataclass(frozen=True)
class LorentzVector:
    """A four-vector (px, py, pz, e)."""

    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    e: float = 0.0

    def vect(self) -> ThreeVector:
        """Spatial part."""
        return ThreeVector(self.px, self.py, self.pz)

    def perp(self) -> float:
        """Transverse momentum."""
        return math.hypot(self.px, self.py)

    def phi(self) -> float:
        """Azimuthal angle of the momentum."""
        return math.atan2(self.py, self.px)

    def m2(self) -> float:
        """Invariant mass squared."""
        return self.e * self.e - self.vect().mag2()

    def boost_vector(self) -> ThreeVector:
        """Velocity of the frame in which this four-vector is at rest."""
        if self.e == 0.0:
            if self.vect().mag2() != 0.0:
                raise ValueError("boost vector of a zero-energy four-vector")
            return ThreeVector()
        return self.vect() * (1.0 / self.e)

    def boost(self, beta: ThreeVector) -> LorentzVector:
        """Return this four-vector boosted by the velocity beta."""
        b2 = beta.mag2()
        if b2 == 0.0:
            return self
        if b2 >= 1.0:
            raise ValueError("boost velocity must be below the speed of light")
        gamma = 1.0 / math.sqrt(1.0 - b2)
        bp = beta.x * self.px + beta.y * self.py + beta.z * self.pz
        gamma2 = (gamma - 1.0) / b2
        shift = gamma2 * bp + gamma * self.e
        return LorentzVector(
            self.px + shift * beta.x,
            self.py + shift * beta.y,
            self.pz + shift * beta.z,
            gamma * (self.e + bp),
        )

    def with_energy(self, e: float) -> LorentzVector:
        """Same momentum with a different energy."""
        return replace(self, e=e)

    def __add__(self, other: LorentzVector) -> LorentzVector:
        return LorentzVector(
            self.px + other.px, self.py + other.py, self.pz + other.pz, self.e + other.e
        )

    def __sub__(self, other: LorentzVector) -> LorentzVector:
        return LorentzVector(
            self.px - other.px, self.py - other.py, self.pz - other.pz, self.e - other.e
        )