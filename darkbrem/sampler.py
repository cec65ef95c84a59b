"""Drawing events from an in-memory library of dark brem events."""

from __future__ import annotations

import random
from typing import Protocol

from darkbrem.library import Library, OutgoingKinematics

MAX_ITERATIONS = 10000
"""Upper bound on the number of events to try before giving up on one."""


class _RandomSource(Protocol):
    def random(self) -> float: ...


class EventSampler:
    """Cycles through the events of a library, one energy bin at a time.

    Each (target Z, incident energy) bin starts at a random position and
    then walks through its events in order, wrapping around at the end,
    so that a run does not depend on the order of events in the files.
    """

    def __init__(self, library: Library, rng: _RandomSource | None = None) -> None:
        self.library = library
        self.rng = rng if rng is not None else random.Random()
        self.max_iterations = MAX_ITERATIONS
        """Smallest bin size in the library, at most MAX_ITERATIONS."""
        self._positions: dict[int, dict[float, int]] = {}
        self.make_placeholders()

    def make_placeholders(self) -> None:
        """Pick a random starting event for every bin of the library."""
        self._positions = {}
        self.max_iterations = MAX_ITERATIONS
        for target_z, by_energy in self.library.items():
            for energy, events in by_energy.items():
                start = int(self.rng.random() * len(events))
                self._positions.setdefault(target_z, {})[energy] = start
                self.max_iterations = min(self.max_iterations, len(events))

    @staticmethod
    def _closest_above(keys, value):
        """The smallest key not below value, or the largest key."""
        chosen = None
        for key in sorted(keys):
            chosen = key
            if value <= key:
                break
        return chosen

    def sample(self, target_z: float, incident_energy: float) -> OutgoingKinematics:
        """Next event from the bin closest above target_z and incident_energy.

        Raises LookupError if the library holds no bins to sample from.
        """
        sampling_z = self._closest_above(self._positions, target_z)
        if sampling_z is None:
            raise LookupError("The event library holds no target Z to sample from.")
        positions = self._positions[sampling_z]
        sampling_e = self._closest_above(positions, incident_energy)
        if sampling_e is None:
            raise LookupError(
                f"The event library holds no incident energies for Z = {sampling_z}."
            )

        events = self.library[sampling_z][sampling_e]
        if not events:
            raise IndexError(
                f"The event library bin Z = {sampling_z}, E = {sampling_e} is empty."
            )
        index = positions[sampling_e]
        if index >= len(events):
            index = 0
        positions[sampling_e] = index + 1
        return events[index]