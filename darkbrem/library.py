"""Reading and writing libraries of dark brem events.

A library is a single file or a flat directory of files. Each file is
either CSV or LHE, optionally gzip compressed ('.csv', '.csv.gz', '.lhe',
'.lhe.gz').

A CSV file has one header line and then rows of 10 columns:
target Z, incident energy, recoil energy, recoil px, py, pz, centre of
momentum energy, px, py, pz. Reading stops at the first empty line.

An LHE file provides events of the shape::

    lepton_id -1 <skip> <skip> <skip> <skip> px py pz E m
    <skip-line>
    lepton_id 1 <skip> <skip> <skip> <skip> px py pz E m
    <skip-line>
    aprime_id 1 <skip> <skip> <skip> <skip> px py pz E m

where the lepton id is 11 or 13 and the target Z comes from a preceding
parameter line ``<num> <Z> # Znuc``.

The in-memory library maps target Z to incident energy to a list of
OutgoingKinematics.
"""

from __future__ import annotations

import gzip
import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import IO, TextIO

from darkbrem.vectors import LorentzVector

EXTENSIONS = (".csv", ".csv.gz", ".lhe", ".lhe.gz")
CSV_EXTENSIONS = (".csv", ".csv.gz")
CSV_HEADER = (
    "target_Z,incident_energy,recoil_energy,recoil_px,recoil_py,recoil_pz,"
    "centerMomentum_energy,centerMomentum_px,centerMomentum_py,centerMomentum_pz"
)
MISSING_CELL = -9999.0
"""Value given to an empty cell after a trailing comma in a CSV row."""

DEFAULT_APRIME_LHE_ID = 622
LEPTON_IDS = (11, 13)


class LibraryError(ValueError):
    """A library file has contents that cannot be understood."""


@dataclass(frozen=True)
class OutgoingKinematics:
    """One dark brem event from a library."""

    lepton: LorentzVector
    """Four-momentum of the recoil lepton."""
    center_momentum: LorentzVector
    """Four-momentum of the recoil lepton plus the A'."""
    incident_energy: float
    """Energy of the lepton before the brem."""


Library = dict[int, dict[float, list[OutgoingKinematics]]]


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")


def _add(lib: Library, target_z: int, event: OutgoingKinematics) -> None:
    lib.setdefault(target_z, {}).setdefault(event.incident_energy, []).append(event)


def _particle_fields(line: str, count: int) -> tuple[int, int, list[float]] | None:
    """Read id, status and the momentum numbers after four skipped columns."""
    tokens = line.split()
    if len(tokens) < count:
        return None
    try:
        ptype = int(tokens[0])
        state = int(tokens[1])
        numbers = [float(token) for token in tokens[2:count]]
    except ValueError:
        return None
    return ptype, state, numbers[4:]


def _target_z(line: str) -> int:
    tokens = line.split()
    try:
        int(tokens[0])
        znuc = float(tokens[1])
    except (IndexError, ValueError):
        raise LibraryError(f"Unable to deduce target Z from line '{line}'.") from None
    return int(znuc)


def _skip_to(lines, count: int) -> str:
    line = ""
    for _ in range(count):
        line = next(lines, "")
    return _strip_eol(line)


def parse_lhe(lines: Iterable[str], aprime_lhe_id: int, lib: Library) -> None:
    """Add the dark brem events of LHE text lines to lib."""
    stream = iter(lines)
    target_z = -1
    for raw in stream:
        line = _strip_eol(raw)
        if "Znuc" in line:
            target_z = _target_z(line)
            continue

        incident = _particle_fields(line, 11)
        if incident is None:
            continue
        ptype, state, numbers = incident
        if ptype not in LEPTON_IDS or state != -1:
            continue
        incident_energy = numbers[3]

        recoil = _particle_fields(_skip_to(stream, 2), 10)
        if recoil is None or recoil[0] not in LEPTON_IDS or recoil[1] != 1:
            continue
        dark_photon = _particle_fields(_skip_to(stream, 2), 10)
        if dark_photon is None or dark_photon[0] != aprime_lhe_id or dark_photon[1] != 1:
            continue

        lepton = LorentzVector(*recoil[2])
        produced = LorentzVector(*dark_photon[2])
        if target_z < 0:
            raise LibraryError(
                "Did not deduce target Z before starting to deduce events."
            )
        _add(
            lib,
            target_z,
            OutgoingKinematics(lepton, lepton + produced, incident_energy),
        )


def _csv_values(line: str) -> list[float]:
    cells = line.split(",")
    trailing_empty = cells[-1] == "" and len(cells) > 1
    if trailing_empty:
        cells = cells[:-1]
    try:
        values = [float(cell) for cell in cells]
    except ValueError:
        raise LibraryError(f"Malformed value in CSV row '{line}'.") from None
    if trailing_empty:
        values.append(MISSING_CELL)
    return values


def parse_csv(lines: Iterable[str], lib: Library) -> None:
    """Add the events of CSV text lines (header first) to lib."""
    stream = iter(lines)
    if next(stream, None) is None:
        raise LibraryError("Empty CSV file.")
    for raw in stream:
        line = _strip_eol(raw)
        if not line:
            break
        values = _csv_values(line)
        if len(values) != 10:
            raise LibraryError("Malformed row in CSV file: not exactly 10 columns")
        event = OutgoingKinematics(
            lepton=LorentzVector(values[3], values[4], values[5], values[2]),
            center_momentum=LorentzVector(values[7], values[8], values[9], values[6]),
            incident_energy=values[1],
        )
        _add(lib, int(values[0]), event)


def _open_text(path: str) -> IO[str]:
    if path.endswith(".gz"):
        return gzip.open(path, "rt", encoding="utf-8")
    return open(path, encoding="utf-8")


def _parse_into(path: str, aprime_lhe_id: int, lib: Library) -> None:
    if path.endswith(EXTENSIONS):
        with _open_text(path) as reader:
            if path.endswith(CSV_EXTENSIONS):
                parse_csv(reader, lib)
            else:
                parse_lhe(reader, aprime_lhe_id, lib)
        return

    if not os.path.isdir(path):
        raise NotADirectoryError(f"Unable to open '{path}' as a directory.")
    for name in sorted(os.listdir(path)):
        entry = os.path.join(path, name)
        if entry.endswith(EXTENSIONS):
            _parse_into(entry, aprime_lhe_id, lib)


def parse_library(
    path: str | os.PathLike[str], aprime_lhe_id: int = DEFAULT_APRIME_LHE_ID
) -> Library:
    """Load a library file or flat directory of library files."""
    lib: Library = {}
    _parse_into(os.fspath(path), aprime_lhe_id, lib)
    return lib


def _fmt(value: float) -> str:
    return f"{value:g}"


def dump_library(out: TextIO, lib: Library) -> None:
    """Write lib as CSV in the layout that parse_csv reads."""
    out.write(CSV_HEADER + "\n")
    for target_z in sorted(lib):
        by_energy = lib[target_z]
        for energy in sorted(by_energy):
            for event in by_energy[energy]:
                numbers = (
                    event.incident_energy,
                    event.lepton.e,
                    event.lepton.px,
                    event.lepton.py,
                    event.lepton.pz,
                    event.center_momentum.e,
                    event.center_momentum.px,
                    event.center_momentum.py,
                    event.center_momentum.pz,
                )
                out.write(",".join([str(target_z), *map(_fmt, numbers)]) + "\n")
    out.flush()