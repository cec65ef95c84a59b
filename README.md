# darkbrem

Tools for a lepton (electron or muon) radiating a dark photon (A') off a
nucleus, the "dark bremsstrahlung" process.

The package has four parts:

- `darkbrem.particles` defines the A' once per run and gives the lepton
  masses.
- `darkbrem.xsec` computes the total cross section per atom in the
  Weizsäcker-Williams approximation.
- `darkbrem.library` reads and writes libraries of dark brem events.
- `darkbrem.sampler` draws events from a loaded library.

It also has small immutable three-vector and four-vector types, in
`darkbrem.vectors`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command-line tool

### `darkbrem-extract-library`

Reads a dark brem event library (a file or a directory of files) and writes
every event into one CSV file.

```
darkbrem-extract-library [-o OUTPUT] [--aprime-id ID] DB-LIB
```

- `-o`, `--output`: the file to write. By default this is the library path
  with a trailing `/` removed and `.csv` appended.
- `--aprime-id`: the A' particle ID used in LHE files. The default is 622.
- `-h`, `--help`: print the usage and exit.

The exit status is:

- 1 for a bad command line;
- 2 if the output file cannot be opened;
- 127 for any other error, such as a malformed library.

## The A' particle

```python
from darkbrem import particles

ap = particles.initialize(100.0)  # mass in MeV
particles.aprime() is ap          # True
particles.lepton_mass(False)      # electron mass in MeV
particles.reset()                 # allow initialize() to be called again
```

`initialize(mass, pdg_id=62, tau=-1.0, decay_mode=DecayMode.NO_DECAY)` raises:

- `RuntimeError` if the A' is already defined;
- `ValueError` if `DecayMode.GEANT_DECAY` is requested with a negative `tau`.

`aprime()` raises `RuntimeError` before `initialize()` has been called.

## Cross sections

```python
from darkbrem.xsec import XsecMethod, cross_section, PICOBARN

xsec_mm2 = cross_section(
    XsecMethod.HYPER_IMPROVED,
    4000.0,      # lepton kinetic energy [MeV]
    183.84,      # atomic A
    74.0,        # atomic Z
    0.1,         # A' mass [GeV]
    0.000511,    # lepton mass [GeV]
    epsilon=1.0,
    threshold=0.0,  # [GeV]
)
xsec_pb = xsec_mm2 / PICOBARN
```

There are three methods:

- `FULL` integrates over x and the emission angle.
- `IMPROVED` neglects the angle.
- `HYPER_IMPROVED` evaluates the flux factor only once.

The result is zero below 1 keV and below the threshold. `XsecMethod.AUTO` is
not accepted by `cross_section`, which raises `ValueError` for it. The caller
chooses between `FULL` and `IMPROVED`.

`flux_factor_chi(atomic_a, atomic_z, tmin, tmax)` and
`integrate(func, low, high)` are available on their own.

## Event libraries

```python
import sys
from darkbrem.library import parse_library, dump_library
from darkbrem.sampler import EventSampler

lib = parse_library("library_dir")  # {target Z: {incident energy: [events]}}
dump_library(sys.stdout, lib)

sampler = EventSampler(lib)
event = sampler.sample(74.0, 4.0)
event.lepton, event.center_momentum, event.incident_energy
```

`EventSampler.sample` works in two steps:

1. It picks the library bin with the closest target Z at or above the one
   requested, and within it the closest incident energy at or above the one
   requested. If there is none above, it takes the largest.
2. It returns the next event of that bin. Each bin starts at a random
   position and wraps around at its end.

`parse_csv(lines, lib)` and `parse_lhe(lines, aprime_lhe_id, lib)` add
events from text lines to an existing library. Malformed files raise
`darkbrem.library.LibraryError`.

### CSV

A CSV library has one header line, followed by rows of ten columns:

1. target Z
2. incident energy
3. recoil energy
4. recoil px
5. recoil py
6. recoil pz
7. centre-of-momentum energy
8. centre-of-momentum px
9. centre-of-momentum py
10. centre-of-momentum pz

Reading stops at the first empty line.

### LHE

LHE files are scanned for an incoming lepton (ID 11 or 13, status -1). Three
lines later comes the outgoing lepton, and three lines after that the outgoing
A'. The target Z is read from the `Znuc` parameter line.

Files may be gzip-compressed. The accepted extensions are:

- `.csv`
- `.csv.gz`
- `.lhe`
- `.lhe.gz`

A directory is read file by file, without entering subdirectories.

## What the package does not do

- It does not scale a sampled library event to a different incident energy to
  produce recoil lepton and A' momenta. `EventSampler` only returns events as
  they are stored.
- It keeps no cache of cross sections and has no interpolation between
  computed cross sections. Every call to `cross_section` integrates afresh.
- It has no command for writing cross-section tables, and no command for
  sampling scaled events. `darkbrem-extract-library` is its only command.
- It does not simulate particles passing through material.