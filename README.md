# pxlkit

Building blocks for high-energy-physics analyses.

## Modules

- `pxlkit.variant`: `Variant`, a value stored together with its `VariantType`
  (bool, 8/16/32/64-bit signed and unsigned integers, float, double, string,
  vector of variants, or an arbitrary object). Integers wrap to their width,
  floats are rounded to single precision. `Variant.to()` converts between
  scalar types and strings, `Variant.from_string()` parses text into a given
  type, and `BadConversion` is raised when a value cannot be read as the
  requested type.
- `pxlkit.user_record`: `UserRecords`, a mapping of string keys to `Variant`
  values that iterates in key order, with `set`, `get`, `find`, `has`,
  `change` (same type only), `erase`, `clear`, `copy` and `to_string`.
  `UserRecordHelper` is a mix-in giving an object its own records through
  `set_user_record`, `get_user_record`, `has_user_record` and
  `erase_user_record`.
- `pxlkit.logs`: `LogLevel`, the `LogHandler` interface, a
  `ConsoleLogHandler` that writes to a stream (optionally coloured, optionally
  limited to certain modules), a `LogDispatcher` with one shared `instance()`,
  and a `Logger` bound to a module name.
- `pxlkit.weak_ptr`: `WeakPtr`, a non-owning reference that becomes invalid
  when its target is garbage-collected; `access()` raises `ReferenceError`
  then.
- `pxlkit.sftp_file`: `SftpFile`, a remote file opened from an address of the
  form `ssh://[user@]host[:port]/path` over SFTP, authenticated through the
  SSH agent. The path is relative to the login directory. `parse_url` splits
  such an address into an `SftpUrl`; `OpenMode` selects reading, writing or
  overwriting; failures raise `SftpError`.
- `pxlkit.vertex`: `Vertex`, a named point in space with user records.
- `pxlkit.particle`: `Particle`, a named four-vector (px, py, pz, E) with
  charge, PDG number and user records; derived quantities such as `pt`, `eta`,
  `phi`, `mass`, and Lorentz boosts.
- `pxlkit.particle_filter`: `ParticlePtCriterion`,
  `ParticlePtEtaNameCriterion`, `pt_descending` and `filter_particles`, which
  selects particles and sorts them by transverse momentum, highest first.

## Installation

```
pip install pxlkit
```

## Examples

```python
from pxlkit.particle import Particle
from pxlkit.particle_filter import ParticlePtCriterion, filter_particles

muons = [
    Particle(10.0, 0.0, 5.0, 12.0, charge=-1, pdg_number=13, name="muon"),
    Particle(3.0, 4.0, 1.0, 6.0, charge=1, pdg_number=-13, name="muon"),
]
hard = filter_particles(muons, ParticlePtCriterion(6.0))  # only the first muon
```

```python
from pxlkit.user_record import UserRecords

records = UserRecords()
records.set("weight", 0.5)
records.get("weight").value  # 0.5
```

```python
from pxlkit.sftp_file import OpenMode, SftpFile

with SftpFile("ssh://user@localhost/data/events.pxlio", OpenMode.READ) as f:
    header = f.read(4)
```

## What it does not do

There is no event container, no reading or writing of event files, and no
binary serialization of variants, records, particles or vertices. The package
has no command-line tool; it is used as a library.

## Running the tests

```
pip install -e .[test]
pytest
```