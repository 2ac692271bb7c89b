"""Reading and writing matrices in the Matrix Market exchange format."""

from __future__ import annotations

import enum
import re
import sys
from contextlib import nullcontext
from dataclasses import dataclass
from itertools import islice
from typing import IO, ContextManager, Iterator, Sequence

BANNER = "%%MatrixMarket"

_INT = re.compile(r"\s*([+-]?\d+)")


class MatrixMarketError(Exception):
    """Base class for Matrix Market reading and writing failures."""

    code = 0


class CouldNotReadFileError(MatrixMarketError):
    """The input file could not be opened."""

    code = 11


class PrematureEOFError(MatrixMarketError):
    """The input ended, or stopped matching the format, too early."""

    code = 12


class NoHeaderError(MatrixMarketError):
    """The first line does not carry the Matrix Market banner."""

    code = 14


class UnsupportedTypeError(MatrixMarketError):
    """The matrix type is not recognised or not handled here."""

    code = 15


class CouldNotWriteFileError(MatrixMarketError):
    """The output could not be opened or written."""

    code = 17


class Storage(enum.Enum):
    """Sparse (coordinate) or dense (array) storage."""

    COORDINATE = "coordinate"
    ARRAY = "array"


class Field(enum.Enum):
    """Type of the matrix entries."""

    REAL = "real"
    COMPLEX = "complex"
    PATTERN = "pattern"
    INTEGER = "integer"


class Symmetry(enum.Enum):
    """Storage scheme with respect to symmetry."""

    GENERAL = "general"
    SYMMETRIC = "symmetric"
    HERMITIAN = "hermitian"
    SKEW = "skew-symmetric"


@dataclass(frozen=True)
class Typecode:
    """Description of a Matrix Market file as given by its banner."""

    matrix: bool = False
    storage: Storage | None = None
    field: Field | None = None
    symmetry: Symmetry = Symmetry.GENERAL

    def is_valid(self) -> bool:
        """Whether the combination of properties is allowed by the format."""
        if not self.matrix:
            return False
        if self.storage is Storage.ARRAY and self.field is Field.PATTERN:
            return False
        if self.field is Field.REAL and self.symmetry is Symmetry.HERMITIAN:
            return False
        if self.field is Field.PATTERN and self.symmetry in (Symmetry.HERMITIAN, Symmetry.SKEW):
            return False
        return True

    def __str__(self) -> str:
        if not self.matrix or self.storage is None or self.field is None:
            raise UnsupportedTypeError("typecode is incomplete")
        return f"matrix {self.storage.value} {self.field.value} {self.symmetry.value}"


def _tokens(stream: IO[str]) -> Iterator[str]:
    for line in iter(stream.readline, ""):
        yield from line.split()


def _leading_ints(line: str, count: int) -> list[int]:
    values: list[int] = []
    pos = 0
    for _ in range(count):
        match = _INT.match(line, pos)
        if match is None:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values


def _parse(enum_type, word: str):
    try:
        return enum_type(word)
    except ValueError:
        raise UnsupportedTypeError(f"unsupported {enum_type.__name__.lower()}: {word!r}") from None


def read_banner(stream: IO[str]) -> Typecode:
    """Read the banner line and return the typecode it describes."""
    line = stream.readline()
    if not line:
        raise PrematureEOFError("missing banner line")
    words = line.split()
    if len(words) < 5:
        raise PrematureEOFError("incomplete banner line")
    banner, mtx, crd, data_type, scheme = (words[0], *(w.lower() for w in words[1:5]))
    if not banner.startswith(BANNER):
        raise NoHeaderError(f"expected {BANNER!r} banner")
    if mtx != "matrix":
        raise UnsupportedTypeError(f"unsupported object: {mtx!r}")
    return Typecode(
        matrix=True,
        storage=_parse(Storage, crd),
        field=_parse(Field, data_type),
        symmetry=_parse(Symmetry, scheme),
    )


def _read_size(stream: IO[str], count: int) -> tuple[int, ...]:
    while True:
        line = stream.readline()
        if not line:
            raise PrematureEOFError("missing size line")
        if not line.startswith("%"):
            break
    values = _leading_ints(line, count)
    if len(values) == count:
        return tuple(values)
    words = list(islice(_tokens(stream), count))
    if len(words) < count:
        raise PrematureEOFError("missing size line")
    try:
        return tuple(int(word) for word in words)
    except ValueError:
        raise MatrixMarketError(f"could not parse matrix size from {words!r}") from None


def read_crd_size(stream: IO[str]) -> tuple[int, int, int]:
    """Skip comments and read the rows, columns and entry count of a sparse matrix."""
    m, n, nz = _read_size(stream, 3)
    return m, n, nz


def read_array_size(stream: IO[str]) -> tuple[int, int]:
    """Skip comments and read the rows and columns of a dense matrix."""
    m, n = _read_size(stream, 2)
    return m, n


_ENTRY_WIDTH = {Field.COMPLEX: 4, Field.REAL: 3, Field.PATTERN: 2}


def _read_entry(tokens: Iterator[str], field: Field | None):
    width = _ENTRY_WIDTH.get(field)
    if width is None:
        raise UnsupportedTypeError(f"cannot read entries of type {field}")
    words = list(islice(tokens, width))
    if len(words) < width:
        raise PrematureEOFError("input ended inside the matrix entries")
    try:
        row, col = int(words[0]), int(words[1])
        if field is Field.COMPLEX:
            value = complex(float(words[2]), float(words[3]))
        elif field is Field.REAL:
            value = float(words[2])
        else:
            value = None
    except ValueError:
        raise PrematureEOFError(f"malformed matrix entry {words!r}") from None
    return row, col, value


def read_crd_data(stream: IO[str], nz: int, typecode: Typecode):
    """Read nz coordinate entries; indices stay 1-based, values are None for patterns."""
    if typecode.field not in _ENTRY_WIDTH:
        raise UnsupportedTypeError(f"cannot read entries of type {typecode.field}")
    tokens = _tokens(stream)
    entries = [_read_entry(tokens, typecode.field) for _ in range(nz)]
    rows = [entry[0] for entry in entries]
    cols = [entry[1] for entry in entries]
    values = None if typecode.field is Field.PATTERN else [entry[2] for entry in entries]
    return rows, cols, values


def read_crd_entry(stream: IO[str], typecode: Typecode):
    """Read a single coordinate entry as (row, col, value)."""
    return _read_entry(_tokens(stream), typecode.field)


def _open_for_read(path) -> ContextManager[IO[str]]:
    if path == "stdin":
        return nullcontext(sys.stdin)
    try:
        return open(path, encoding="utf-8")
    except OSError as exc:
        raise CouldNotReadFileError(f"could not read {path}") from exc


def read_mtx_crd(path):
    """Read a sparse matrix file as (m, n, rows, cols, values, typecode)."""
    with _open_for_read(path) as stream:
        typecode = read_banner(stream)
        if not (typecode.is_valid() and typecode.storage is Storage.COORDINATE):
            raise UnsupportedTypeError(f"unsupported matrix type: {typecode}")
        m, n, nz = read_crd_size(stream)
        rows, cols, values = read_crd_data(stream, nz, typecode)
    return m, n, rows, cols, values, typecode


def read_unsymmetric_sparse(path):
    """Read a real sparse matrix as (m, n, rows, cols, values) with 0-based indices."""
    try:
        stream = open(path, encoding="utf-8")
    except OSError as exc:
        raise CouldNotReadFileError(f"could not read {path}") from exc
    with stream:
        typecode = read_banner(stream)
        if not (
            typecode.field is Field.REAL
            and typecode.matrix
            and typecode.storage is Storage.COORDINATE
        ):
            raise UnsupportedTypeError(f"unsupported matrix type: {typecode}")
        m, n, nz = read_crd_size(stream)
        rows, cols, values = read_crd_data(stream, nz, typecode)
    return m, n, [r - 1 for r in rows], [c - 1 for c in cols], values


def _write(stream: IO[str], text: str) -> None:
    try:
        stream.write(text)
    except OSError as exc:
        raise CouldNotWriteFileError("could not write output") from exc


def write_banner(stream: IO[str], typecode: Typecode) -> None:
    """Write the banner line for the typecode."""
    _write(stream, f"{BANNER} {typecode}\n")


def write_crd_size(stream: IO[str], m: int, n: int, nz: int) -> None:
    """Write the size line of a sparse matrix."""
    _write(stream, f"{m} {n} {nz}\n")


def write_array_size(stream: IO[str], m: int, n: int) -> None:
    """Write the size line of a dense matrix."""
    _write(stream, f"{m} {n}\n")


def _open_for_write(path) -> ContextManager[IO[str]]:
    if path == "stdout":
        return nullcontext(sys.stdout)
    try:
        return open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise CouldNotWriteFileError(f"could not write {path}") from exc


def write_mtx_crd(
    path,
    m: int,
    n: int,
    rows: Sequence[int],
    cols: Sequence[int],
    values: Sequence | None,
    typecode: Typecode,
) -> None:
    """Write a sparse matrix file; indices are written as given."""
    header = f"{BANNER} {typecode}\n"
    with _open_for_write(path) as stream:
        _write(stream, header)
        write_crd_size(stream, m, n, len(rows))
        if typecode.field is Field.PATTERN:
            lines = (f"{i} {j}\n" for i, j in zip(rows, cols))
        elif typecode.field is Field.REAL:
            lines = ("%d %d %20.16g\n" % (i, j, v) for i, j, v in zip(rows, cols, values))
        elif typecode.field is Field.COMPLEX:
            lines = (
                "%d %d %20.16g %20.16g\n" % (i, j, complex(v).real, complex(v).imag)
                for i, j, v in zip(rows, cols, values)
            )
        else:
            raise UnsupportedTypeError(f"cannot write entries of type {typecode.field}")
        _write(stream, "".join(lines))