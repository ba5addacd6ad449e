"""Benchmark results and their parsing from ``go test`` output."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from benchconductor.functions import Function

CSV_OUTPUT_HEADER = [
    "R-S-I",
    "package.BenchmarkFunction",
    "Version",
    "FileName",
    "Iterations",
    "sec/op",
    "B/op",
    "allocs/op",
]

_BENCHMARK_PREFIX = "Benchmark"


@dataclass(frozen=True)
class BenchmarkLine:
    """One result line of benchmark output."""

    name: str
    iterations: int
    values: dict[str, float] = field(default_factory=dict)


def _tidy(value: float, unit: str) -> tuple[float, str]:
    if unit.startswith("ns/"):
        return value * 1e-9, "sec/" + unit[3:]
    if unit == "MB/s":
        return value * 1e6, "B/s"
    return value, unit


def parse_benchmark_line(line: str) -> Optional[BenchmarkLine]:
    """Parse a benchmark result line.

    Returns ``None`` for lines that are not benchmark results and raises
    :class:`ValueError` for result lines that are malformed. Nanosecond and
    megabyte-per-second units are converted to seconds and bytes.
    """
    line = line.rstrip("\r\n")
    if not line.startswith(_BENCHMARK_PREFIX):
        return None
    rest = line[len(_BENCHMARK_PREFIX):]
    if rest and rest[0].islower():
        return None
    fields = line.split()
    if len(fields) < 2:
        raise ValueError(f"{fields[0]}: missing iteration count")
    try:
        iterations = int(fields[1])
    except ValueError:
        raise ValueError(f"parsing iteration count {fields[1]!r}: invalid syntax") from None
    measurements = fields[2:]
    if len(measurements) % 2:
        raise ValueError(f"{fields[0]}: missing units")
    values: dict[str, float] = {}
    for raw_value, unit in zip(measurements[::2], measurements[1::2]):
        try:
            value = float(raw_value)
        except ValueError:
            raise ValueError(f"parsing measurement {raw_value!r}: invalid syntax") from None
        value, unit = _tidy(value, unit)
        values[unit] = value
    return BenchmarkLine(name=fields[0], iterations=iterations, values=values)


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _format_float32(value: float) -> str:
    """Shortest plain decimal that reads back as the same 32-bit float."""
    if math.isnan(value):
        return "NaN"
    try:
        single = _to_float32(value)
    except OverflowError:
        single = math.inf if value > 0 else -math.inf
    if math.isinf(single):
        return "+Inf" if single > 0 else "-Inf"
    for precision in range(1, 10):
        text = format(single, f".{precision - 1}e")
        if _to_float32(float(text)) == single:
            break
    return format(Decimal(text), "f")


@dataclass(frozen=True)
class Result:
    """The measurements of one benchmark execution."""

    function: Function
    iterations: int
    ops: float
    bytes: float
    allocs: float
    r: int
    s: int
    i: int
    version: int

    @classmethod
    def from_benchmark(
        cls,
        function: Function,
        version: int,
        r: int,
        s: int,
        i: int,
        bench: BenchmarkLine,
    ) -> "Result":
        """Build a result from a parsed benchmark line."""
        return cls(
            function=function,
            iterations=bench.iterations,
            ops=bench.values.get("sec/op", 0.0),
            bytes=bench.values.get("B/op", 0.0),
            allocs=bench.values.get("allocs/op", 0.0),
            r=r,
            s=s,
            i=i,
            version=version,
        )

    def rsi(self) -> str:
        """Run, suite and benchmark index joined with dashes."""
        return f"{self.r}-{self.s}-{self.i}"

    def record(self) -> list[str]:
        """The result as a CSV row matching :data:`CSV_OUTPUT_HEADER`."""
        return [
            self.rsi(),
            f"{self.function.package_name}.{self.function.name}",
            str(self.version),
            self.function.file_name,
            str(self.iterations),
            _format_float32(self.ops),
            _format_float32(self.bytes),
            _format_float32(self.allocs),
        ]


def records(results: Iterable[Result]) -> list[list[str]]:
    """CSV rows for all ``results``."""
    return [result.record() for result in results]