"""Encoding benchmark results as JSON lines or CSV rows."""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Mapping, Optional, Sequence, Union

from benchconductor.functions import Function
from benchconductor.results import CSV_OUTPUT_HEADER, Result

Parameters = Mapping[str, Union[str, Sequence[str]]]


def parameter(parameters: Optional[Parameters], key: str) -> str:
    """Return the first value given for ``key``, or an empty string."""
    if not parameters:
        return ""
    value = parameters.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value[0] if value else ""


class ResultEncoder(ABC):
    """Turns a result into the bytes written to an output."""

    @abstractmethod
    def encode(self, result: Result) -> bytes:
        """Return the encoded form of ``result``."""


def _json_string(value: str) -> str:
    text = json.dumps(value, ensure_ascii=False)
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def _json_float(value: float) -> str:
    if not math.isfinite(value):
        raise ValueError(f"json: unsupported value: {value}")
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        mantissa, _, exponent = repr(value).partition("e")
        exp = int(exponent)
        if exp < 0:
            return f"{mantissa}e-{-exp}"
        return f"{mantissa}e+{exp:02d}"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _json_function(function: Function) -> str:
    return (
        "{"
        f'"Name":{_json_string(function.name)},'
        f'"FileName":{_json_string(function.file_name)},'
        f'"PackageName":{_json_string(function.package_name)},'
        f'"RootDirectory":{_json_string(function.root_directory)}'
        "}"
    )


class JSONResultEncoder(ResultEncoder):
    """Encodes each result as one JSON object followed by a newline."""

    def encode(self, result: Result) -> bytes:
        """Return ``result`` as a JSON line."""
        text = (
            "{"
            f'"Function":{_json_function(result.function)},'
            f'"Iterations":{result.iterations},'
            f'"Ops":{_json_float(result.ops)},'
            f'"Bytes":{_json_float(result.bytes)},'
            f'"Allocs":{_json_float(result.allocs)},'
            f'"R":{result.r},'
            f'"S":{result.s},'
            f'"I":{result.i},'
            f'"Version":{result.version}'
            "}\n"
        )
        return text.encode("utf-8")


def _csv_field(field: str) -> str:
    if field == "":
        return field
    needs_quotes = (
        field == "\\."
        or any(char in field for char in ',"\r\n')
        or field[0].isspace()
    )
    if not needs_quotes:
        return field
    return '"' + field.replace('"', '""') + '"'


def _csv_row(fields: Sequence[str]) -> str:
    return ",".join(_csv_field(field) for field in fields) + "\n"


class CSVResultEncoder(ResultEncoder):
    """Encodes results as CSV rows, preceded once by a header row."""

    def __init__(self, write_header: bool = True) -> None:
        self._header_written = not write_header

    def encode(self, result: Result) -> bytes:
        """Return the CSV row of ``result``, with the header on first use."""
        text = ""
        if not self._header_written:
            text += _csv_row(CSV_OUTPUT_HEADER)
            self._header_written = True
        text += _csv_row(result.record())
        return text.encode("utf-8")


def new_encoder(output_type: str, parameters: Optional[Parameters] = None) -> ResultEncoder:
    """Return an encoder for ``output_type`` (``json`` or ``csv``).

    For CSV the parameter ``no-csv-header=true`` suppresses the header row.
    """
    if output_type == "json":
        return JSONResultEncoder()
    if output_type == "csv":
        return CSVResultEncoder(write_header=parameter(parameters, "no-csv-header") != "true")
    raise ValueError(f"unsupported output type: {output_type}")