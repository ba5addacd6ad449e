import csv
import io
import json

import pytest

from benchconductor.encoders import (
    CSVResultEncoder,
    JSONResultEncoder,
    new_encoder,
    parameter,
)
from benchconductor.functions import Function
from benchconductor.results import CSV_OUTPUT_HEADER, Result


def _result(file_name="pkg/a_test.go", ops=1.5e-9, bytes_=0.0, allocs=3.0, s=1):
    fn = Function(
        name="BenchmarkFoo",
        file_name=file_name,
        package_name="pkg",
        root_directory="/src",
    )
    return Result(
        function=fn,
        iterations=1000,
        ops=ops,
        bytes=bytes_,
        allocs=allocs,
        r=1,
        s=s,
        i=2,
        version=1,
    )


def _rows(data: bytes):
    return list(csv.reader(io.StringIO(data.decode("utf-8"))))


def test_new_encoder_types():
    result = _result()
    json_data = new_encoder("json").encode(result)
    assert json.loads(json_data)["Iterations"] == 1000
    csv_data = new_encoder("csv", {}).encode(result)
    assert _rows(csv_data) == [CSV_OUTPUT_HEADER, result.record()]


def test_new_encoder_unsupported():
    with pytest.raises(ValueError, match="unsupported output type"):
        new_encoder("xml")


def test_csv_header_written_once():
    encoder = new_encoder("csv", {})
    result = _result()
    first = _rows(encoder.encode(result))
    second = _rows(encoder.encode(result))
    assert first == [CSV_OUTPUT_HEADER, result.record()]
    assert second == [result.record()]


def test_csv_no_header_parameter():
    encoder = new_encoder("csv", {"no-csv-header": ["true"]})
    result = _result()
    assert _rows(encoder.encode(result)) == [result.record()]


def test_csv_quotes_fields_with_commas():
    result = _result(file_name="dir,x/a_test.go")
    encoder = CSVResultEncoder(write_header=False)
    data = encoder.encode(result)
    assert _rows(data) == [result.record()]
    assert data.endswith(b"\n")


def test_json_round_trip():
    result = _result()
    data = JSONResultEncoder().encode(result)
    assert data.endswith(b"\n")
    decoded = json.loads(data)
    assert decoded["Function"] == {
        "Name": result.function.name,
        "FileName": result.function.file_name,
        "PackageName": result.function.package_name,
        "RootDirectory": result.function.root_directory,
    }
    assert decoded["Ops"] == result.ops
    assert decoded["Allocs"] == result.allocs
    assert decoded["Iterations"] == result.iterations
    assert (decoded["R"], decoded["S"], decoded["I"], decoded["Version"]) == (1, 1, 2, 1)


def test_json_key_order():
    decoded = json.loads(JSONResultEncoder().encode(_result()))
    assert list(decoded) == [
        "Function", "Iterations", "Ops", "Bytes", "Allocs", "R", "S", "I", "Version",
    ]


def test_json_float_formatting():
    text = JSONResultEncoder().encode(_result()).decode()
    assert '"Ops":1.5e-9,' in text
    assert '"Bytes":0,' in text
    assert '"Allocs":3,' in text


def test_json_escapes_html_characters():
    result = _result(file_name="<a>&b")
    text = JSONResultEncoder().encode(result).decode()
    assert "<" not in text and ">" not in text and "&" not in text
    assert json.loads(text)["Function"]["FileName"] == "<a>&b"


def test_json_rejects_nan():
    with pytest.raises(ValueError):
        JSONResultEncoder().encode(_result(ops=float("nan")))


def test_parameter_first_value():
    assert parameter({"k": ["a", "b"]}, "k") == "a"
    assert parameter({"k": "v"}, "k") == "v"
    assert parameter({}, "k") == ""
    assert parameter(None, "k") == ""