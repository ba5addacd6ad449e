# benchconductor

Building blocks for comparing the performance of two versions of the same
Go code base. The package finds the `Benchmark*` functions that exist in
both versions, parses benchmark result lines, and writes the measurements
to one or more outputs as CSV or JSON lines. It uses only the standard
library.

## Finding benchmark functions

```python
from benchconductor.functions import combined_functions_from_paths, filter_functions

functions = combined_functions_from_paths("checkout/v1", "checkout/v2")
functions = filter_functions(functions, lambda vf: "Parse" in str(vf))
```

`get_functions(root_path)` walks the tree below `root_path`, reads every
`*_test.go` file and returns a `Function` (name, file name relative to the
root, package name, absolute root directory) for each top-level function
whose name starts with `Benchmark`. Files directly inside the `vendor`
directory below the root are skipped. Declarations are found by a
lightweight scan that ignores comments and string literals; a test file
without a `package` clause raises `ValueError`.

`combine_functions(v1, v2)` pairs functions with the same package, name
and file into `VersionedFunction(v1, v2)` objects and drops those present
in only one version. `str()` of either class gives `package.Name`.

## Results

```python
from benchconductor.results import Result, parse_benchmark_line

line = parse_benchmark_line("BenchmarkParse-8  1000000  1234 ns/op  64 B/op  2 allocs/op")
result = Result.from_benchmark(functions[0].v1, 1, 1, 1, 1, line)
result.record()
# ['1-1-1', 'pkg.BenchmarkParse', '1', 'pkg/parse_test.go', '1000000',
#  '0.000001234', '64', '2']
```

`parse_benchmark_line` returns `None` for lines that are not benchmark
results and raises `ValueError` for malformed ones. Units in `ns/...` are
converted to `sec/...` and `MB/s` to `B/s`. `Result.rsi()` joins run,
suite and benchmark index with dashes; `record()` produces a row matching
`CSV_OUTPUT_HEADER`, with the measurements formatted at single precision;
`records(results)` does this for many results.

## Outputs

```python
from benchconductor.output import open_outputs

with open_outputs(["results.csv", "results.json?chunked=true"], "csv") as writer:
    writer.write(result)
```

Each output is a path, optionally with query parameters:

| Form | Meaning |
| --- | --- |
| `results.csv` | CSV with a header row |
| `results.json` | one JSON object per line |
| `-` | standard output, in the default type |
| `results.csv?no-csv-header=true` | CSV without the header row |
| `results.csv?chunked=true` | numbered files `results.csv.0000`, `results.csv.0001`, ... |

The file extension selects the encoding (`csv` or `json`); without one the
default type passed to `open_outputs` or `new_output` is used, and any
other type raises `ValueError`. Files are created if missing and written
from the start without truncation.

For chunked outputs, `new-chunk-fn` chooses when the next file begins:
`suite` (each suite run), `benchFn` (each suite run and each benchmark
function; the default) or `no-chunk`. The same rules are available as
`suite_chunk_fn`, `bench_fn_chunk_fn` and `no_chunk_fn`. Chunking to
standard output is refused.

`MultiResultWriter` passes each result to several writers and, on
`close()`, closes them all, raising a `MultiError` if any failed. The
encoders (`new_encoder`, `CSVResultEncoder`, `JSONResultEncoder`) and the
byte writers (`new_writer`, `FileWriter`, `is_valid_schema`) can also be
used directly.

## Helpers

- `benchconductor.retry.on_error(log, prefix, fn)` and
  `on_error_with_handler(handler, fn)` call `fn` up to three times, half a
  second apart, and raise the last error if every attempt fails; an
  optional `threading.Event` cancels further attempts.
- `benchconductor.merror.maybe_multi_error` returns the base error alone,
  or a `MultiError` when further errors are given.
- `benchconductor.netutil.wait_for_port_open(endpoint, timeout, cancel)`
  tries a TCP connection to `host:port` once a second until one succeeds.
- `benchconductor.profile.fetch(endpoint, output_file)` downloads a
  profile over HTTP into a file and raises `RuntimeError` on a non-200
  response.
- `benchconductor.storage.parse_url` splits a `gs://` or `gcs://` URL into
  bucket and object path.
- `benchconductor.paths.get_relative_path` and `get_absolute_path`
  convert paths relative to the working directory.

## What the package does not do

- It does not run benchmarks: there is no code that starts `go test`,
  shuffles a suite or collects its output. Results must be parsed from
  output obtained elsewhere.
- It does not build or start applications, and it does not drive load
  testing tools or convert their reports.
- Outputs are local files and standard output only; `gs://` and `gcs://`
  destinations are rejected, and nothing is uploaded to cloud storage.
- There is no command-line program.