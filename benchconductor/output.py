"""Result outputs addressed by URL, optionally split into chunks."""

from __future__ import annotations

import threading
from typing import Callable, Hashable, Iterable, Mapping, Optional, Sequence
from urllib.parse import parse_qs, urlsplit

from benchconductor.encoders import parameter, new_encoder
from benchconductor.result_writer import MultiResultWriter, ResultWriter
from benchconductor.results import Result
from benchconductor.writers import STDOUT_PATH, FileWriter, is_valid_schema, new_writer

ChunkFn = Callable[[Optional[Result], Result], bool]


def _crosses_boundary(
    last_result: Optional[Result],
    new_result: Result,
    key: Callable[[Result], Hashable],
) -> bool:
    """True if there is no previous result or the chunk key differs."""
    if last_result is None:
        return True
    return key(last_result) != key(new_result)


def no_chunk_fn(last_result: Optional[Result], new_result: Result) -> bool:
    """Never start a new chunk: every result shares one constant chunk key."""
    return last_result is not None and _crosses_boundary(
        last_result, new_result, lambda _result: None
    )


def suite_chunk_fn(last_result: Optional[Result], new_result: Result) -> bool:
    """Start a new chunk for every suite execution."""
    return _crosses_boundary(last_result, new_result, lambda result: result.s)


def bench_fn_chunk_fn(last_result: Optional[Result], new_result: Result) -> bool:
    """Start a new chunk for every suite execution and every benchmark function."""
    if suite_chunk_fn(last_result, new_result):
        return True
    assert last_result is not None
    return str(last_result.function) != str(new_result.function)


_CHUNK_FNS: dict[str, ChunkFn] = {
    "no-chunk": no_chunk_fn,
    "suite": suite_chunk_fn,
    "benchFn": bench_fn_chunk_fn,
}


def _extension(path: str) -> str:
    base = path.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


class Output(ResultWriter):
    """Writes encoded results to one destination.

    With the parameter ``chunked=true`` results are spread over numbered
    files ``<path>.NNNN``; ``new-chunk-fn`` selects when a new file begins
    (``no-chunk``, ``suite`` or ``benchFn``, the default).
    """

    def __init__(
        self,
        schema: str,
        output_type: str,
        host: str,
        path: str,
        parameters: Mapping[str, Sequence[str]],
    ) -> None:
        if not is_valid_schema(schema):
            raise ValueError(f"unsupported output schema: {schema}")
        self.schema = schema
        self.type = output_type
        self.host = host
        self.parameters = dict(parameters)
        self.chunked = parameter(self.parameters, "chunked") == "true"
        self.chunk_index = 0
        self._path = path
        self._writer: Optional[FileWriter] = None
        self._lock = threading.Lock()
        self._last_result: Optional[Result] = None
        if self.chunked and path == STDOUT_PATH:
            raise ValueError("cannot chunk to stdout")
        self._new_chunk_fn: ChunkFn = _CHUNK_FNS.get(
            parameter(self.parameters, "new-chunk-fn"), bench_fn_chunk_fn
        )
        self._encoder = new_encoder(output_type, self.parameters)

    @property
    def new_chunk_fn(self) -> Optional[ChunkFn]:
        """The function deciding on new chunks, if the output is chunked."""
        return self._new_chunk_fn if self.chunked else None

    @property
    def path(self) -> str:
        """The path currently written to, with the chunk number if chunked."""
        if not self.chunked:
            return self._path
        return f"{self._path}.{self.chunk_index:04d}"

    def _open(self) -> None:
        if self._writer is not None:
            writer, self._writer = self._writer, None
            writer.close()
        self._writer = new_writer(self.schema, self.path)

    def write(self, result: Result) -> None:
        """Encode and write ``result``, opening a new chunk when required."""
        with self._lock:
            is_new_chunk = self.chunked and self._new_chunk_fn(self._last_result, result)
            if is_new_chunk or self._writer is None:
                self._open()
                if is_new_chunk:
                    self.chunk_index += 1
            data = self._encoder.encode(result)
            assert self._writer is not None
            if self._writer.write(data) != len(data):
                raise OSError("short write")
            self._last_result = result

    def close(self) -> None:
        """Close the currently open destination, if any."""
        with self._lock:
            if self._writer is not None:
                writer, self._writer = self._writer, None
                writer.close()


def new_output(output_path: str, default_type: str) -> Output:
    """Create an output from a path or URL.

    The file extension selects the encoding, falling back to ``default_type``;
    a missing scheme means ``file``; query parameters configure the output.
    """
    parsed = urlsplit(output_path)
    extension = _extension(parsed.path)
    output_type = extension[1:] if extension else default_type
    schema = parsed.scheme or "file"
    if not is_valid_schema(schema):
        raise ValueError(f"unsupported output schema: {schema}")
    parameters = parse_qs(parsed.query, keep_blank_values=True)
    return Output(schema, output_type, parsed.netloc, parsed.path, parameters)


def open_outputs(output_paths: Iterable[str], default_type: str) -> MultiResultWriter:
    """Create one output per path, combined into a single writer."""
    return MultiResultWriter([new_output(path, default_type) for path in output_paths])