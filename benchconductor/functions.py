"""Discovery of benchmark functions in Go source trees."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

_TEST_FILE_SUFFIX = "_test.go"
_BENCHMARK_PREFIX = "Benchmark"

_NOISE = re.compile(
    r"//[^\n]*"
    r"|/\*.*?\*/"
    r'|"(?:\\.|[^"\\\n])*"'
    r"|`[^`]*`"
    r"|'(?:\\.|[^'\\\n])*'",
    re.DOTALL,
)
_TOKENS = re.compile(r"[{}()\[\]]|\bfunc\b")
_FUNC_DECL = re.compile(r"func\s*(?:\([^()]*\)\s*)?([^\W\d]\w*)\s*[\[(]")
_IDENTIFIER = re.compile(r"[^\W\d]\w*")


@dataclass(frozen=True)
class Function:
    """A benchmark function found in a test file."""

    name: str
    file_name: str
    package_name: str
    root_directory: str

    def __str__(self) -> str:
        return f"{self.package_name}.{self.name}"


@dataclass(frozen=True)
class VersionedFunction:
    """The same benchmark function in two versions of a code base."""

    v1: Function
    v2: Function

    def __str__(self) -> str:
        # package and name are identical for both versions
        return str(self.v1)


def _blank(match: re.Match[str]) -> str:
    return re.sub(r"[^\n]", " ", match.group())


def _declared_functions(path: str, source: str) -> tuple[str, list[str]]:
    """Return the package name and the top-level function names of a file."""
    code = _NOISE.sub(_blank, source)
    words = code.split(None, 2)
    if len(words) < 2 or words[0] != "package" or not _IDENTIFIER.fullmatch(words[1]):
        raise ValueError(f"{path}: expected 'package' clause")
    names: list[str] = []
    depth = 0
    for token in _TOKENS.finditer(code):
        text = token.group()
        if text in ("{", "(", "["):
            depth += 1
        elif text in ("}", ")", "]"):
            depth = max(depth - 1, 0)
        elif depth == 0:
            decl = _FUNC_DECL.match(code, token.start())
            if decl:
                names.append(decl.group(1))
    return words[1], names


def _benchmarks_in_dir(root: str, directory: str, file_names: Iterable[str]) -> Iterator[Function]:
    for file_name in sorted(file_names):
        if not file_name.endswith(_TEST_FILE_SUFFIX):
            continue
        path = os.path.join(directory, file_name)
        with open(path, encoding="utf-8", errors="replace") as handle:
            package, names = _declared_functions(path, handle.read())
        relative = os.path.relpath(path, root)
        for name in names:
            if name.startswith(_BENCHMARK_PREFIX):
                yield Function(
                    name=name,
                    file_name=relative,
                    package_name=package,
                    root_directory=root,
                )


def get_functions(root_path: str) -> list[Function]:
    """Return every ``Benchmark*`` function declared in test files below ``root_path``.

    The ``vendor`` directory directly below the root is not searched itself.
    The first error met while walking the tree is raised.
    """
    root = os.path.abspath(root_path)
    vendor_dir = os.path.join(root, "vendor")
    found: list[Function] = []
    walk_errors: list[OSError] = []
    for directory, dir_names, file_names in os.walk(root, onerror=walk_errors.append):
        if walk_errors:
            raise walk_errors[0]
        dir_names.sort()
        if directory == vendor_dir:
            continue
        found.extend(_benchmarks_in_dir(root, directory, file_names))
    if walk_errors:
        raise walk_errors[0]
    return found


def _find_function(functions: Iterable[Function], search: Function) -> Function | None:
    return next(
        (
            f
            for f in functions
            if f.package_name == search.package_name
            and f.name == search.name
            and f.file_name == search.file_name
        ),
        None,
    )


def combine_functions(v1: Iterable[Function], v2: Iterable[Function]) -> list[VersionedFunction]:
    """Pair the functions of ``v1`` with their counterparts in ``v2``.

    Functions present in only one version are dropped.
    """
    v2_functions = list(v2)
    combined: list[VersionedFunction] = []
    for function_v1 in v1:
        function_v2 = _find_function(v2_functions, function_v1)
        if function_v2 is not None:
            combined.append(VersionedFunction(v1=function_v1, v2=function_v2))
    return combined


def combined_functions_from_paths(source_path_v1: str, source_path_v2: str) -> list[VersionedFunction]:
    """Find the benchmark functions common to two source trees."""
    functions_v1 = get_functions(source_path_v1)
    functions_v2 = get_functions(source_path_v2)
    return combine_functions(functions_v1, functions_v2)


def filter_functions(
    functions: Iterable[VersionedFunction],
    predicate: Callable[[VersionedFunction], bool],
) -> list[VersionedFunction]:
    """Return the versioned functions for which ``predicate`` holds."""
    return [vf for vf in functions if predicate(vf)]