"""Destinations for benchmark results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from benchconductor.merror import MultiError
from benchconductor.results import Result


class ResultWriter(ABC):
    """Something that accepts benchmark results and can be closed."""

    @abstractmethod
    def write(self, result: Result) -> None:
        """Store one result."""

    @abstractmethod
    def close(self) -> None:
        """Release everything the writer holds."""

    def __enter__(self) -> "ResultWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MultiResultWriter(ResultWriter):
    """Passes every result on to several writers."""

    def __init__(self, writers: Iterable[ResultWriter]) -> None:
        self.writers = list(writers)

    def write(self, result: Result) -> None:
        """Write ``result`` to each writer in turn, stopping at the first failure."""
        for writer in self.writers:
            writer.write(result)

    def close(self) -> None:
        """Close all writers; failures are collected into a :class:`MultiError`."""
        errors: list[Exception] = []
        for writer in self.writers:
            try:
                writer.close()
            except Exception as err:  # noqa: BLE001 - every writer must be closed
                errors.append(err)
        if errors:
            raise MultiError(errors)