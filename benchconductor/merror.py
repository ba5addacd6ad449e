"""Combining several errors into one exception."""

from __future__ import annotations

from typing import Iterable, Optional


class MultiError(Exception):
    """An exception that carries several underlying errors."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        flat: list[BaseException] = []
        for err in errors:
            if err is None:
                continue
            if isinstance(err, MultiError):
                flat.extend(err.errors)
            else:
                flat.append(err)
        self.errors: list[BaseException] = flat
        super().__init__(self._describe())

    def _describe(self) -> str:
        noun = "error" if len(self.errors) == 1 else "errors"
        lines = "".join(f"\t* {err}\n" for err in self.errors)
        return f"{len(self.errors)} {noun} occurred:\n{lines}\n"

    def __str__(self) -> str:
        return self._describe()


def maybe_multi_error(
    base_err: Optional[BaseException], *args: Optional[BaseException]
) -> Optional[BaseException]:
    """Return ``base_err`` unless further errors are given; then combine them.

    ``None`` entries among the further errors are ignored. The result is the
    base error itself, ``None``, or a :class:`MultiError`.
    """
    further = [err for err in args if err is not None]
    if not further:
        return base_err
    return MultiError([base_err, *further])