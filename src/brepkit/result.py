## brepkit Result container
## =========================

## Copyright (c) 2025 Richard W. DeVaul
## Copyright (c) 2025 brepkit contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
A two-variant success/failure container.

Every kernel-facing operation in brepkit returns a :class:`Result` rather
than raising.  ``Result.ok(value)`` carries a value, ``Result.err(error)``
carries a (usually string) error.  Falsy values are legitimate payloads, so
``Result.ok(None).is_ok`` is ``True``.

Reading ``value`` from an error result, or ``error`` from an ok result, is a
usage fault and raises :class:`~brepkit.errors.ResultAccessError`.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from brepkit.errors import ResultAccessError

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")

_MISSING: Any = object()


class Result(Generic[T, E]):
    """Immutable tagged union of ``Ok(value)`` and ``Err(error)``."""

    __slots__ = ("_is_ok", "_value", "_error")

    def __init__(self, is_ok: bool, value: Any = _MISSING, error: Any = _MISSING):
        # only the payload of the chosen variant may (and must) be given
        if bool(is_ok) == (value is _MISSING) or bool(is_ok) != (error is _MISSING):
            raise TypeError("build results with Result.ok(value) or Result.err(error)")
        object.__setattr__(self, "_is_ok", bool(is_ok))
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_error", error)

    @classmethod
    def ok(cls, value: T) -> "Result[T, Any]":
        return cls(True, value=value)

    @classmethod
    def err(cls, error: E) -> "Result[Any, E]":
        return cls(False, error=error)

    def __setattr__(self, name, value):
        raise AttributeError("Result is immutable")

    def __delattr__(self, name):
        raise AttributeError("Result is immutable")

    @property
    def is_ok(self) -> bool:
        return self._is_ok

    @property
    def value(self) -> T:
        if not self._is_ok:
            raise ResultAccessError(f"cannot read value of an error result: {self._error!r}")
        return self._value

    @property
    def error(self) -> E:
        if self._is_ok:
            raise ResultAccessError("cannot read error of an ok result")
        return self._error

    def unwrap(self) -> T:
        """Return the value, raising ``ResultAccessError`` with the error text otherwise."""
        if not self._is_ok:
            raise ResultAccessError(str(self._error))
        return self._value

    def unwrap_or(self, default: T) -> T:
        return self._value if self._is_ok else default

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        """Apply ``fn`` to an ok value; error results pass through untouched."""
        if self._is_ok:
            return Result.ok(fn(self._value))
        return self

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        if self._is_ok != other._is_ok:
            return False
        if self._is_ok:
            return self._value == other._value
        return self._error == other._error

    __hash__ = None

    def __repr__(self):
        if self._is_ok:
            return f"Result.ok({self._value!r})"
        return f"Result.err({self._error!r})"


__all__ = ["Result"]
