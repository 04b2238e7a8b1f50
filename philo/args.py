"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

USAGE = "Usage: ./philo nbr die eat sleep [must_eat]"
INVALID = "These are not the args you were looking for"

_WHITESPACE = frozenset("\t\n\v\f\r ")
_DIGITS = frozenset("0123456789")
_INT_BITS = 32


class UsageError(Exception):
    """Raised when the command line has the wrong number of arguments."""

    def __init__(self, message: str = USAGE) -> None:
        super().__init__(message)


class InvalidArgumentError(UsageError):
    """Raised when an argument is not a strictly positive integer."""

    def __init__(self, message: str = INVALID) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Settings:
    """Simulation parameters; times are in milliseconds.

    ``must_eat`` is ``None`` when no meal target was given.
    """

    num_philos: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    must_eat: int | None = None


def _to_int32(value: int) -> int:
    value &= (1 << _INT_BITS) - 1
    if value >= 1 << (_INT_BITS - 1):
        value -= 1 << _INT_BITS
    return value


def parse_int(text: str) -> int:
    """Parse a strict decimal integer.

    Leading whitespace and one optional sign are allowed; anything after
    the digits is rejected. The result is truncated to a 32-bit signed
    integer. Raises ValueError on malformed input.
    """
    body = text.lstrip("".join(_WHITESPACE))
    sign = 1
    if body[:1] in ("-", "+"):
        if body[0] == "-":
            sign = -1
        body = body[1:]
    if not body or not set(body) <= _DIGITS:
        raise ValueError(f"not an integer: {text!r}")
    return _to_int32(sign * int(body))


def parse_args(args: Sequence[str]) -> Settings:
    """Build Settings from the arguments that follow the program name."""
    if len(args) not in (4, 5):
        raise UsageError()
    values = []
    for arg in args:
        try:
            value = parse_int(arg)
        except ValueError:
            raise InvalidArgumentError() from None
        if value <= 0:
            raise InvalidArgumentError()
        values.append(value)
    num_philos, time_to_die, time_to_eat, time_to_sleep, *rest = values
    return Settings(
        num_philos=num_philos,
        time_to_die=time_to_die,
        time_to_eat=time_to_eat,
        time_to_sleep=time_to_sleep,
        must_eat=rest[0] if rest else None,
    )