"""Result of a cache read. Coordinators branch on the type instead of on None."""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Hit(Generic[T]):
    value: T


@dataclass(frozen=True)
class Miss:
    """Key absent, expired by the freshness window, or unparseable."""


@dataclass(frozen=True)
class Unavailable:
    """Backend unconfigured or erroring."""


MISS = Miss()
UNAVAILABLE = Unavailable()

CacheOutcome = Union[Hit[T], Miss, Unavailable]
