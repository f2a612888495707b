"""Ordering heuristics applied to bins and items before packing."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, TypeVar, Union

from bin_packager.errors import TypeMismatch
from bin_packager.models import Bin, Item

T = TypeVar("T", Bin, Item)


class Heuristic(str, Enum):
    """
    FIRST_FIT: keep bins and items in the order they were added.
    FIRST_FIT_DECREASING: biggest volume first, ties keep insertion order.
    """

    FIRST_FIT = "first_fit"
    FIRST_FIT_DECREASING = "first_fit_decreasing"


def coerce_heuristic(kind: Union[Heuristic, str]) -> Heuristic:
    try:
        return Heuristic(kind)
    except ValueError:
        valid = [h.value for h in Heuristic]
        raise TypeMismatch(f"Unknown heuristic {kind!r}. Valid: {valid}") from None


def order(entries: Sequence[T], heuristic: Heuristic) -> list[T]:
    """
    Return a new list of ``entries`` ordered for ``heuristic``.

    ``entries`` must be in insertion order. sorted() is stable, so equal
    volumes keep their relative order and applying the same heuristic twice
    yields the same sequence.
    """
    if heuristic is Heuristic.FIRST_FIT_DECREASING:
        return sorted(entries, key=lambda e: e.volume, reverse=True)
    return list(entries)
