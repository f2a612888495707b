# src/bin_packager/packing/placement.py

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator

from bin_packager.geometry import (
    START_POSITION,
    Axis,
    Position,
    Rotation,
    bounds,
    boxes_overlap,
    fits_within,
    pivot_along,
    rotate,
)
from bin_packager.models import Bin, Item

logger = logging.getLogger(__name__)


class FitStatus(str, Enum):
    """Verdict for one item, pivot and rotation. Checks run in declaration order."""

    FITS = "fits"
    OUT_OF_BOUNDS = "out_of_bounds"
    OVERWEIGHT = "overweight"
    OVERLAP = "overlap"


def check_fit(bin: Bin, item: Item, pivot: Position, rotation: Rotation) -> FitStatus:
    """
    Check whether ``item`` rotated by ``rotation`` can sit at ``pivot`` in ``bin``.

    - inside bin bounds on every axis
    - bin has enough remaining weight capacity for the item
    - no positive-volume overlap with any item already fitted in the bin
    """
    dims = rotate(item.dimension, rotation)
    if not fits_within(pivot, dims, bin.dimension):
        return FitStatus.OUT_OF_BOUNDS

    if bin.remaining_weight < item.weight:
        return FitStatus.OVERWEIGHT

    new_bounds = bounds(pivot, dims)
    for fitted in bin.fitted_items:
        if boxes_overlap(new_bounds, fitted.bounds):
            return FitStatus.OVERLAP

    return FitStatus.FITS


def try_fit(bin: Bin, item: Item, pivot: Position) -> bool:
    """
    Try every rotation of ``item`` at ``pivot`` and commit the FIRST one that fits.

    On success the item gets its position and rotation and is appended to the
    bin's fitted items. On failure nothing is mutated.
    """
    seen: set[tuple[float, float, float]] = set()
    for rotation in Rotation:
        # Cubes and square faces repeat oriented dims; the first of them already decided.
        dims = rotate(item.dimension, rotation)
        if dims in seen:
            continue
        seen.add(dims)

        status = check_fit(bin, item, pivot, rotation)
        if status is not FitStatus.FITS:
            continue

        item.position = (float(pivot[0]), float(pivot[1]), float(pivot[2]))
        item.rotation = rotation
        bin.fitted_items.append(item)
        logger.debug(f"Item {item.id} fitted in bin {bin.id} at {item.position} rotation={rotation.value}")
        return True

    return False


def generate_pivots(bin: Bin) -> Iterator[tuple[Axis, Position]]:
    """
    Candidate pivots derived from the items already fitted in ``bin``.

    Axis outer loop (length, height, breadth), fitted items inner loop in the
    order they were fitted. Each pivot is flush against the far face of a
    fitted item along that axis.
    """
    for axis in Axis:
        # Snapshot: a successful fit appends to fitted_items while callers iterate.
        for fitted in list(bin.fitted_items):
            yield axis, pivot_along(fitted.position, fitted.effective_dimension, axis)


def place_item_in_bin(bin: Bin, item: Item) -> bool:
    """
    Pack ``item`` into ``bin`` at the first pivot/rotation that works.

    An empty bin is tried at its origin only. Items that find no spot are
    recorded on ``bin.unfitted_items``.
    """
    if not bin.fitted_items:
        fitted = try_fit(bin, item, START_POSITION)
    else:
        fitted = False
        for _, pivot in generate_pivots(bin):
            if try_fit(bin, item, pivot):
                fitted = True
                break

    if not fitted:
        bin.unfitted_items.append(item)
        logger.debug(f"Item {item.id} does not fit in bin {bin.id}")

    return fitted
