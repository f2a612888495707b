"""Geometry utilities for 3D bin packing."""

from __future__ import annotations

from enum import Enum, IntEnum

Dimension = tuple[float, float, float]
Position = tuple[float, float, float]
Bounds = tuple[float, float, float, float, float, float]

START_POSITION: Position = (0.0, 0.0, 0.0)


class Axis(IntEnum):
    """Bin axes, in the order pivots are generated along them."""

    LENGTH = 0
    HEIGHT = 1
    BREADTH = 2


class Rotation(str, Enum):
    """
    The six axis-aligned orientations of an item.

    Each name spells which physical extent (L=length, H=height, B=breadth)
    lands on the bin's length, height and breadth axis. Members are declared
    in the order they are tried during placement; LHB is "no rotation".
    """

    LHB = "LHB"
    HLB = "HLB"
    HBL = "HBL"
    BHL = "BHL"
    BLH = "BLH"
    LBH = "LBH"

    @property
    def permutation(self) -> tuple[int, int, int]:
        return _PERMUTATIONS[self]


_PERMUTATIONS: dict[Rotation, tuple[int, int, int]] = {
    Rotation.LHB: (0, 1, 2),
    Rotation.HLB: (1, 0, 2),
    Rotation.HBL: (1, 2, 0),
    Rotation.BHL: (2, 1, 0),
    Rotation.BLH: (2, 0, 1),
    Rotation.LBH: (0, 2, 1),
}


def volume(dims: Dimension) -> float:
    length, height, breadth = dims
    return float(length) * float(height) * float(breadth)


def rotate(dims: Dimension, rotation: Rotation) -> Dimension:
    """Return ``dims`` (physical L, H, B) as laid out under ``rotation``."""
    a, b, c = rotation.permutation
    return (float(dims[a]), float(dims[b]), float(dims[c]))


def rotations(dims: Dimension) -> list[tuple[Rotation, Dimension]]:
    """All six oriented dimensions of ``dims`` in canonical try order."""
    return [(rotation, rotate(dims, rotation)) for rotation in Rotation]


def bounds(position: Position, dims: Dimension) -> Bounds:
    x, y, z = position
    length, height, breadth = dims
    return (x, y, z, x + length, y + height, z + breadth)


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """
    True if two placed boxes share interior space.

    Each bounds tuple is (l_min, h_min, b_min, l_max, h_max, b_max), as built
    by bounds(). The boxes must intersect with positive extent along every
    axis at once; boxes resting against each other do not count.
    """
    a_lo, a_hi = a[:3], a[3:]
    b_lo, b_hi = b[:3], b[3:]
    return all(a_lo[axis] < b_hi[axis] and b_lo[axis] < a_hi[axis] for axis in Axis)


def fits_within(position: Position, dims: Dimension, container: Dimension) -> bool:
    """True if the box at ``position`` with ``dims`` stays inside ``container`` on every axis."""
    return all(p + d <= c for p, d, c in zip(position, dims, container))


def pivot_along(position: Position, dims: Dimension, axis: Axis) -> Position:
    """The point flush against the far face of a placed box along ``axis``."""
    pivot = list(position)
    pivot[axis] = position[axis] + dims[axis]
    return (pivot[0], pivot[1], pivot[2])
