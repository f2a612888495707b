from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from bin_packager.errors import InvalidDimension, InvalidWeight
from bin_packager.geometry import Bounds, Dimension, Position, Rotation, bounds, rotate, volume


def _check_dimension(owner: str, value: float, info: ValidationInfo) -> float:
    if not math.isfinite(value) or value <= 0:
        raise InvalidDimension(f"{owner} {info.field_name} must be a positive number, got {value!r}")
    return value


class Item(BaseModel):
    """An item to pack, with its physical dimensions (L, H, B) and placement state."""

    id: str = Field(description="Unique identifier for the item")
    length: float = Field(description="Extent along the length axis")
    height: float = Field(description="Extent along the height axis")
    breadth: float = Field(description="Extent along the breadth axis")
    weight: float = Field(default=0.0, description="Weight of the item")

    # Placement state, written by the placement engine only.
    position: Optional[Position] = Field(
        default=None,
        description="Minimum corner inside the bin, None while unplaced",
    )
    rotation: Rotation = Field(default=Rotation.LHB, description="Orientation once placed")

    @field_validator("length", "height", "breadth")
    @classmethod
    def _positive_dimension(cls, value: float, info: ValidationInfo) -> float:
        return _check_dimension("Item", value, info)

    @field_validator("weight")
    @classmethod
    def _non_negative_weight(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            raise InvalidWeight(f"Item weight must be a non-negative number, got {value!r}")
        return value

    @property
    def dimension(self) -> Dimension:
        return (self.length, self.height, self.breadth)

    @property
    def effective_dimension(self) -> Dimension:
        """Physical dimension laid out under the current rotation."""
        return rotate(self.dimension, self.rotation)

    @property
    def volume(self) -> float:
        return volume(self.dimension)

    @property
    def is_placed(self) -> bool:
        return self.position is not None

    @property
    def bounds(self) -> Bounds:
        if self.position is None:
            raise ValueError(f"Item {self.id} has not been placed")
        return bounds(self.position, self.effective_dimension)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class Bin(BaseModel):
    """A bin with its dimensions (L, H, B), weight capacity and the items packed into it."""

    id: str = Field(description="Unique identifier for the bin")
    length: float = Field(description="Length of the bin")
    height: float = Field(description="Height of the bin")
    breadth: float = Field(description="Breadth of the bin")
    max_weight: float = Field(description="Maximum total weight of fitted items")

    fitted_items: list[Item] = Field(default_factory=list, description="Items packed, in placement order")
    unfitted_items: list[Item] = Field(
        default_factory=list,
        description="Items tried against this bin and rejected",
    )

    @field_validator("length", "height", "breadth")
    @classmethod
    def _positive_dimension(cls, value: float, info: ValidationInfo) -> float:
        return _check_dimension("Bin", value, info)

    @field_validator("max_weight")
    @classmethod
    def _positive_capacity(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise InvalidWeight(f"Bin max_weight must be a positive number, got {value!r}")
        return value

    @property
    def dimension(self) -> Dimension:
        return (self.length, self.height, self.breadth)

    @property
    def volume(self) -> float:
        return volume(self.dimension)

    @property
    def total_fitted_weight(self) -> float:
        return sum(item.weight for item in self.fitted_items)

    @property
    def remaining_weight(self) -> float:
        return self.max_weight - self.total_fitted_weight

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class PackingResult(BaseModel):
    """Outcome of one packing run."""

    bins: list[Bin] = Field(default_factory=list)
    unfitted_items: list[Item] = Field(default_factory=list)
    used_volume: float = 0.0
    total_volume: float = 0.0
    fill_rate: float = 0.0

    @property
    def fitted_items(self) -> list[Item]:
        return [item for b in self.bins for item in b.fitted_items]
