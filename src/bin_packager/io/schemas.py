"""Data schemas for input/output operations."""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from bin_packager.geometry import Rotation
from bin_packager.packing.heuristics import Heuristic


class ItemSchema(BaseModel):
    """Schema for an item."""
    id: str = Field(description="Unique identifier of the item")
    length: float = Field(description="Length of the item")
    height: float = Field(description="Height of the item")
    breadth: float = Field(description="Breadth of the item")
    weight: float = Field(default=0.0, description="Weight of the item")


class BinSchema(BaseModel):
    """Schema for a bin."""
    id: str = Field(description="Unique identifier of the bin")
    length: float = Field(description="Length of the bin")
    height: float = Field(description="Height of the bin")
    breadth: float = Field(description="Breadth of the bin")
    max_weight: float = Field(description="Maximum weight capacity")


class PackingRequestSchema(BaseModel):
    """Schema for a packing request."""
    bins: List[BinSchema] = Field(default_factory=list, description="Bins, in the order they are opened")
    items: List[ItemSchema] = Field(default_factory=list, description="Items to pack")
    heuristic: Optional[Heuristic] = Field(default=None, description="Ordering heuristic, server default if omitted")


class PlacedItemSchema(BaseModel):
    """Schema for an item fitted into a bin."""
    id: str
    position: Tuple[float, float, float] = Field(description="Minimum corner (L, H, B) inside the bin")
    rotation: Rotation
    dimension: Tuple[float, float, float] = Field(description="Dimensions (L, H, B) after rotation")
    weight: float


class BinResultSchema(BaseModel):
    """Schema for one bin after packing."""
    id: str
    dimension: Tuple[float, float, float]
    max_weight: float
    fitted_items: List[PlacedItemSchema] = Field(default_factory=list)
    unfitted_items: List[str] = Field(default_factory=list, description="Ids of items this bin rejected")
    used_volume: float = Field(ge=0)
    fill_rate: float = Field(ge=0, description="Bin volume utilization ratio")
    total_weight: float = Field(ge=0)
    weight_fill_rate: float = Field(ge=0)


class PackingResultSchema(BaseModel):
    """Schema for a packing result."""
    heuristic: Heuristic
    bins: List[BinResultSchema] = Field(default_factory=list)
    unfitted_items: List[ItemSchema] = Field(default_factory=list, description="Items not packed into any bin")
    used_volume: float = Field(ge=0)
    total_volume: float = Field(ge=0, description="Volume of the bins holding at least one item")
    fill_rate: float = Field(ge=0, description="Utilization ratio of the used bins")
