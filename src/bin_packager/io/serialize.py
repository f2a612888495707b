"""Conversion between the packing schemas and the core packer objects."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from bin_packager.metrics import fill_rate, used_volume, weight_fill_rate
from bin_packager.models import Bin, Item
from bin_packager.packing.heuristics import Heuristic
from bin_packager.packing.packager import Packager
from bin_packager.io.schemas import (
    BinResultSchema,
    ItemSchema,
    PackingRequestSchema,
    PackingResultSchema,
    PlacedItemSchema,
)


def build_packager(
    request: PackingRequestSchema,
    default_heuristic: Heuristic = Heuristic.FIRST_FIT,
) -> Packager:
    """
    Build a packager holding the request's bins and items, ordered by its heuristic.

    Raises the packer's errors (InvalidDimension, DuplicateIdentifier, ...) on bad input.
    """
    packager = Packager()
    packager.add_bins(Bin(**b.model_dump()) for b in request.bins)
    packager.add_items(Item(**i.model_dump()) for i in request.items)
    packager.select_heuristic(request.heuristic or default_heuristic)
    return packager


def _placed_item(item: Item) -> PlacedItemSchema:
    return PlacedItemSchema(
        id=item.id,
        position=item.position,
        rotation=item.rotation,
        dimension=item.effective_dimension,
        weight=item.weight,
    )


def _bin_result(b: Bin) -> BinResultSchema:
    return BinResultSchema(
        id=b.id,
        dimension=b.dimension,
        max_weight=b.max_weight,
        fitted_items=[_placed_item(i) for i in b.fitted_items],
        unfitted_items=[i.id for i in b.unfitted_items],
        used_volume=used_volume(b),
        fill_rate=fill_rate(b),
        total_weight=b.total_fitted_weight,
        weight_fill_rate=weight_fill_rate(b),
    )


def format_result(packager: Packager) -> PackingResultSchema:
    result = packager.result()
    return PackingResultSchema(
        heuristic=packager.heuristic,
        bins=[_bin_result(b) for b in result.bins],
        unfitted_items=[
            ItemSchema(id=i.id, length=i.length, height=i.height, breadth=i.breadth, weight=i.weight)
            for i in result.unfitted_items
        ],
        used_volume=result.used_volume,
        total_volume=result.total_volume,
        fill_rate=result.fill_rate,
    )


def pack_request(
    request: PackingRequestSchema,
    default_heuristic: Heuristic = Heuristic.FIRST_FIT,
) -> PackingResultSchema:
    packager = build_packager(request, default_heuristic)
    packager.pack()
    return format_result(packager)


def load_request(path: Path) -> PackingRequestSchema:
    data = json.loads(path.read_text(encoding="utf-8"))
    return PackingRequestSchema.model_validate(data)


def dump_result(result: PackingResultSchema, path: Optional[Path] = None) -> str:
    """Return the result as indented JSON, also writing it to ``path`` if given."""
    text = result.model_dump_json(indent=2)
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return text
