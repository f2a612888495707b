# src/bin_packager/packing/packager.py

from __future__ import annotations

import logging
from typing import Any, Iterable, Union

from bin_packager.errors import DuplicateIdentifier, TypeMismatch
from bin_packager.metrics import compute_metrics
from bin_packager.models import Bin, Item, PackingResult
from bin_packager.packing.heuristics import Heuristic, coerce_heuristic, order
from bin_packager.packing.placement import place_item_in_bin

logger = logging.getLogger(__name__)


class Packager:
    """
    Packs items into bins with the First-Fit family of heuristics.

    Bins are opened in order; every pending item is tried against the current
    bin, items that fit move into it, the rest go on to the next bin. A bin is
    never revisited.
    """

    def __init__(self) -> None:
        # Insertion order, used to rebuild orderings.
        self._added_bins: list[Bin] = []
        self._added_items: list[Item] = []

        # Current processing order. Items leave _items once fitted.
        self._bins: dict[str, Bin] = {}
        self._items: dict[str, Item] = {}

        # Bins that already had their pass; First-Fit never reopens them.
        self._packed_bin_ids: set[str] = set()

        self._heuristic = Heuristic.FIRST_FIT

    @property
    def heuristic(self) -> Heuristic:
        return self._heuristic

    @property
    def bins(self) -> list[Bin]:
        return list(self._bins.values())

    @property
    def items(self) -> list[Item]:
        """Items still waiting for a bin."""
        return list(self._items.values())

    @property
    def unfitted_items(self) -> list[Item]:
        """Items not fitted into any bin. Meaningful after pack()."""
        return self.items

    @property
    def fitted_items(self) -> list[Item]:
        return [item for b in self._bins.values() for item in b.fitted_items]

    def get_bin(self, bin_id: str) -> Bin:
        return self._bins[bin_id]

    def add_bin(self, bin: Bin) -> None:
        self.add_bins([bin])

    def add_bins(self, bins: Iterable[Bin]) -> None:
        """Add bins in order. Nothing is added if any of them is rejected."""
        batch = list(bins)
        self._check_batch(batch, Bin, self._bins.keys())
        for b in batch:
            self._added_bins.append(b)
            self._bins[b.id] = b

    def add_item(self, item: Item) -> None:
        self.add_items([item])

    def add_items(self, items: Iterable[Item]) -> None:
        """Add items in order. Nothing is added if any of them is rejected."""
        batch = list(items)
        self._check_batch(batch, Item, {i.id for i in self._added_items})
        for item in batch:
            self._added_items.append(item)
            self._items[item.id] = item

    @staticmethod
    def _check_batch(batch: list[Any], kind: type, existing_ids: Iterable[str]) -> None:
        seen = set(existing_ids)
        name = kind.__name__
        for entry in batch:
            if not isinstance(entry, kind):
                raise TypeMismatch(f"{name} should be an instance of {name}, got {type(entry).__name__}")
            if entry.id in seen:
                raise DuplicateIdentifier(f"{name} id should be unique, {entry.id!r} already exists")
            seen.add(entry.id)

    def select_heuristic(self, kind: Union[Heuristic, str]) -> None:
        """Reorder bins and pending items for ``kind``."""
        heuristic = coerce_heuristic(kind)
        self._heuristic = heuristic

        bins = order(self._added_bins, heuristic)
        self._bins = {b.id: b for b in bins}

        pending = [item for item in self._added_items if item.id in self._items]
        self._items = {item.id: item for item in order(pending, heuristic)}

        logger.debug(f"Heuristic {heuristic.value}: bins={list(self._bins)} items={list(self._items)}")

    def with_first_fit(self) -> Packager:
        self.select_heuristic(Heuristic.FIRST_FIT)
        return self

    def with_first_fit_decreasing(self) -> Packager:
        self.select_heuristic(Heuristic.FIRST_FIT_DECREASING)
        return self

    def pack(self) -> PackingResult:
        """
        Pack pending items into the bins, in current order.

        Stops as soon as no item is pending at the start of a bin's turn.
        Bins already packed by an earlier call are skipped, so calling pack()
        again only opens bins added since.
        Items left pending afterwards are the unfitted ones.
        """
        logger.info(
            f"Packing {len(self._items)} item(s) into {len(self._bins)} bin(s) "
            f"heuristic={self._heuristic.value}"
        )

        for b in self._bins.values():
            if not self._items:
                logger.debug(f"No items left, skipping bin {b.id} and the ones after it")
                break

            if b.id in self._packed_bin_ids:
                continue
            self._packed_bin_ids.add(b.id)

            for item in list(self._items.values()):
                place_item_in_bin(b, item)

            # Fitted items now belong to the bin.
            moved = 0
            for fitted in b.fitted_items:
                if self._items.pop(fitted.id, None) is not None:
                    moved += 1

            logger.info(f"Bin {b.id}: fitted {moved} item(s), {len(self._items)} pending")

        result = self.result()
        logger.info(
            f"Packed {len(result.fitted_items)} item(s), unfitted={len(result.unfitted_items)}, "
            f"fill_rate={result.fill_rate:.4f}"
        )
        return result

    def result(self) -> PackingResult:
        """Snapshot of the current bins and leftover items."""
        bins = self.bins
        used_volume, total_volume, fill_rate = compute_metrics(bins)
        return PackingResult(
            bins=bins,
            unfitted_items=self.unfitted_items,
            used_volume=used_volume,
            total_volume=total_volume,
            fill_rate=fill_rate,
        )
