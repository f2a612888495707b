from __future__ import annotations

from typing import Iterable

from bin_packager.models import Bin


def used_volume(bin: Bin) -> float:
    return sum(item.volume for item in bin.fitted_items)


def fill_rate(bin: Bin) -> float:
    return 0.0 if bin.volume == 0 else used_volume(bin) / bin.volume


def weight_fill_rate(bin: Bin) -> float:
    return bin.total_fitted_weight / bin.max_weight


def compute_metrics(bins: Iterable[Bin]) -> tuple[float, float, float]:
    """(used_volume, total_volume, fill_rate) over the bins holding at least one item."""
    used_bins = [b for b in bins if b.fitted_items]
    used = sum(used_volume(b) for b in used_bins)
    total = sum(b.volume for b in used_bins)
    rate = 0.0 if total == 0 else used / total
    return used, total, rate
