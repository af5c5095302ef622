from collections.abc import Iterable, Mapping

from agecensus.config import DEFAULT_TOP_TIERS
from agecensus.data import RankedEntry


def rank_frequencies(table: Mapping[int, int], top_tiers: int = DEFAULT_TOP_TIERS) -> list[RankedEntry]:
    """
        Rank ages by descending count. Ages with the same count share a position, and every age belonging to one of
        the first `top_tiers` distinct counts is returned, so ties can produce more than `top_tiers` entries.
        Within a tier ages are listed in ascending order.
    Args:
      table: age -> count
      top_tiers: number of distinct counts to keep (Default value = 3)

    Returns: the ranked entries, in position order

    """
    if top_tiers < 1:
        raise ValueError(f"top_tiers must be at least 1 (got {top_tiers})")
    ranked = []
    position = 0
    previous_count = None
    for age, count in sorted(table.items(), key=lambda item: (-item[1], item[0])):
        if count != previous_count:
            position += 1
            if position > top_tiers:
                break
            previous_count = count
        ranked.append(RankedEntry(position=position, value=age, count=count))
    return ranked


def format_entries(entries: Iterable[RankedEntry]) -> list[str]:
    return [entry.format() for entry in entries]
