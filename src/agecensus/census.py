from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

import multiprocess
from loguru import logger
from tqdm import tqdm

from agecensus.config import DEFAULT_CENSUS_CONFIG, CensusConfig
from agecensus.data import AgeSourceFactory, FrequencyTable, RankedEntry
from agecensus.errors import SchedulingError
from agecensus.ranker import format_entries, rank_frequencies
from agecensus.scanner import RegionScan, RegionScanner
from agecensus.utils.logging import log_regions
from agecensus.utils.stats import ScanStats


@dataclass
class CensusResult:
    """Frequency table of one or more regions, with the stats collected while scanning them."""

    table: FrequencyTable = field(default_factory=FrequencyTable)
    stats: ScanStats = field(default_factory=ScanStats)

    def ranked(self, top_tiers: int) -> list[RankedEntry]:
        return rank_frequencies(self.table, top_tiers)


class Census:
    """Computes the most common ages of one or many regions.

    The census holds no per-query state, so a single instance can be shared between threads.

    Args:
        factory: callable returning the age source of a region, or None if the region does not exist.
            Every source it returns is closed by the census.
        config: parallelism, number of tiers to rank and pool backend. See `CensusConfig`.
    """

    def __init__(self, factory: AgeSourceFactory, config: CensusConfig = DEFAULT_CENSUS_CONFIG):
        self.factory = factory
        self.config = config
        self.scanner = RegionScanner(factory)

    def count(self, region: str) -> CensusResult:
        """
            Scan a single region on the calling thread.
        Args:
          region: region name

        Returns: the region's frequency table and scan stats

        """
        scan = self.scanner.scan(region)
        return CensusResult(scan.table, scan.stats)

    def count_regions(self, regions: Sequence[str]) -> CensusResult:
        """
            Scan every region on a pool of `config.parallelism` workers and merge their frequency tables.
            A region listed several times is counted several times. Regions that can not be resolved or whose
            source fails only contribute what was read from them.
        Args:
          regions: region names

        Returns: the merged frequency table and the summed scan stats

        Raises:
          SchedulingError: when the pool could not run the scans
        """
        regions = list(regions)
        result = CensusResult()
        if not regions:
            return result
        log_regions(regions)
        with tqdm(total=len(regions), desc="Region progress", unit="region", disable=not self.config.progress) as pbar:
            for scan in self._scan_all(regions):
                result.table += scan.table
                result.stats += scan.stats
                pbar.update()
        logger.info(result.stats.get_repr(f"{len(regions)} regions"))
        return result

    def rank(self, region: str, top_tiers: int | None = None) -> list[RankedEntry]:
        return self.count(region).ranked(self.config.top_tiers if top_tiers is None else top_tiers)

    def rank_regions(self, regions: Sequence[str], top_tiers: int | None = None) -> list[RankedEntry]:
        return self.count_regions(regions).ranked(self.config.top_tiers if top_tiers is None else top_tiers)

    def top_ages(self, region: str, top_tiers: int | None = None) -> list[str]:
        """
            Most common ages of `region`, formatted as "position:age=total".
        Args:
          region: region name
          top_tiers: overrides `config.top_tiers` (Default value = None)

        Returns: one string per ranked age, empty if the region has no valid ages or can not be resolved

        """
        return format_entries(self.rank(region, top_tiers))

    def top_ages_for_regions(self, regions: Sequence[str], top_tiers: int | None = None) -> list[str]:
        """
            Most common ages across all `regions`, formatted as "position:age=total".
        Args:
          regions: region names, duplicates and unknown regions are allowed
          top_tiers: overrides `config.top_tiers` (Default value = None)

        Returns: one string per ranked age

        """
        return format_entries(self.rank_regions(regions, top_tiers))

    def _scan_all(self, regions: list[str]) -> Iterator[RegionScan]:
        workers = min(self.config.parallelism, len(regions))
        if workers == 1:
            for region in regions:
                yield self.scanner.scan(region)
        elif self.config.backend == "process":
            yield from self._scan_with_processes(regions, workers)
        else:
            yield from self._scan_with_threads(regions, workers)

    def _scan_with_threads(self, regions: list[str], workers: int) -> Iterator[RegionScan]:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="agecensus") as executor:
            try:
                futures = {executor.submit(self.scanner.scan, region): region for region in regions}
            except RuntimeError as e:
                raise SchedulingError(f"Could not schedule scans for {len(regions)} regions", regions) from e
            for future in as_completed(futures):
                try:
                    scan = future.result()
                except Exception as e:
                    region = futures[future]
                    raise SchedulingError(f'Scan of region "{region}" could not be completed', [region]) from e
                yield scan

    def _scan_with_processes(self, regions: list[str], workers: int) -> Iterator[RegionScan]:
        ctx = multiprocess.get_context(self.config.start_method)
        try:
            with ctx.Pool(workers) as pool:
                yield from pool.imap_unordered(self.scanner.scan, regions)
        except Exception as e:
            raise SchedulingError(f"Process pool failed while scanning {len(regions)} regions", regions) from e
