from dataclasses import dataclass, field

from loguru import logger

from agecensus.data import AgeInputIterator, AgeSourceFactory, FrequencyTable
from agecensus.utils.stats import ScanStats


@dataclass
class RegionScan:
    """Outcome of scanning a single region."""

    region: str
    table: FrequencyTable = field(default_factory=FrequencyTable)
    stats: ScanStats = field(default_factory=ScanStats)


class RegionScanner:
    """Counts the ages produced by one region's source.

    Any problem with the region (unknown name, source failing while being read, source failing to close) is logged and
    contained: the scan then returns whatever was counted so far. The source is always closed exactly once.

    Args:
        factory: callable returning the source for a region name, or None if the region can not be resolved
    """

    def __init__(self, factory: AgeSourceFactory):
        self.factory = factory

    def open_source(self, region: str) -> AgeInputIterator | None:
        try:
            return self.factory(region)
        except Exception as e:
            logger.opt(exception=e).warning(f'Could not create source for region "{region}"')
            return None

    def scan(self, region: str) -> RegionScan:
        """
            Consume the source for `region` to the end and count every valid age.
        Args:
          region: region name, passed as is to the factory

        Returns: a RegionScan with the (possibly partial, possibly empty) frequency table

        """
        result = RegionScan(region)
        stats = result.stats
        stats.regions = 1
        with stats:
            source = self.open_source(region)
            if source is None:
                logger.warning(f'Region "{region}" could not be resolved, counting it as empty')
                stats.unresolved += 1
                return result
            try:
                for age in source:
                    if result.table.record(age):
                        stats.counted += 1
                    else:
                        stats.invalid += 1
            except Exception as e:
                stats.faults += 1
                logger.opt(exception=e).warning(f'Source for region "{region}" failed after {stats.observations} ages')
            finally:
                self._release(source, region, stats)
        logger.debug(f'Scanned region "{region}": {stats.counted} ages counted, {stats.invalid} invalid')
        return result

    def frequencies(self, region: str) -> FrequencyTable:
        return self.scan(region).table

    @staticmethod
    def _release(source: AgeInputIterator, region: str, stats: ScanStats):
        try:
            source.close()
        except Exception as e:
            stats.release_faults += 1
            logger.opt(exception=e).warning(f'Source for region "{region}" failed to close')

    def __call__(self, region: str) -> RegionScan:
        return self.scan(region)
