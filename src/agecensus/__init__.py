from agecensus.census import Census, CensusResult
from agecensus.config import CensusConfig
from agecensus.data import (
    OUTPUT_FORMAT,
    AgeInputIterator,
    AgeSourceFactory,
    FrequencyTable,
    IterableAgeInput,
    RankedEntry,
)
from agecensus.errors import CensusError, SchedulingError
from agecensus.ranker import format_entries, rank_frequencies
from agecensus.scanner import RegionScan, RegionScanner
from agecensus.sources import FileAgeInput, folder_factory, list_regions
