class CensusError(Exception):
    """Base class for errors raised by agecensus."""


class SchedulingError(CensusError):
    """The worker pool could not run one or more region scans.

    Region level problems (unknown regions, sources failing mid-scan) never raise; this is only raised when the
    aggregation itself could not be carried out.
    """

    def __init__(self, message: str, regions: list[str] | None = None):
        super().__init__(message)
        self.regions = regions or []
