from agecensus.data import IterableAgeInput


class TrackingAgeInput(IterableAgeInput):
    """
    Age source that records how it is consumed.
    Args:
        ages: ages to produce
        region: name to register the source under
        fail_on: raise on this pull (1-based) instead of producing an age
        fail_on_close: raise from `close` after recording the call
    """

    def __init__(self, ages, region: str, fail_on: int | None = None, fail_on_close: bool = False):
        super().__init__(ages)
        self.region = region
        self.fail_on = fail_on
        self.fail_on_close = fail_on_close
        self.pulls = 0
        self.close_calls = 0

    def __next__(self) -> int:
        self.pulls += 1
        if self.fail_on is not None and self.pulls == self.fail_on:
            raise RuntimeError("Fake exception")
        return super().__next__()

    def close(self) -> None:
        self.close_calls += 1
        super().close()
        if self.fail_on_close:
            raise OSError("Fake close failure")


class SourceRegistry:
    """Factory serving registered sources. Unknown regions raise, like a failing lookup."""

    def __init__(self):
        self.sources: dict[str, TrackingAgeInput] = {}

    def register(self, source: TrackingAgeInput) -> TrackingAgeInput:
        self.sources[source.region] = source
        return source

    def __call__(self, region: str) -> TrackingAgeInput:
        if region not in self.sources:
            raise RuntimeError(f"Couldn't find region {region}")
        return self.sources[region]


def modulo_factory(region: str) -> IterableAgeInput | None:
    """
    Picklable factory for process pools: region "n%m" produces i % m for i in range(n).
    Other names resolve to None.
    """
    if "%" not in region:
        return None
    n, m = map(int, region.split("%"))
    return IterableAgeInput(i % m for i in range(n))
