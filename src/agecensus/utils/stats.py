import datetime
import json
import time
from dataclasses import asdict, dataclass, fields
from typing import TextIO

import humanize


INDENT = " " * 4


@dataclass
class ScanStats:
    """
    Counters collected while scanning one or more regions.
    Stats from different scans are combined with `+`.
    """

    regions: int = 0
    counted: int = 0
    invalid: int = 0
    faults: int = 0
    unresolved: int = 0
    release_faults: int = 0
    elapsed: float = 0.0

    def __enter__(self):
        self._entry_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed += time.perf_counter() - self._entry_time

    def __add__(self, other):
        if not isinstance(other, ScanStats):
            return NotImplemented
        return ScanStats(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})

    def __radd__(self, other):
        # lets sum() start from 0
        if other == 0:
            return self
        return self.__add__(other)

    @property
    def observations(self) -> int:
        return self.counted + self.invalid

    def get_repr(self, text=None):
        """

        Args:
          text:  (Default value = None)

        Returns:

        """
        lines = [
            f"{'📉' * 3} Census stats{': ' + text if text else ''} {'📉' * 3}",
            f"Regions: {humanize.intcomma(self.regions)}",
            f"Observations: {humanize.intcomma(self.observations)}"
            + (f" ({humanize.intcomma(self.invalid)} invalid)" if self.invalid else ""),
            "Scan time: "
            + humanize.precisedelta(datetime.timedelta(seconds=self.elapsed), minimum_unit="milliseconds"),
        ]
        if self.unresolved:
            lines.append(f"Unresolved regions: {humanize.intcomma(self.unresolved)}")
        if self.faults:
            lines.append(f"Faulted regions: {humanize.intcomma(self.faults)}")
        if self.release_faults:
            lines.append(f"Release faults: {humanize.intcomma(self.release_faults)}")
        return f"\n{INDENT}".join(lines)

    def __repr__(self):
        return self.get_repr()

    def to_dict(self):
        return {a: b for a, b in asdict(self).items() if b}

    def to_json(self):
        return json.dumps(self.to_dict(), indent=4)

    def save_to_disk(self, file: TextIO):
        file.write(self.to_json())
