"""Region records produced by the region finder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence


@dataclass(frozen=True)
class Region:
    """
    One candidate photopeak.

    Attributes
    ----------
    left : int
        Channel of the boundary minimum below the peak
    peak : int
        Channel of the peak maximum
    right : int
        Channel of the boundary minimum above the peak
    """

    left: int
    peak: int
    right: int

    def __post_init__(self):
        if not (self.left <= self.peak <= self.right):
            raise ValueError(
                f"Region channels must satisfy left <= peak <= right, "
                f"got ({self.left}, {self.peak}, {self.right})"
            )

    @property
    def width(self) -> int:
        """Number of channels spanned, both boundaries included."""
        return self.right - self.left + 1

    def __repr__(self) -> str:
        return f"Region(left={self.left}, peak={self.peak}, right={self.right})"


@dataclass
class RegionList:
    """
    Ordered boundary/peak channels: min, max, min, max, ..., min.

    Consecutive regions share a boundary, so region i's right channel is
    region i+1's left channel. The number of regions is explicit; channel 0
    is an ordinary boundary value, not an end marker.
    """

    boundaries: List[int] = field(default_factory=list)

    @classmethod
    def from_channels(cls, channels: Sequence[int]) -> 'RegionList':
        """Build from a flat min/max/min channel sequence."""
        return cls(boundaries=[int(c) for c in channels])

    @property
    def count(self) -> int:
        """Number of complete (min, max, min) triples."""
        if len(self.boundaries) < 3:
            return 0
        return (len(self.boundaries) - 1) // 2

    @property
    def regions(self) -> List[Region]:
        """Regions as explicit records."""
        return list(self)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Region]:
        for i in range(self.count):
            left, peak, right = self.boundaries[2 * i:2 * i + 3]
            yield Region(left, peak, right)

    def __getitem__(self, index: int) -> Region:
        return self.regions[index]

    def __bool__(self) -> bool:
        return self.count > 0
