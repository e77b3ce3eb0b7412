"""Report data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Annotation:
    """Entropy text attached to one item."""

    item_id: int
    item_name: str
    volume: str
    text: str
    category: str = "entropy"

    @property
    def entropy(self) -> float:
        return float(self.text)


@dataclass
class VolumeReport:
    """Outcome of the two phases for one volume."""

    key: str
    item_count: int = 0
    collected: int = 0
    prepare_code: int = 0
    status: Optional[str] = None  # FinalizeStatus name, None when not finalized


@dataclass
class ScanReport:
    """Complete result of a session over every volume of a host."""

    volumes: List[VolumeReport] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
    aborted: bool = False  # a fatal condition ended the run
    cancelled: bool = False
    scan_duration_ms: float = 0.0

    @property
    def total_annotations(self) -> int:
        return len(self.annotations)

    @property
    def total_items(self) -> int:
        return sum(v.collected for v in self.volumes)
