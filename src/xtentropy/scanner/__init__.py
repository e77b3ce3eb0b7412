"""Scanner — entropy engine, item collector, coordinator, session runner."""

from xtentropy.scanner.collector import ItemCollector
from xtentropy.scanner.coordinator import ScanCoordinator
from xtentropy.scanner.entropy import compute_entropy, format_entropy
from xtentropy.scanner.models import Annotation, ScanReport, VolumeReport

__all__ = [
    "Annotation",
    "ItemCollector",
    "ScanCoordinator",
    "ScanReport",
    "VolumeReport",
    "compute_entropy",
    "format_entropy",
]
