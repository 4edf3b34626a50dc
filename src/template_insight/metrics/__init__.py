"""Metric value objects, directory rollups and hotspot ranking."""

from .directory import DirectoryMetrics, aggregate_by_directory
from .hotspots import Hotspot, HotspotDetector
from .models import (
    BlockMetrics,
    CouplingMetrics,
    DimensionMetrics,
    SecurityMetrics,
    StyleMetrics,
)

__all__ = [
    "BlockMetrics",
    "CouplingMetrics",
    "DimensionMetrics",
    "DirectoryMetrics",
    "Hotspot",
    "HotspotDetector",
    "SecurityMetrics",
    "StyleMetrics",
    "aggregate_by_directory",
]
