"""Discovery engine: scanning, framework detection and the coordinator."""

from configflow.core.coordinator import DiscoveryCoordinator, aggregate_usages, discover
from configflow.core.detector import FrameworkDetector, detect_frameworks
from configflow.core.scanner import ScanOptions, Scanner, scan_directory

__all__ = [
    "DiscoveryCoordinator",
    "aggregate_usages",
    "discover",
    "FrameworkDetector",
    "detect_frameworks",
    "ScanOptions",
    "Scanner",
    "scan_directory",
]
