"""
Dependency scanner module for lombok-agent.

Provides a recursive, pattern-based search of Maven and Gradle build
descriptors for a Lombok dependency.
"""

from .interfaces import DependencyScannerInterface
from .models import BUILD_FILES, LOMBOK_MATCHERS, SKIP_DIRS, ScanResult
from .scanner import LombokScanner, detect_lombok_dependency, has_lombok_dependency

__all__ = [
    # Main classes
    "LombokScanner",
    "DependencyScannerInterface",
    "ScanResult",
    # Functions
    "detect_lombok_dependency",
    "has_lombok_dependency",
    # Constants
    "BUILD_FILES",
    "SKIP_DIRS",
    "LOMBOK_MATCHERS",
]
