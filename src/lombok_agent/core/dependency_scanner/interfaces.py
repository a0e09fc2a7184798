"""
Abstract interfaces for dependency scanning operations.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from .models import ScanResult


class DependencyScannerInterface(ABC):
    """
    Abstract interface for project dependency detection.

    Implementations walk a project tree and report whether any recognised
    build descriptor declares the dependency they look for.
    """

    @abstractmethod
    async def scan(self, root_path: Path) -> ScanResult:
        """
        Recursively scan a directory for the dependency.

        Args:
            root_path: Root directory to scan

        Returns:
            ScanResult describing the first match, or a negative result

        Notes:
            - Never raises; unreadable directories and files count as absent
            - Stops at the first matching build descriptor
        """
        pass
