"""Abstract interface for jar provisioners."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional


class JarProvisionerInterface(ABC):
    """Abstract interface for making an agent jar available on disk."""

    @abstractmethod
    async def ensure(self, target: Any, download_disabled: bool = False) -> Optional[Path]:
        """
        Make sure the jar exists at target.

        Args:
            target: Destination path (str, Path or file:// URL)
            download_disabled: If True, never touch the network

        Returns:
            Path of the jar, or None if it is unavailable
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
