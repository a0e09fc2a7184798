"""
Fake implementations for testing.

Provides in-memory implementations of infrastructure interfaces
for use in unit and integration tests without network access.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from lombok_agent.infrastructure.lombok_jar import JarProvisionerInterface, resolve_file_path


class LocalJarProvisioner(JarProvisionerInterface):
    """
    Jar provisioner that never touches the network.

    Behaves like LombokJarProvisioner with a download that writes a fixed
    payload, or fails when ``available`` is False. Records every call so tests
    can assert on how the provisioner was used.
    """

    def __init__(self, available: bool = True, payload: bytes = b"PK\x03\x04lombok"):
        """
        Initialize the fake.

        Args:
            available: Whether a simulated download succeeds
            payload: Bytes written on a simulated download
        """
        self.available = available
        self.payload = payload
        self.calls: list[tuple[Any, bool]] = []
        self.downloads = 0

    async def ensure(self, target: Any, download_disabled: bool = False) -> Path | None:
        """Ensure the jar exists, simulating the download step."""
        self.calls.append((target, download_disabled))

        path = resolve_file_path(target)
        if path is None:
            return None
        if path.exists():
            return path
        if download_disabled or not self.available:
            return None

        self.downloads += 1
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.payload)
        return path
