"""
Setup Service data models.

Contains the status enum and result dataclass reported by LombokSetupService.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SetupStatus(str, Enum):
    """Outcome of a Lombok setup run."""

    SKIPPED_LSP_DISABLED = "skipped_lsp_disabled"
    NOT_DETECTED = "not_detected"
    JAR_UNAVAILABLE = "jar_unavailable"
    CONFIGURED = "configured"
    ALREADY_CONFIGURED = "already_configured"


@dataclass
class SetupResult:
    """Result of a setup run."""

    status: SetupStatus
    build_file: Path | None = None
    jar_path: Path | None = None
    java_tool_options: str | None = None
    download_disabled: bool = False

    @property
    def configured(self) -> bool:
        """True if JAVA_TOOL_OPTIONS carries the Lombok javaagent after the run."""
        return self.status in (SetupStatus.CONFIGURED, SetupStatus.ALREADY_CONFIGURED)
