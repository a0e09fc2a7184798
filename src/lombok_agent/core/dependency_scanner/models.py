"""
Data models and constants for the dependency scanner module.
"""

import re
from dataclasses import dataclass
from pathlib import Path

# Build descriptors inspected for a Lombok dependency, matched by exact filename
BUILD_FILES: frozenset[str] = frozenset([
    "pom.xml",
    "build.gradle",
    "build.gradle.kts",
])

# Directories the walk never descends into (VCS metadata, dependency caches, build output)
SKIP_DIRS: frozenset[str] = frozenset([
    ".git",
    "node_modules",
    "dist",
    "build",
    "target",
    "out",
    ".next",
    ".turbo",
])

LOMBOK_MATCHERS: tuple[re.Pattern[str], ...] = (
    # Maven: <artifactId>lombok</artifactId>
    re.compile(r"<artifactId>\s*lombok\s*</artifactId>"),
    # Gradle: "org.projectlombok:lombok:1.18.30" or 'org.projectlombok:lombok'
    re.compile(r"[\"']org\.projectlombok:lombok[:\"']"),
    # Gradle plugin id
    re.compile(r"io\.freefair\.lombok"),
)


@dataclass
class ScanResult:
    """
    Outcome of scanning a project tree for a Lombok dependency.

    Attributes:
        detected: True if any build descriptor declares Lombok
        build_file: First build descriptor that matched, if any
        files_inspected: Number of build descriptors read before the walk stopped
    """

    detected: bool
    build_file: Path | None = None
    files_inspected: int = 0

    def __bool__(self) -> bool:
        return self.detected
