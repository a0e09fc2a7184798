"""
Infrastructure Layer - lombok.jar provisioning.
"""

from lombok_agent.infrastructure.lombok_jar import (
    LOMBOK_URL,
    DownloadRequestError,
    DownloadStatusError,
    JarDownloadError,
    JarProvisionerInterface,
    JarWriteError,
    LombokJarProvisioner,
    ensure_lombok_jar,
    resolve_file_path,
)

__all__ = [
    "JarProvisionerInterface",
    "LombokJarProvisioner",
    "ensure_lombok_jar",
    "resolve_file_path",
    "LOMBOK_URL",
    "JarDownloadError",
    "DownloadRequestError",
    "DownloadStatusError",
    "JarWriteError",
]
