"""
lombok.jar provisioning module for lombok-agent.

Provides an async HTTP download of lombok.jar into the local data
directory, performed at most once and skipped when downloads are disabled.
"""

from .errors import (
    DownloadRequestError,
    DownloadStatusError,
    JarDownloadError,
    JarWriteError,
)
from .interface import JarProvisionerInterface
from .provisioner import (
    LOMBOK_URL,
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
