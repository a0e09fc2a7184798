"""
Lombok setup service.

Runs the configuration-time flow: gate on the host's language server
settings, look for Lombok in the project, make lombok.jar available and
add it to JAVA_TOOL_OPTIONS as a javaagent.
"""

import logging
import os
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Optional

from lombok_agent.core.dependency_scanner import DependencyScannerInterface, LombokScanner
from lombok_agent.core.java_options import merge_java_tool_options
from lombok_agent.core.path_utils import (
    is_lsp_download_disabled,
    lombok_jar_path,
    opencode_data_dir,
)
from lombok_agent.infrastructure.lombok_jar import JarProvisionerInterface, LombokJarProvisioner
from lombok_agent.services.setup_models import SetupResult, SetupStatus

logger = logging.getLogger(__name__)

SERVICE_NAME = "plugin.lombok"
JAVA_TOOL_OPTIONS_ENV = "JAVA_TOOL_OPTIONS"


def jdtls_disabled(lsp_config: Any) -> bool:
    """Return True if the host configuration disables the jdtls server."""
    if not isinstance(lsp_config, Mapping):
        return False
    jdtls = lsp_config.get("jdtls")
    if not isinstance(jdtls, Mapping):
        return False
    return bool(jdtls.get("disabled"))


def lsp_disabled(lsp_config: Any) -> bool:
    """Return True if language servers are off globally or jdtls is off."""
    return lsp_config is False or jdtls_disabled(lsp_config)


class LombokSetupService:
    """
    Configures the Lombok javaagent for JVM-based language servers.

    Emits three host-facing log events on the ``lombok_agent.services``
    logger: dependency detected, jar unavailable, and javaagent configured
    (or already configured).
    """

    def __init__(
        self,
        scanner: Optional[DependencyScannerInterface] = None,
        provisioner: Optional[JarProvisionerInterface] = None,
        platform: Optional[str] = None,
        home: Optional[str] = None,
    ):
        """
        Initialize the setup service.

        Args:
            scanner: Dependency scanner. Defaults to LombokScanner().
            provisioner: Jar provisioner. Defaults to LombokJarProvisioner().
            platform: Platform identifier used to locate the data directory
            home: Home directory used to locate the data directory
        """
        self._scanner = scanner or LombokScanner()
        self._provisioner = provisioner or LombokJarProvisioner()
        self._platform = platform
        self._home = home

    async def close(self) -> None:
        await self._provisioner.close()

    def jar_path(self, environ: Mapping[str, Any]) -> str:
        """Location of the cached jar for the given environment."""
        data_dir = opencode_data_dir(platform=self._platform, env=environ, home=self._home)
        return lombok_jar_path(data_dir)

    async def configure(
        self,
        project_root: Path | str,
        lsp_config: Any = None,
        environ: Optional[MutableMapping[str, str]] = None,
    ) -> SetupResult:
        """
        Configure the Lombok javaagent for a project.

        Args:
            project_root: Directory of the project to inspect
            lsp_config: Host language server settings. False disables all
                        servers; ``{"jdtls": {"disabled": True}}`` disables jdtls.
            environ: Environment to read and update. Defaults to ``os.environ``.

        Returns:
            SetupResult describing what happened. Never raises for missing
            files, network failures or malformed input.
        """
        environ = environ if environ is not None else os.environ

        if lsp_disabled(lsp_config):
            logger.debug("Language server support disabled, skipping Lombok setup")
            return SetupResult(status=SetupStatus.SKIPPED_LSP_DISABLED)

        scan = await self._scanner.scan(project_root)
        if not scan.detected:
            return SetupResult(status=SetupStatus.NOT_DETECTED)

        logger.info(
            "Lombok dependency detected",
            extra={"service": SERVICE_NAME, "build_file": str(scan.build_file)},
        )

        download_disabled = is_lsp_download_disabled(environ)
        jar = await self._provisioner.ensure(
            self.jar_path(environ), download_disabled=download_disabled
        )
        if jar is None:
            logger.warning(
                "Lombok detected but lombok.jar is unavailable",
                extra={"service": SERVICE_NAME, "download_disabled": download_disabled},
            )
            return SetupResult(
                status=SetupStatus.JAR_UNAVAILABLE,
                build_file=scan.build_file,
                download_disabled=download_disabled,
            )

        current = environ.get(JAVA_TOOL_OPTIONS_ENV)
        existing = current.strip() if isinstance(current, str) else ""
        merged = merge_java_tool_options(current, str(jar))
        environ[JAVA_TOOL_OPTIONS_ENV] = merged

        if merged == existing:
            logger.info(
                "JAVA_TOOL_OPTIONS already has a Lombok javaagent",
                extra={"service": SERVICE_NAME, "jar_path": str(jar)},
            )
            status = SetupStatus.ALREADY_CONFIGURED
        else:
            logger.info(
                "Configured Lombok javaagent for JVM-based language servers",
                extra={"service": SERVICE_NAME, "jar_path": str(jar)},
            )
            status = SetupStatus.CONFIGURED

        return SetupResult(
            status=status,
            build_file=scan.build_file,
            jar_path=jar,
            java_tool_options=merged,
            download_disabled=download_disabled,
        )
