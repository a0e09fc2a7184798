"""
Centralized services container module for lombok-agent.

Builds the scanner, provisioner and setup service from configuration so the
CLI and host integrations share one wiring.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lombok_agent.core.config import LombokAgentConfig, load_config
from lombok_agent.core.dependency_scanner import LombokScanner
from lombok_agent.infrastructure.lombok_jar import LombokJarProvisioner
from lombok_agent.services.setup_service import LombokSetupService


@dataclass
class ServicesContainer:
    """
    Container holding all shared service instances.

    Attributes:
        config: Application configuration
        scanner: Build file scanner
        provisioner: lombok.jar provisioner
        setup_service: End-to-end setup flow
    """

    config: LombokAgentConfig
    scanner: LombokScanner
    provisioner: LombokJarProvisioner
    setup_service: LombokSetupService

    async def close(self) -> None:
        """Release network resources held by the provisioner."""
        await self.provisioner.close()


def create_services(
    config_path: Optional[Path] = None,
    config: Optional[LombokAgentConfig] = None,
) -> ServicesContainer:
    """
    Create and initialize all services.

    Args:
        config_path: Optional path to configuration file. If None, uses
                    environment variables and defaults.
        config: Already loaded configuration. Takes precedence over config_path.

    Returns:
        ServicesContainer with all initialized services.
    """
    config = config or load_config(config_path)

    scanner = LombokScanner(
        build_files=config.scanner.build_files,
        skip_dirs=config.scanner.skip_dirs,
        follow_symlinks=config.scanner.follow_symlinks,
    )

    provisioner = LombokJarProvisioner(
        download_url=config.provisioner.download_url,
        timeout=config.provisioner.timeout,
    )

    setup_service = LombokSetupService(scanner=scanner, provisioner=provisioner)

    return ServicesContainer(
        config=config,
        scanner=scanner,
        provisioner=provisioner,
        setup_service=setup_service,
    )
