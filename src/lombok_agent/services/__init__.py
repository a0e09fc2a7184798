"""
Service Layer - LombokSetupService and ServicesContainer.
"""

from lombok_agent.services.container import ServicesContainer, create_services
from lombok_agent.services.setup_models import SetupResult, SetupStatus
from lombok_agent.services.setup_service import (
    LombokSetupService,
    jdtls_disabled,
    lsp_disabled,
)

__all__ = [
    # Container and factory
    "ServicesContainer",
    "create_services",
    # Setup
    "LombokSetupService",
    "SetupResult",
    "SetupStatus",
    "jdtls_disabled",
    "lsp_disabled",
]
