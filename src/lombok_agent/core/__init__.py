"""
Core Layer - Configuration, dependency scanning, JVM option merging and path resolution.
"""

from lombok_agent.core.config import (
    LoggingConfig,
    LombokAgentConfig,
    ProvisionerConfig,
    ScannerConfig,
    load_config,
)
from lombok_agent.core.dependency_scanner import (
    BUILD_FILES,
    SKIP_DIRS,
    DependencyScannerInterface,
    LombokScanner,
    ScanResult,
    detect_lombok_dependency,
    has_lombok_dependency,
)
from lombok_agent.core.java_options import (
    format_java_agent_arg,
    has_lombok_javaagent,
    merge_java_tool_options,
)
from lombok_agent.core.path_utils import (
    is_lsp_download_disabled,
    lombok_jar_path,
    opencode_data_dir,
)

__all__ = [
    # Config
    "LombokAgentConfig",
    "ProvisionerConfig",
    "ScannerConfig",
    "LoggingConfig",
    "load_config",
    # Dependency scanner
    "DependencyScannerInterface",
    "LombokScanner",
    "ScanResult",
    "detect_lombok_dependency",
    "has_lombok_dependency",
    "BUILD_FILES",
    "SKIP_DIRS",
    # JVM options
    "format_java_agent_arg",
    "has_lombok_javaagent",
    "merge_java_tool_options",
    # Paths
    "opencode_data_dir",
    "lombok_jar_path",
    "is_lsp_download_disabled",
]
