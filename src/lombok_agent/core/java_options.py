"""
JAVA_TOOL_OPTIONS helpers.

Adds a Lombok ``-javaagent:`` flag to a JVM options string exactly once.
Detection of an existing flag is format based: any agent path ending in
``lombok.jar`` counts, so a second merge with a different jar is a no-op.
"""

import re
from typing import Any, Optional

# -javaagent:"/path with spaces/lombok.jar" or -javaagent:/path/lombok.jar
LOMBOK_JAVA_AGENT = re.compile(
    r"-javaagent:(?:\"[^\"]*lombok\.jar\"|[^ \"']*lombok\.jar)",
    re.IGNORECASE,
)

_WHITESPACE = re.compile(r"\s")


def _trimmed_or_empty(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def has_lombok_javaagent(options: Any) -> bool:
    """Return True if the options string already carries a Lombok javaagent."""
    return LOMBOK_JAVA_AGENT.search(_trimmed_or_empty(options)) is not None


def format_java_agent_arg(jar_path: Any) -> Optional[str]:
    """
    Build a ``-javaagent:`` token for a jar path.

    Paths containing whitespace are wrapped in double quotes, with embedded
    double quotes backslash-escaped.

    Args:
        jar_path: Path to the agent jar

    Returns:
        The agent token, or None if jar_path is not a non-empty string
    """
    if not isinstance(jar_path, str) or not jar_path:
        return None
    if not _WHITESPACE.search(jar_path):
        return f"-javaagent:{jar_path}"
    escaped = jar_path.replace('"', '\\"')
    return f'-javaagent:"{escaped}"'


def merge_java_tool_options(current: Any, jar_path: Any) -> str:
    """
    Append a Lombok javaagent to a JVM options string unless one is present.

    Args:
        current: Existing options (None and non-strings count as empty)
        jar_path: Path to lombok.jar

    Returns:
        The trimmed options with the agent token appended once
    """
    existing = _trimmed_or_empty(current)
    if LOMBOK_JAVA_AGENT.search(existing):
        return existing

    agent = format_java_agent_arg(jar_path)
    if agent is None:
        return existing
    if not existing:
        return agent
    return f"{existing} {agent}"
