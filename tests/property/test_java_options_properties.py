"""
Property-based tests for JAVA_TOOL_OPTIONS merging.

**Feature: lombok-agent, Property 3: Merge Idempotence**
**Feature: lombok-agent, Property 4: Existing Options Preserved**
**Feature: lombok-agent, Property 5: Agent Quoting**
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from lombok_agent.core.java_options import (
    format_java_agent_arg,
    has_lombok_javaagent,
    merge_java_tool_options,
)
from tests.support.lombok_strategies import jvm_options, lombok_jar_path, path_segment

surrounding_whitespace = st.text(alphabet=" \t\n", max_size=3)


@given(options=jvm_options, jar=lombok_jar_path(), pad=surrounding_whitespace)
@settings(max_examples=100)
def test_merge_is_idempotent(options: str, jar: str, pad: str):
    """
    **Feature: lombok-agent, Property 3: Merge Idempotence**

    *For any* options string X and jar path, merge(merge(X, jar), jar) == merge(X, jar).
    """
    once = merge_java_tool_options(f"{pad}{options}{pad}", jar)

    assert merge_java_tool_options(once, jar) == once
    assert has_lombok_javaagent(once)


@given(options=jvm_options, first=lombok_jar_path(), second=lombok_jar_path())
@settings(max_examples=100)
def test_first_agent_wins(options: str, first: str, second: str):
    """A later merge with a different jar never replaces the first agent."""
    once = merge_java_tool_options(options, first)

    assert merge_java_tool_options(once, second) == once


@given(options=jvm_options.filter(bool), jar=lombok_jar_path())
@settings(max_examples=100)
def test_existing_options_are_preserved(options: str, jar: str):
    """
    **Feature: lombok-agent, Property 4: Existing Options Preserved**

    *For any* non-empty options without a Lombok agent, the merged value starts
    with the original options followed by a single space and the agent token.
    """
    merged = merge_java_tool_options(options, jar)

    assert merged.startswith(options + " ")
    assert merged == f"{options} {format_java_agent_arg(jar)}"


@given(segments=st.lists(path_segment, min_size=1, max_size=5))
@settings(max_examples=100)
def test_paths_without_whitespace_are_verbatim(segments: list[str]):
    """
    **Feature: lombok-agent, Property 5: Agent Quoting**

    *For any* path without whitespace the token is ``-javaagent:<path>``.
    """
    path = "/" + "/".join(segments)

    assert format_java_agent_arg(path) == f"-javaagent:{path}"


@given(
    head=st.text(max_size=20),
    space=st.sampled_from([" ", "\t", "\n"]),
    tail=st.text(max_size=20),
)
@settings(max_examples=100)
def test_paths_with_whitespace_are_quoted_and_escaped(head: str, space: str, tail: str):
    """*For any* path with whitespace the token is double quoted with escaped quotes."""
    path = f"{head}{space}{tail}"
    token = format_java_agent_arg(path)

    assert token.startswith('-javaagent:"')
    assert token.endswith('"')
    inner = token[len('-javaagent:"') : -1]
    assert inner == path.replace('"', '\\"')
