"""
Test Assertions
===============

Custom assertion helpers for generator and parser tests.
"""

from typing import List, Optional
import re

from prisma_zod_mock.models.schemas import GeneratedFile, ParseResult


def assert_successful_parse_result(result: ParseResult) -> None:
    """Assert that a parse result is successful."""
    assert isinstance(result, ParseResult)
    assert result.success is True
    assert result.options is not None
    assert len(result.errors) == 0
    assert result.processing_time is not None
    assert result.processing_time >= 0


def assert_failed_parse_result(result: ParseResult, expected_error: Optional[str] = None) -> None:
    """Assert that a parse result failed, optionally with a matching error."""
    assert isinstance(result, ParseResult)
    assert result.success is False
    assert result.options is None
    assert len(result.errors) > 0
    if expected_error:
        assert any(expected_error in error for error in result.errors), result.errors


def assert_balanced_braces(source: str) -> None:
    """Assert that generated TypeScript has balanced brackets."""
    for opening, closing in ("{}", "()", "[]"):
        assert source.count(opening) == source.count(closing), (
            f"Unbalanced {opening}{closing} in generated source"
        )


def assert_file_paths(files: List[GeneratedFile], expected: List[str]) -> None:
    """Assert the exact set of generated file paths."""
    assert sorted(f.path for f in files) == sorted(expected)


def get_file(files: List[GeneratedFile], path: str) -> GeneratedFile:
    """Find a generated file by path."""
    for generated in files:
        if generated.path == path:
            return generated
    raise AssertionError(f"{path} not generated; got {[f.path for f in files]}")


def extract_object_field(source: str, field_name: str) -> str:
    """Return the expression assigned to a field inside a generated object literal."""
    match = re.search(rf"^\s+{re.escape(field_name)}: (.+),$", source, re.MULTILINE)
    assert match, f"Field {field_name} not found in generated source"
    return match.group(1)
