"""
Mock Annotations
================

Parse `@mock` directives out of Prisma field documentation comments and turn
them into TypeScript mock expressions.

Supported forms, one per documentation line:

    @mock faker.internet.email()
    @mock `${this.firstName}@example.com`   (uses faker. elsewhere: custom)
    @mock "ADMIN"
    @mock.range(18, 99)
    @mock.pattern("[A-Z]{3}-[0-9]{4}")
    @mock.enum(small, "medium", 'large')
    @mock.relationDepth(2)
"""

from enum import Enum
from typing import List, Optional
import re

from pydantic import BaseModel, Field

from prisma_zod_mock.models.schemas import DMMFField, FLOAT_TYPES


class AnnotationType(str, Enum):
    """Kinds of @mock directive."""
    FAKER = "faker"
    CUSTOM = "custom"
    FIXED = "fixed"
    RANGE = "range"
    PATTERN = "pattern"
    ENUM = "enum"
    RELATION_DEPTH = "relation_depth"


class MockAnnotation(BaseModel):
    """A parsed @mock directive."""
    type: AnnotationType
    value: Optional[str] = None
    min: Optional[int] = None
    max: Optional[int] = None
    pattern: Optional[str] = None
    options: List[str] = Field(default_factory=list)
    depth: Optional[int] = None


COMMENT_PREFIX = re.compile(r"^/{2,3}\s*")
RANGE_RE = re.compile(r"@mock\.range\s*\(\s*(-?\d+)\s*,\s*(-?\d+)\s*\)")
PATTERN_RE = re.compile(r"""@mock\.pattern\s*\(\s*["'](.+?)["']\s*\)""")
ENUM_RE = re.compile(r"@mock\.enum\s*\((.+)\)")
RELATION_DEPTH_RE = re.compile(r"@mock\.relationDepth\s*\(\s*(\d+)\s*\)")
THIS_REF_RE = re.compile(r"\bthis\.([A-Za-z_$][\w$]*)")


def _parse_line(line: str) -> Optional[MockAnnotation]:
    if line.startswith("@mock "):
        expression = line[len("@mock "):].strip()
        if not expression:
            return None
        if expression.startswith("faker."):
            return MockAnnotation(type=AnnotationType.FAKER, value=expression)
        if "faker." in expression:
            return MockAnnotation(type=AnnotationType.CUSTOM, value=expression)
        return MockAnnotation(type=AnnotationType.FIXED, value=expression)

    match = RANGE_RE.search(line)
    if match:
        return MockAnnotation(
            type=AnnotationType.RANGE, min=int(match.group(1)), max=int(match.group(2))
        )

    match = PATTERN_RE.search(line)
    if match:
        return MockAnnotation(type=AnnotationType.PATTERN, pattern=match.group(1))

    match = ENUM_RE.search(line)
    if match:
        options = [
            option.strip().replace('"', "").replace("'", "")
            for option in match.group(1).split(",")
        ]
        return MockAnnotation(type=AnnotationType.ENUM, options=[o for o in options if o])

    match = RELATION_DEPTH_RE.search(line)
    if match:
        return MockAnnotation(type=AnnotationType.RELATION_DEPTH, depth=int(match.group(1)))

    return None


def parse_mock_annotation(field: DMMFField) -> Optional[MockAnnotation]:
    """
    Find the first @mock directive in a field's documentation.

    Args:
        field: DMMF field

    Returns:
        Parsed annotation, or None when there is no recognised directive
    """
    if not field.documentation:
        return None

    for raw_line in field.documentation.splitlines():
        line = COMMENT_PREFIX.sub("", raw_line.strip()).strip()
        annotation = _parse_line(line)
        if annotation is not None:
            return annotation
    return None


def _quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def generate_mock_expression(annotation: MockAnnotation, field: DMMFField) -> Optional[str]:
    """
    TypeScript expression for a value annotation.

    Returns None for relation_depth, which bounds recursion rather than
    producing a value.
    """
    kind = annotation.type

    if kind in (AnnotationType.FAKER, AnnotationType.CUSTOM, AnnotationType.FIXED):
        return annotation.value or "null"

    if kind == AnnotationType.RANGE:
        if field.type in FLOAT_TYPES:
            return f"faker.number.float({{ min: {annotation.min}, max: {annotation.max} }})"
        return f"faker.number.int({{ min: {annotation.min}, max: {annotation.max} }})"

    if kind == AnnotationType.PATTERN:
        pattern = (annotation.pattern or "").replace("\\", "\\\\").replace("'", "\\'")
        return f"faker.helpers.fromRegExp('{pattern}')"

    if kind == AnnotationType.ENUM:
        if not annotation.options:
            return "null"
        quoted = ", ".join(_quote(option) for option in annotation.options)
        return f"faker.helpers.arrayElement([{quoted}])"

    return None


def references_this(expression: Optional[str]) -> bool:
    """Whether an expression reads sibling fields through this.<name>."""
    return bool(expression) and THIS_REF_RE.search(expression or "") is not None


def rewrite_this_references(expression: str, target: str = "baseData") -> str:
    """Rewrite this.<name> to <target>.<name>."""
    return THIS_REF_RE.sub(lambda m: f"{target}.{m.group(1)}", expression)
