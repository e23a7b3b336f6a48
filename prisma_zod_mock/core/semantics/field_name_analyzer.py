"""
Field Name Analyzer
===================

Infer what a field holds from its name alone. The table is ordered; the first
matching pattern wins, so "avatarUrl" is an image and "cityName" an address.
"""

from enum import Enum
from typing import Dict, Pattern
import re


class SemanticType(str, Enum):
    """Semantic categories a field name can fall into."""
    EMAIL = "email"
    NAME = "name"
    PHONE = "phone"
    ADDRESS = "address"
    URL = "url"
    DESCRIPTION = "description"
    TITLE = "title"
    DATE = "date"
    IMAGE = "image"
    PRICE = "price"
    COUNTRY = "country"
    COMPANY = "company"
    UNKNOWN = "unknown"


SEMANTIC_PATTERNS: Dict[SemanticType, Pattern[str]] = {
    SemanticType.EMAIL: re.compile(r"email|mail", re.IGNORECASE),
    SemanticType.PHONE: re.compile(r"phone|tel|mobile", re.IGNORECASE),
    SemanticType.ADDRESS: re.compile(r"address|street|city|zip|postal", re.IGNORECASE),
    SemanticType.IMAGE: re.compile(r"image|avatar|photo|picture", re.IGNORECASE),
    SemanticType.URL: re.compile(r"url|website|link|homepage", re.IGNORECASE),
    SemanticType.DESCRIPTION: re.compile(r"description|desc|bio|about|summary", re.IGNORECASE),
    SemanticType.TITLE: re.compile(r"title|heading|subject|headline", re.IGNORECASE),
    SemanticType.DATE: re.compile(
        r"date|createdAt|updatedAt|deletedAt|publishedAt|birthDate", re.IGNORECASE
    ),
    SemanticType.PRICE: re.compile(r"price|cost|amount|total|subtotal|fee", re.IGNORECASE),
    SemanticType.COUNTRY: re.compile(r"country", re.IGNORECASE),
    SemanticType.COMPANY: re.compile(r"company|organization|employer", re.IGNORECASE),
    SemanticType.NAME: re.compile(r"name|firstName|lastName", re.IGNORECASE),
}


NUMERIC_TYPES = {"Int", "Float", "Decimal"}


def semantic_fits_type(semantic_type: SemanticType, field_type: str) -> bool:
    """Whether a semantic value can be stored in a field of the given Prisma type."""
    if semantic_type == SemanticType.UNKNOWN:
        return False
    if semantic_type == SemanticType.DATE:
        return field_type == "DateTime"
    if semantic_type == SemanticType.PRICE:
        return field_type in NUMERIC_TYPES
    return field_type == "String"


def analyze_field_name(field_name: str) -> SemanticType:
    """
    Classify a field name.

    Args:
        field_name: Field name in any casing

    Returns:
        First matching SemanticType, or SemanticType.UNKNOWN
    """
    for semantic_type, pattern in SEMANTIC_PATTERNS.items():
        if pattern.search(field_name):
            return semantic_type
    return SemanticType.UNKNOWN
