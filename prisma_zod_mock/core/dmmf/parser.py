"""
DMMF Parser
===========

Load generator option documents (the Prisma generator options with the DMMF
datamodel) from JSON or YAML, validate their structure with Cerberus and
convert them into pydantic models.

Three document shapes are accepted:

- full generator options: {"generator": {...}, "dmmf": {"datamodel": {...}}}
- a DMMF document:       {"datamodel": {...}}
- a bare datamodel:      {"models": [...], "enums": [...]}
"""

from typing import Dict, List, Any, Optional, Tuple
import json
import time
from abc import ABC, abstractmethod

import yaml  # type: ignore[import-untyped]
from cerberus import Validator  # type: ignore[import-untyped]
from pydantic import ValidationError

from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.models.schemas import FieldKind, GeneratorOptions, ParseResult

logger = get_logger(__name__)


class DMMFParseError(Exception):
    """Exception raised when a generator options document cannot be parsed."""

    pass


class DMMFValidator:
    """Structural DMMF validation using Cerberus schemas."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="validator")
        self._setup_schemas()

    def _setup_schemas(self) -> None:
        """Setup validation schemas."""
        flag = {"type": "boolean"}

        self.field_schema = {
            "name": {"type": "string", "required": True, "empty": False},
            "kind": {
                "type": "string",
                "required": True,
                "allowed": [k.value for k in FieldKind],
            },
            "type": {"type": "string", "required": True, "empty": False},
            "isList": flag,
            "isRequired": flag,
            "isUnique": flag,
            "isId": flag,
            "isReadOnly": flag,
            "isGenerated": flag,
            "isUpdatedAt": flag,
            "hasDefaultValue": flag,
            "relationName": {"type": "string", "nullable": True},
            "relationFromFields": {"type": "list", "nullable": True, "schema": {"type": "string"}},
            "relationToFields": {"type": "list", "nullable": True, "schema": {"type": "string"}},
            "documentation": {"type": "string", "nullable": True},
        }

        self.model_schema = {
            "name": {"type": "string", "required": True, "empty": False},
            "dbName": {"type": "string", "nullable": True},
            "fields": {
                "type": "list",
                "required": True,
                "schema": {"type": "dict", "schema": self.field_schema},
            },
            "primaryKey": {"type": "dict", "nullable": True},
            "uniqueFields": {"type": "list", "nullable": True},
            "documentation": {"type": "string", "nullable": True},
        }

        self.enum_schema = {
            "name": {"type": "string", "required": True, "empty": False},
            "values": {
                "type": "list",
                "required": True,
                "schema": {"type": ["dict", "string"]},
            },
            "documentation": {"type": "string", "nullable": True},
        }

        self.datamodel_schema: Dict[str, Any] = {
            "models": {
                "type": "list",
                "required": True,
                "schema": {"type": "dict", "schema": self.model_schema},
            },
            "enums": {
                "type": "list",
                "default": [],
                "schema": {"type": "dict", "schema": self.enum_schema},
            },
            "types": {"type": "list", "default": []},
        }

    def validate_datamodel(self, data: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
        """
        Validate datamodel structure.

        Args:
            data: Raw datamodel mapping

        Returns:
            Tuple of (is_valid, errors, warnings)
        """
        validator = Validator(self.datamodel_schema)  # type: ignore[misc]
        validator.allow_unknown = True

        is_valid = validator.validate(data)  # type: ignore[misc]
        errors: List[str] = []
        warnings: List[str] = []

        if not is_valid:
            errors.extend(self._format_validation_errors(validator.errors))  # type: ignore[attr-defined]
            return False, errors, warnings

        custom_errors, custom_warnings = self._perform_custom_validations(data)
        errors.extend(custom_errors)
        warnings.extend(custom_warnings)

        return len(errors) == 0, errors, warnings

    def _format_validation_errors(self, errors: Any, path: str = "") -> List[str]:
        """Format Cerberus validation errors into readable messages."""
        formatted_errors: List[str] = []

        for field, error_info in errors.items():
            current_path = f"{path}.{field}" if path else str(field)

            if isinstance(error_info, list):
                for error in error_info:
                    if isinstance(error, dict):
                        formatted_errors.extend(self._format_validation_errors(error, current_path))
                    else:
                        formatted_errors.append(f"{current_path}: {error}")
            elif isinstance(error_info, dict):
                formatted_errors.extend(self._format_validation_errors(error_info, current_path))

        return formatted_errors

    def _perform_custom_validations(self, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        """Cross-reference checks Cerberus cannot express."""
        errors: List[str] = []
        warnings: List[str] = []

        models = data.get("models", [])
        model_names = [m["name"] for m in models]
        enum_names = {e["name"] for e in data.get("enums", [])}

        seen = set()
        for name in model_names:
            if name in seen:
                errors.append(f"models: Duplicate model name '{name}'")
            seen.add(name)

        for model in models:
            fields = model.get("fields", [])
            for field in fields:
                path = f"{model['name']}.{field['name']}"
                if field["kind"] == FieldKind.OBJECT.value and field["type"] not in seen:
                    warnings.append(f"{path}: Relation to unknown model '{field['type']}'")
                if field["kind"] == FieldKind.ENUM.value and field["type"] not in enum_names:
                    warnings.append(f"{path}: Unknown enum '{field['type']}'")

            if not any(f.get("isId") for f in fields) and not model.get("primaryKey"):
                warnings.append(f"{model['name']}: Model has no id field")

        return errors, warnings


def normalize_document(raw_data: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Bring any accepted document shape into full generator options form.

    Returns:
        Tuple of (options mapping, datamodel mapping)

    Raises:
        DMMFParseError: If no datamodel can be located
    """
    if "dmmf" in raw_data:
        dmmf = raw_data.get("dmmf") or {}
        datamodel = dmmf.get("datamodel") if isinstance(dmmf, dict) else None
        if not isinstance(datamodel, dict):
            raise DMMFParseError("dmmf.datamodel must be an object")
        return raw_data, datamodel

    if "datamodel" in raw_data:
        datamodel = raw_data["datamodel"]
        if not isinstance(datamodel, dict):
            raise DMMFParseError("datamodel must be an object")
        options = {k: v for k, v in raw_data.items() if k != "datamodel"}
        options["dmmf"] = {"datamodel": datamodel}
        return options, datamodel

    if "models" in raw_data:
        return {"dmmf": {"datamodel": raw_data}}, raw_data

    raise DMMFParseError("Document must contain 'dmmf', 'datamodel' or 'models'")


class BaseDMMFParser(ABC):
    """Abstract base class for DMMF document parsers."""

    def __init__(self) -> None:
        self.validator = DMMFValidator()

    @abstractmethod
    async def parse(self, content: str) -> ParseResult:
        """Parse document content into generator options."""
        pass

    @abstractmethod
    async def validate_syntax(self, content: str) -> bool:
        """Validate document syntax without full parsing."""
        pass

    async def _build_result(self, raw_data: Any, start_time: float) -> ParseResult:
        """Validate a loaded document and convert it to GeneratorOptions."""
        if not isinstance(raw_data, dict):
            return ParseResult(
                success=False,
                errors=[f"Document must be an object, got {type(raw_data).__name__}"],
                processing_time=time.time() - start_time,
            )

        try:
            options_data, datamodel = normalize_document(raw_data)
        except DMMFParseError as e:
            return ParseResult(
                success=False, errors=[str(e)], processing_time=time.time() - start_time
            )

        is_valid, errors, warnings = self.validator.validate_datamodel(datamodel)
        if not is_valid:
            return ParseResult(
                success=False,
                errors=errors,
                warnings=warnings,
                processing_time=time.time() - start_time,
            )

        try:
            options = GeneratorOptions.model_validate(options_data)
        except ValidationError as e:
            return ParseResult(
                success=False,
                errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
                warnings=warnings,
                processing_time=time.time() - start_time,
            )

        self.logger.info(
            "Parsed DMMF document",
            models=len(options.datamodel.models),
            enums=len(options.datamodel.enums),
            warnings=len(warnings),
        )
        return ParseResult(
            success=True,
            options=options,
            warnings=warnings,
            processing_time=time.time() - start_time,
        )


class JSONDMMFParser(BaseDMMFParser):
    """JSON document parser."""

    def __init__(self) -> None:
        super().__init__()
        self.logger: Any = logger.bind(parser="json")

    async def parse(self, content: str) -> ParseResult:
        """
        Parse JSON content into generator options.

        Args:
            content: Raw JSON document

        Returns:
            ParseResult containing parsed options or errors
        """
        start_time = time.time()

        try:
            raw_data = json.loads(content)
        except json.JSONDecodeError as e:
            error_msg = f"Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}"
            self.logger.error("JSON parsing failed", error=error_msg)
            return ParseResult(
                success=False, errors=[error_msg], processing_time=time.time() - start_time
            )

        return await self._build_result(raw_data, start_time)

    async def validate_syntax(self, content: str) -> bool:
        try:
            json.loads(content)
            return True
        except json.JSONDecodeError:
            return False


class YAMLDMMFParser(BaseDMMFParser):
    """YAML document parser."""

    def __init__(self) -> None:
        super().__init__()
        self.logger: Any = logger.bind(parser="yaml")

    async def parse(self, content: str) -> ParseResult:
        """
        Parse YAML content into generator options.

        Args:
            content: Raw YAML document

        Returns:
            ParseResult containing parsed options or errors
        """
        start_time = time.time()

        try:
            raw_data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML syntax: {e}"
            self.logger.error("YAML parsing failed", error=error_msg)
            return ParseResult(
                success=False, errors=[error_msg], processing_time=time.time() - start_time
            )

        if raw_data is None:
            return ParseResult(
                success=False,
                errors=["Empty YAML document"],
                processing_time=time.time() - start_time,
            )

        return await self._build_result(raw_data, start_time)

    async def validate_syntax(self, content: str) -> bool:
        try:
            yaml.safe_load(content)
            return True
        except yaml.YAMLError:
            return False


class DMMFParserFactory:
    """Factory for creating DMMF parsers based on content type."""

    _parsers = {
        "json": JSONDMMFParser,
        "yaml": YAMLDMMFParser,
    }

    @classmethod
    def create_parser(cls, parser_type: str) -> BaseDMMFParser:
        """
        Create a parser instance.

        Args:
            parser_type: Type of parser ("json", "yaml")

        Returns:
            Parser instance

        Raises:
            ValueError: If parser type is not supported
        """
        if parser_type not in cls._parsers:
            raise ValueError(f"Unsupported parser type: {parser_type}")

        return cls._parsers[parser_type]()

    @classmethod
    def detect_parser_type(cls, content: str) -> str:
        """Guess the document format from its content."""
        content = content.strip()
        if content.startswith(("{", "[")):
            return "json"
        if content.startswith("---"):
            return "yaml"
        try:
            json.loads(content)
            return "json"
        except json.JSONDecodeError:
            return "yaml"


async def parse_dmmf(content: str, parser_type: Optional[str] = None) -> ParseResult:
    """
    Parse a generator options document using the appropriate parser.

    Args:
        content: Raw document content
        parser_type: Optional parser type override

    Returns:
        ParseResult containing parsed options or errors
    """
    if not content or not content.strip():
        return ParseResult(success=False, errors=["Empty DMMF content provided"], processing_time=0.0)

    if not parser_type:
        parser_type = DMMFParserFactory.detect_parser_type(content)

    try:
        parser = DMMFParserFactory.create_parser(parser_type)
    except ValueError as e:
        return ParseResult(success=False, errors=[str(e)], processing_time=0.0)
    return await parser.parse(content)
