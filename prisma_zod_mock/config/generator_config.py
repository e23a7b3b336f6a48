"""
Generator Configuration
=======================

Generation toggles declared in the Prisma generator block. Prisma hands every
value over as a string: booleans as "true"/"false", integers as decimal
strings and modelDepths as a JSON object. Anything absent or malformed keeps
its default.
"""

from typing import Any, Dict, Mapping, Optional
import json

from pydantic import BaseModel, ConfigDict, Field

from .logging import get_logger

logger = get_logger(__name__)


class GeneratorConfig(BaseModel):
    """Zod schema and mock factory generation options."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    # Zod schema generation options
    create_zod_schemas: bool = Field(True, alias="createZodSchemas")
    use_multiple_files: bool = Field(False, alias="useMultipleFiles")
    write_barrel_files: bool = Field(True, alias="writeBarrelFiles")
    create_input_types: bool = Field(True, alias="createInputTypes")
    create_model_types: bool = Field(True, alias="createModelTypes")
    create_partial_types: bool = Field(False, alias="createPartialTypes")
    use_default_validators: bool = Field(True, alias="useDefaultValidators")
    coerce_date: bool = Field(True, alias="coerceDate")

    # Mock generation options
    create_mock_factories: bool = Field(True, alias="createMockFactories")
    mock_data_locale: str = Field("en", alias="mockDataLocale")
    mock_seed: Optional[int] = Field(None, alias="mockSeed")
    mock_date_range: int = Field(30, ge=1, alias="mockDateRange")
    create_relation_mocks: bool = Field(True, alias="createRelationMocks")
    mock_output_separate: bool = Field(False, alias="mockOutputSeparate")
    relation_max_depth: int = Field(4, ge=0, alias="relationMaxDepth")
    model_depths: Optional[Dict[str, int]] = Field(None, alias="modelDepths")

    def get_model_depth(self, model_name: str) -> int:
        """Relation depth for a model: its override, else the global maximum."""
        if self.model_depths and model_name in self.model_depths:
            return self.model_depths[model_name]
        return self.relation_max_depth


BOOLEAN_OPTIONS = (
    "createZodSchemas",
    "useMultipleFiles",
    "writeBarrelFiles",
    "createInputTypes",
    "createModelTypes",
    "createPartialTypes",
    "useDefaultValidators",
    "coerceDate",
    "createMockFactories",
    "createRelationMocks",
    "mockOutputSeparate",
)

# key -> smallest accepted value (None: any integer)
INTEGER_OPTIONS: Dict[str, Optional[int]] = {
    "mockSeed": None,
    "mockDateRange": 1,
    "relationMaxDepth": 0,
}

KNOWN_OPTIONS = set(BOOLEAN_OPTIONS) | set(INTEGER_OPTIONS) | {"mockDataLocale", "modelDepths"}


def _alias_to_field(alias: str) -> str:
    return next(
        name for name, info in GeneratorConfig.model_fields.items() if info.alias == alias
    )


def parse_boolean(key: str, value: Any) -> Optional[bool]:
    """Parse a "true"/"false" option; None means keep the default."""
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    logger.warning("Invalid boolean config value, using default", key=key, value=value)
    return None


def parse_integer(key: str, value: Any, minimum: Optional[int] = None) -> Optional[int]:
    """Parse a decimal string option; None means keep the default."""
    if not isinstance(value, str):
        return None
    try:
        parsed = int(value.strip(), 10)
    except ValueError:
        logger.warning("Invalid integer config value, using default", key=key, value=value)
        return None
    if minimum is not None and parsed < minimum:
        logger.warning(
            "Config value below minimum, using default", key=key, value=value, minimum=minimum
        )
        return None
    return parsed


def parse_model_depths(value: Any) -> Optional[Dict[str, int]]:
    """Parse the JSON-encoded per-model depth map; None means keep the default."""
    if not isinstance(value, str):
        return None
    try:
        raw = json.loads(value)
    except json.JSONDecodeError:
        logger.warning("Failed to parse modelDepths JSON", value=value)
        return None

    if not isinstance(raw, dict):
        logger.warning("modelDepths must be a JSON object", value=value)
        return None

    depths: Dict[str, int] = {}
    for model_name, depth in raw.items():
        # bool is an int subclass; reject it explicitly
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
            logger.warning("Ignoring invalid modelDepths entry", model=model_name, depth=depth)
            continue
        depths[model_name] = depth
    return depths


def parse_config(raw: Optional[Mapping[str, Any]]) -> GeneratorConfig:
    """
    Parse the generator block config into a GeneratorConfig.

    Args:
        raw: String-valued config map from the Prisma generator block

    Returns:
        GeneratorConfig with defaults for every absent or malformed key
    """
    values: Dict[str, Any] = {}
    raw = raw or {}

    for key in BOOLEAN_OPTIONS:
        if key in raw:
            parsed = parse_boolean(key, raw[key])
            if parsed is not None:
                values[_alias_to_field(key)] = parsed

    for key, minimum in INTEGER_OPTIONS.items():
        if key in raw:
            parsed_int = parse_integer(key, raw[key], minimum)
            if parsed_int is not None:
                values[_alias_to_field(key)] = parsed_int

    locale = raw.get("mockDataLocale")
    if isinstance(locale, str) and locale.strip():
        values["mock_data_locale"] = locale.strip()

    if "modelDepths" in raw:
        depths = parse_model_depths(raw["modelDepths"])
        if depths is not None:
            values["model_depths"] = depths

    unknown = sorted(set(raw) - KNOWN_OPTIONS)
    if unknown:
        logger.debug("Ignoring unknown config keys", keys=unknown)

    return GeneratorConfig(**values)
