"""
Pydantic Models and Schemas
===========================

Data models for the Prisma DMMF input, generator options and generator output.
Field names follow Python conventions; the camelCase DMMF keys are accepted as aliases.
"""

from typing import Optional, List, Dict, Any, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.types import StrictStr, StrictInt, StrictFloat, StrictBool


# Enums
class FieldKind(str, Enum):
    """DMMF field kinds."""
    SCALAR = "scalar"
    OBJECT = "object"
    ENUM = "enum"
    UNSUPPORTED = "unsupported"


class ScalarType(str, Enum):
    """Prisma scalar types."""
    STRING = "String"
    INT = "Int"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    BOOLEAN = "Boolean"
    DATETIME = "DateTime"
    JSON = "Json"
    BIGINT = "BigInt"
    BYTES = "Bytes"


FLOAT_TYPES = {ScalarType.FLOAT.value, ScalarType.DECIMAL.value}


class DMMFBase(BaseModel):
    """Base model for DMMF structures."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# DMMF Models
class FieldDefault(DMMFBase):
    """Function default such as now(), cuid(), uuid() or autoincrement()."""
    name: str = Field(..., description="Default function name")
    args: List[Any] = Field(default_factory=list, description="Function arguments")


StaticDefault = Union[StrictBool, StrictInt, StrictFloat, StrictStr, List[Any]]


class DMMFField(DMMFBase):
    """A single model field."""
    name: str = Field(..., description="Field name")
    kind: FieldKind = Field(FieldKind.SCALAR, description="Field kind")
    type: str = Field("String", description="Scalar, enum or model type name")

    is_list: bool = Field(False, alias="isList")
    is_required: bool = Field(True, alias="isRequired")
    is_unique: bool = Field(False, alias="isUnique")
    is_id: bool = Field(False, alias="isId")
    is_read_only: bool = Field(False, alias="isReadOnly")
    is_generated: bool = Field(False, alias="isGenerated")
    is_updated_at: bool = Field(False, alias="isUpdatedAt")

    has_default_value: bool = Field(False, alias="hasDefaultValue")
    default: Optional[Union[FieldDefault, StaticDefault]] = None

    relation_name: Optional[str] = Field(None, alias="relationName")
    relation_from_fields: List[str] = Field(default_factory=list, alias="relationFromFields")
    relation_to_fields: List[str] = Field(default_factory=list, alias="relationToFields")

    documentation: Optional[str] = None

    @field_validator("default", mode="before")
    @classmethod
    def coerce_function_default(cls, v: Any) -> Any:
        """Turn {"name": ..., "args": [...]} dicts into FieldDefault."""
        if isinstance(v, dict) and "name" in v:
            return FieldDefault(**v)
        return v

    @field_validator("relation_from_fields", "relation_to_fields", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return v if v is not None else []

    @property
    def is_relation(self) -> bool:
        return self.kind == FieldKind.OBJECT

    @property
    def is_enum(self) -> bool:
        return self.kind == FieldKind.ENUM

    @property
    def default_function(self) -> Optional[FieldDefault]:
        """Function default, if the field has one."""
        if isinstance(self.default, FieldDefault):
            return self.default
        return None

    @property
    def has_static_default(self) -> bool:
        return self.has_default_value and self.default is not None and self.default_function is None


class DMMFModel(DMMFBase):
    """A Prisma model."""
    name: str = Field(..., description="Model name")
    db_name: Optional[str] = Field(None, alias="dbName")
    fields: List[DMMFField] = Field(default_factory=list)
    primary_key: Optional[Dict[str, Any]] = Field(None, alias="primaryKey")
    unique_fields: List[List[str]] = Field(default_factory=list, alias="uniqueFields")
    documentation: Optional[str] = None

    @property
    def scalar_fields(self) -> List[DMMFField]:
        return [f for f in self.fields if f.kind == FieldKind.SCALAR]

    @property
    def enum_fields(self) -> List[DMMFField]:
        return [f for f in self.fields if f.kind == FieldKind.ENUM]

    @property
    def relation_fields(self) -> List[DMMFField]:
        return [f for f in self.fields if f.kind == FieldKind.OBJECT]

    @property
    def id_field(self) -> Optional[DMMFField]:
        return next((f for f in self.fields if f.is_id), None)

    @property
    def has_relations(self) -> bool:
        return any(f.is_relation for f in self.fields)


class DMMFEnumValue(DMMFBase):
    """A single enum value."""
    name: str
    db_name: Optional[str] = Field(None, alias="dbName")


class DMMFEnum(DMMFBase):
    """A Prisma enum."""
    name: str
    values: List[DMMFEnumValue] = Field(default_factory=list)
    documentation: Optional[str] = None

    @field_validator("values", mode="before")
    @classmethod
    def coerce_plain_values(cls, v: Any) -> Any:
        """Accept bare strings as enum values."""
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v

    @property
    def value_names(self) -> List[str]:
        return [value.name for value in self.values]


class Datamodel(DMMFBase):
    """The datamodel section of a DMMF document."""
    models: List[DMMFModel] = Field(default_factory=list)
    enums: List[DMMFEnum] = Field(default_factory=list)
    types: List[DMMFModel] = Field(default_factory=list)

    def get_model(self, name: str) -> Optional[DMMFModel]:
        return next((m for m in self.models if m.name == name), None)

    def get_enum(self, name: str) -> Optional[DMMFEnum]:
        return next((e for e in self.enums if e.name == name), None)


class DMMFDocument(DMMFBase):
    """DMMF document as handed to generators."""
    datamodel: Datamodel = Field(default_factory=Datamodel)


# Generator options
class GeneratorOutput(DMMFBase):
    """Output location declared in the generator block."""
    value: str = ""
    from_env_var: Optional[str] = Field(None, alias="fromEnvVar")


class GeneratorSettings(DMMFBase):
    """The generator block of the Prisma schema."""
    name: str = "zod-mock"
    provider: Optional[Dict[str, Any]] = None
    output: Optional[GeneratorOutput] = None
    config: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("output", mode="before")
    @classmethod
    def coerce_output_path(cls, v: Any) -> Any:
        """Accept a bare path string as the output value."""
        if isinstance(v, str):
            return {"value": v}
        return v

    @field_validator("config", mode="before")
    @classmethod
    def none_config_to_empty(cls, v: Any) -> Any:
        return v if v is not None else {}


class GeneratorOptions(DMMFBase):
    """Everything a generator run receives."""
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    dmmf: DMMFDocument = Field(default_factory=DMMFDocument)
    schema_path: Optional[str] = Field(None, alias="schemaPath")
    version: Optional[str] = None

    @property
    def datamodel(self) -> Datamodel:
        return self.dmmf.datamodel


# Parsing Results
class ParseResult(BaseModel):
    """Result of a DMMF parsing operation."""
    success: bool = Field(..., description="Whether parsing succeeded")
    options: Optional[GeneratorOptions] = Field(None, description="Parsed generator options")
    errors: List[str] = Field(default_factory=list, description="Parsing errors")
    warnings: List[str] = Field(default_factory=list, description="Parsing warnings")
    processing_time: Optional[float] = Field(None, description="Parsing time in seconds")


# Generator output
class GeneratedFile(BaseModel):
    """A file produced by a generation run.

    Attributes:
        path:    Path relative to the output directory.
        content: Full file content.
        reason:  Why this file was generated.
    """
    path: str
    content: str
    reason: str = ""
