"""
Zod Schema Generation
=====================

Emit TypeScript Zod schemas, inferred types and enum constants for
Prisma models. Relation fields reference their target schema through
z.lazy so that mutually related models can be declared in any order.
"""

from typing import List, Optional

from prisma_zod_mock.config.generator_config import GeneratorConfig
from prisma_zod_mock.models.schemas import Datamodel, DMMFEnum, DMMFField, DMMFModel

SCALAR_SCHEMAS = {
    "String": "z.string()",
    "Int": "z.number().int()",
    "Float": "z.number()",
    "Decimal": "z.number()",
    "Boolean": "z.boolean()",
    "Json": "z.unknown()",
    "BigInt": "z.bigint()",
    "Bytes": "z.instanceof(Buffer)",
}


class SchemaGenerationError(Exception):
    """Exception raised when schema or file generation fails."""

    pass


def generate_enum(enum: DMMFEnum) -> str:
    """
    Emit an enum as a const object plus a union type of its values.

    Args:
        enum: DMMF enum

    Returns:
        TypeScript source text
    """
    lines = [f"export const {enum.name} = {{"]
    for value in enum.value_names:
        lines.append(f"  {value}: '{value}',")
    lines.append("} as const;")
    lines.append("")
    lines.append(f"export type {enum.name} = typeof {enum.name}[keyof typeof {enum.name}];")
    return "\n".join(lines)


def _string_schema(field: DMMFField, config: GeneratorConfig) -> str:
    schema = "z.string()"
    if not config.use_default_validators:
        return schema

    lowered = field.name.lower()
    if "email" in lowered:
        schema += ".email()"
    if "url" in lowered:
        schema += ".url()"

    default_fn = field.default_function
    if field.is_id and default_fn is not None:
        if default_fn.name == "cuid":
            schema += ".cuid()"
        elif default_fn.name == "uuid":
            schema += ".uuid()"
    return schema


def _scalar_base(field: DMMFField, config: GeneratorConfig) -> str:
    if field.type == "String":
        return _string_schema(field, config)
    if field.type == "DateTime":
        return "z.coerce.date()" if config.coerce_date else "z.date()"
    return SCALAR_SCHEMAS.get(field.type, "z.unknown()")


def _relation_schema(field: DMMFField, datamodel: Optional[Datamodel]) -> str:
    if datamodel is not None and datamodel.get_model(field.type) is None:
        return "z.unknown().optional()"

    schema = f"z.lazy((): z.ZodTypeAny => {field.type}Schema)"
    if field.is_list:
        schema = f"z.array({schema})"
    elif not field.is_required:
        schema += ".nullable()"
    # relations are only present when explicitly included
    return schema + ".optional()"


def generate_field_schema(
    field: DMMFField, config: GeneratorConfig, datamodel: Optional[Datamodel] = None
) -> str:
    """Zod expression for one field."""
    if field.is_relation:
        return _relation_schema(field, datamodel)

    if field.is_enum:
        if datamodel is not None and datamodel.get_enum(field.type) is None:
            schema = "z.unknown()"
        else:
            schema = f"z.nativeEnum({field.type})"
    else:
        schema = _scalar_base(field, config)

    if field.is_list:
        schema = f"z.array({schema})"
    if not field.is_required:
        schema += ".nullable()"
    if field.has_default_value:
        schema += ".optional()"
    return schema


def generate_zod_schema(
    model: DMMFModel, config: GeneratorConfig, datamodel: Optional[Datamodel] = None
) -> str:
    """
    Emit the Zod schema for a model plus the derived schemas and types.

    Args:
        model: DMMF model
        config: Generator configuration
        datamodel: Full datamodel, used to resolve relation and enum targets

    Returns:
        TypeScript source text
    """
    name = model.name
    lines: List[str] = [f"export const {name}Schema = z.object({{"]
    for field in model.fields:
        lines.append(f"  {field.name}: {generate_field_schema(field, config, datamodel)},")
    lines.append("});")

    if config.create_model_types:
        lines.append("")
        lines.append(f"export type {name} = z.infer<typeof {name}Schema>;")

    if config.create_partial_types:
        lines.append("")
        lines.append(f"export const {name}PartialSchema = {name}Schema.partial();")
        lines.append(f"export type {name}Partial = z.infer<typeof {name}PartialSchema>;")

    if config.create_input_types:
        relation_names = [f.name for f in model.relation_fields]
        if relation_names:
            omitted = ", ".join(f"{r}: true" for r in relation_names)
            create_input = f"{name}Schema.omit({{ {omitted} }})"
        else:
            create_input = f"{name}Schema"
        lines.append("")
        lines.append(f"export const {name}CreateInputSchema = {create_input};")
        lines.append(
            f"export type {name}CreateInput = z.infer<typeof {name}CreateInputSchema>;"
        )
        lines.append(f"export const {name}UpdateInputSchema = {name}CreateInputSchema.partial();")
        lines.append(
            f"export type {name}UpdateInput = z.infer<typeof {name}UpdateInputSchema>;"
        )

    return "\n".join(lines)
