"""
Mock Factory Generation
=======================

Emit TypeScript factory functions that build Faker-backed mock objects for a
Prisma model. Each field value is chosen in priority order: a @mock
annotation, then the field's default, then a value inferred from the field
name, then a plain value for the field type.

Relation fields recurse into the target model's factory while the current
depth is below the limit, and collapse to [] / null / undefined past it.
"""

from typing import Dict, List, Optional, Tuple
import json

from prisma_zod_mock.config.generator_config import GeneratorConfig
from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.core.semantics.field_name_analyzer import (
    SemanticType,
    analyze_field_name,
    semantic_fits_type,
)
from prisma_zod_mock.models.schemas import Datamodel, DMMFField, DMMFModel, FLOAT_TYPES
from .annotations import (
    AnnotationType,
    MockAnnotation,
    generate_mock_expression,
    parse_mock_annotation,
    references_this,
    rewrite_this_references,
)

logger = get_logger(__name__)

CUID_EXPRESSION = (
    "(() => { const t = Date.now().toString(36); "
    "const r = Math.random().toString(36).substring(2, 15); "
    "const c = Math.random().toString(36).substring(2, 15); "
    "return `c${t}${r}${c}`.padEnd(25, '0').substring(0, 25); })()"
)

DEFAULT_FUNCTION_EXPRESSIONS = {
    "now": "new Date()",
    "uuid": "faker.string.uuid()",
    "cuid": CUID_EXPRESSION,
    "autoincrement": "faker.number.int({ min: 1, max: 100000 })",
}

BATCH_RELATION_COUNT = "faker.number.int({ min: 1, max: 3 })"

LIST_LENGTH_EXPRESSION = BATCH_RELATION_COUNT


def model_type_name(model: DMMFModel, config: GeneratorConfig) -> str:
    """TypeScript type the factories return."""
    if config.create_zod_schemas and config.create_model_types:
        return model.name
    if config.create_zod_schemas:
        return f"z.infer<typeof {model.name}Schema>"
    return "Record<string, unknown>"


def uses_relation_depth(model: Optional[DMMFModel], config: GeneratorConfig) -> bool:
    """Whether a model's factory takes depth arguments."""
    return model is not None and config.create_relation_mocks and model.has_relations


def with_null_chance(field: DMMFField, expression: str) -> str:
    if field.is_required:
        return expression
    return f"Math.random() > 0.5 ? {expression} : null"


def as_list(field: DMMFField, expression: str) -> str:
    """Repeat a single-value expression for scalar list fields."""
    if not field.is_list or expression == "null":
        return expression
    if expression.startswith("{"):
        # arrow functions need parentheses around an object literal
        expression = f"({expression})"
    return f"Array.from({{ length: {LIST_LENGTH_EXPRESSION} }}, () => {expression})"


def _quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n") + "'"


def default_value_expression(field: DMMFField) -> Optional[str]:
    """Expression for a field's @default, or None to fall through."""
    if not field.has_default_value or field.default is None:
        return None

    default_fn = field.default_function
    if default_fn is not None:
        # dbgenerated() and unknown functions fall through
        return DEFAULT_FUNCTION_EXPRESSIONS.get(default_fn.name)

    value = field.default
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, list):
        return json.dumps(value)
    return None


def semantic_value_expression(
    semantic_type: SemanticType, field_type: str, field_name: str, config: GeneratorConfig
) -> str:
    """Faker expression for a field name's semantic type."""
    name = field_name.lower()

    if semantic_type == SemanticType.EMAIL:
        return "faker.internet.email()"
    if semantic_type == SemanticType.NAME:
        if "first" in name:
            return "faker.person.firstName()"
        if "last" in name:
            return "faker.person.lastName()"
        return "faker.person.fullName()"
    if semantic_type == SemanticType.PHONE:
        return "faker.phone.number()"
    if semantic_type == SemanticType.ADDRESS:
        if "city" in name:
            return "faker.location.city()"
        if "zip" in name or "postal" in name:
            return "faker.location.zipCode()"
        return "faker.location.streetAddress()"
    if semantic_type == SemanticType.URL:
        return "faker.internet.url()"
    if semantic_type == SemanticType.DESCRIPTION:
        return "faker.lorem.paragraph()"
    if semantic_type == SemanticType.TITLE:
        return "faker.lorem.sentence()"
    if semantic_type == SemanticType.DATE:
        if "birth" in name:
            return "faker.date.past()"
        return f"faker.date.recent({{ days: {config.mock_date_range} }})"
    if semantic_type == SemanticType.IMAGE:
        if "avatar" in name:
            return "faker.image.avatar()"
        return "faker.image.url()"
    if semantic_type == SemanticType.PRICE:
        if field_type in FLOAT_TYPES:
            return "parseFloat(faker.commerce.price())"
        return "parseInt(faker.commerce.price(), 10)"
    if semantic_type == SemanticType.COUNTRY:
        return "faker.location.country()"
    if semantic_type == SemanticType.COMPANY:
        return "faker.company.name()"

    return type_default_expression(field_type, config)


def type_default_expression(field_type: str, config: GeneratorConfig) -> str:
    """Faker expression for a bare Prisma type."""
    if field_type == "String":
        return "faker.string.alpha(10)"
    if field_type == "Int":
        return "faker.number.int({ min: 1, max: 1000 })"
    if field_type in FLOAT_TYPES:
        return "faker.number.float({ min: 0, max: 1000, fractionDigits: 2 })"
    if field_type == "Boolean":
        return "faker.datatype.boolean()"
    if field_type == "DateTime":
        return f"faker.date.recent({{ days: {config.mock_date_range} }})"
    if field_type == "BigInt":
        return "BigInt(faker.number.int({ min: 1, max: 1000000 }))"
    if field_type == "Json":
        return "{ key: faker.string.alpha(5), value: faker.number.int({ min: 1, max: 100 }) }"
    if field_type == "Bytes":
        return "Buffer.from(faker.string.alphanumeric(32))"
    return "null"


def _annotation_expression(
    field: DMMFField, annotation: Optional[MockAnnotation]
) -> Optional[str]:
    if annotation is None:
        return None
    return generate_mock_expression(annotation, field)


def generate_scalar_mock_value(
    field: DMMFField, config: GeneratorConfig, annotation: Optional[MockAnnotation] = None
) -> str:
    """
    Mock expression for a scalar field.

    Args:
        field: Scalar DMMF field
        config: Generator configuration
        annotation: Pre-parsed annotation; parsed from the field when omitted

    Returns:
        TypeScript expression
    """
    if annotation is None:
        annotation = parse_mock_annotation(field)

    expression = _annotation_expression(field, annotation)
    if expression is not None:
        return with_null_chance(field, as_list(field, expression))

    expression = default_value_expression(field)
    if expression is not None:
        return expression

    semantic_type = analyze_field_name(field.name)
    if semantic_fits_type(semantic_type, field.type):
        expression = semantic_value_expression(semantic_type, field.type, field.name, config)
    else:
        expression = type_default_expression(field.type, config)
    return with_null_chance(field, as_list(field, expression))


def generate_enum_mock_value(
    field: DMMFField,
    config: GeneratorConfig,
    datamodel: Datamodel,
    annotation: Optional[MockAnnotation] = None,
) -> str:
    """Mock expression for an enum field."""
    expression = _annotation_expression(field, annotation)
    if expression is not None:
        return with_null_chance(field, as_list(field, expression))

    enum = datamodel.get_enum(field.type)
    if enum is None or not enum.values:
        return "null"

    values = ", ".join(_quote(name) for name in enum.value_names)
    if field.is_list:
        return f"faker.helpers.arrayElements([{values}] as const, {{ min: 1, max: 3 }})"
    return with_null_chance(field, f"faker.helpers.arrayElement([{values}] as const)")


def relation_terminal_value(field: DMMFField) -> str:
    """Value a relation collapses to once the depth limit is reached."""
    if field.is_list:
        return "[]"
    if not field.is_required:
        return "null"
    return "undefined"


def generate_relation_mock_value(
    field: DMMFField,
    config: GeneratorConfig,
    datamodel: Datamodel,
    annotation: Optional[MockAnnotation] = None,
) -> str:
    """
    Depth-bounded mock expression for a relation field.

    The emitted expression only calls the target factory while depth is below
    the limit, so generated code never recurses past the configured depth.
    """
    terminal = relation_terminal_value(field)
    target = datamodel.get_model(field.type)
    if not config.create_relation_mocks or target is None:
        return terminal

    limit = "maxDepth"
    if annotation is not None and annotation.type == AnnotationType.RELATION_DEPTH:
        limit = f"Math.min(maxDepth, {annotation.depth})"

    if uses_relation_depth(target, config):
        if field.is_list:
            call = (
                f"create{target.name}MockBatch({BATCH_RELATION_COUNT}, undefined, depth + 1, {limit})"
            )
        else:
            call = f"create{target.name}Mock(undefined, depth + 1, {limit})"
    elif field.is_list:
        call = f"create{target.name}MockBatch({BATCH_RELATION_COUNT})"
    else:
        call = f"create{target.name}Mock()"

    return f"depth < {limit} ? {call} : {terminal}"


def generate_field_mock_value(
    field: DMMFField, config: GeneratorConfig, datamodel: Datamodel
) -> Tuple[str, bool]:
    """
    Mock expression for any field.

    Returns:
        Tuple of (expression, reads_sibling_fields)
    """
    annotation = parse_mock_annotation(field)

    if field.is_relation:
        return generate_relation_mock_value(field, config, datamodel, annotation), False
    if field.is_enum:
        expression = generate_enum_mock_value(field, config, datamodel, annotation)
    else:
        expression = generate_scalar_mock_value(field, config, annotation)

    if annotation is not None and references_this(annotation.value):
        return rewrite_this_references(expression), True
    return expression, False


def _object_lines(entries: List[Tuple[str, str]], indent: str) -> List[str]:
    return [f"{indent}{name}: {expression}," for name, expression in entries]


def generate_mock_factory(
    model: DMMFModel, config: GeneratorConfig, datamodel: Optional[Datamodel] = None
) -> str:
    """
    Emit create<M>Mock, create<M>MockBatch and createValidated<M>Mock.

    Args:
        model: DMMF model
        config: Generator configuration
        datamodel: Full datamodel, used to resolve relation and enum targets

    Returns:
        TypeScript source text
    """
    if datamodel is None:
        datamodel = Datamodel(models=[model])

    name = model.name
    type_name = model_type_name(model, config)
    relational = uses_relation_depth(model, config)
    max_depth = config.get_model_depth(name)

    base: List[Tuple[str, str]] = []
    derived: List[Tuple[str, str]] = []
    for field in model.fields:
        expression, reads_siblings = generate_field_mock_value(field, config, datamodel)
        (derived if reads_siblings else base).append((field.name, expression))

    if relational:
        params = f"overrides?: Partial<{type_name}>, depth: number = 0, maxDepth: number = {max_depth}"
    else:
        params = f"overrides?: Partial<{type_name}>"

    lines: List[str] = [f"export const create{name}Mock = ({params}): {type_name} => {{"]
    if derived:
        lines.append("  const baseData = {")
        lines.extend(_object_lines(base, "    "))
        lines.append("  };")
        lines.append("  const mockData = {")
        lines.append("    ...baseData,")
        lines.extend(_object_lines(derived, "    "))
        lines.append("  };")
        lines.append("  return { ...mockData, ...overrides };")
    else:
        lines.append("  return {")
        lines.extend(_object_lines(base, "    "))
        lines.append("    ...overrides,")
        lines.append("  };")
    lines.append("};")
    lines.append("")

    lines.append(f"export const create{name}MockBatch = (")
    lines.append("  count: number = 10,")
    if relational:
        lines.append(f"  overrides?: Partial<{type_name}>,")
        lines.append("  depth: number = 0,")
        lines.append(f"  maxDepth: number = {max_depth}")
        inner_call = f"create{name}Mock(overrides, depth, maxDepth)"
    else:
        lines.append(f"  overrides?: Partial<{type_name}>")
        inner_call = f"create{name}Mock(overrides)"
    lines.append(f"): {type_name}[] => {{")
    lines.append(f"  return Array.from({{ length: count }}, () => {inner_call});")
    lines.append("};")

    if config.create_zod_schemas:
        lines.append("")
        lines.append(
            f"export const createValidated{name}Mock = (overrides?: Partial<{type_name}>): {type_name} => {{"
        )
        lines.append(f"  const mockData = create{name}Mock(overrides);")
        lines.append(f"  return {name}Schema.parse(mockData);")
        lines.append("};")

    logger.debug(
        "Generated mock factory",
        model=name,
        relational=relational,
        max_depth=max_depth,
        derived_fields=[n for n, _ in derived],
    )
    return "\n".join(lines)


def related_models(model: DMMFModel, datamodel: Datamodel) -> List[str]:
    """Names of known models this model relates to, in field order, without repeats."""
    seen: Dict[str, None] = {}
    for field in model.relation_fields:
        if field.type != model.name and datamodel.get_model(field.type) is not None:
            seen.setdefault(field.type, None)
    return list(seen)
