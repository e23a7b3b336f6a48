"""
Mock Data Builder
=================

Build Python mock instances (plain dicts) straight from the datamodel, using
the same value priority as the generated TypeScript factories:

1. @mock annotation, where Python can evaluate it
2. field default
3. semantic inference from the field name
4. plain value for the field type

Relations recurse while depth is below the model's limit. Unique and id fields
never repeat within one builder.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import copy
import json
import string
import time

from faker import Faker

from prisma_zod_mock.config.generator_config import GeneratorConfig
from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.config.settings import get_settings
from prisma_zod_mock.core.codegen.annotations import (
    AnnotationType,
    MockAnnotation,
    parse_mock_annotation,
)
from prisma_zod_mock.core.semantics.field_name_analyzer import analyze_field_name
from prisma_zod_mock.core.semantics.mock_data_selector import (
    SUPPORTED_FIELD_TYPES,
    MockDataSelector,
    resolve_locale,
)
from prisma_zod_mock.models.schemas import (
    Datamodel,
    DMMFField,
    DMMFModel,
    FieldKind,
    FLOAT_TYPES,
)
from .unique import UniqueValueGenerator

logger = get_logger(__name__)

BASE36 = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36[remainder])
    return "".join(reversed(digits))


class MockDataBuilder:
    """Create mock model instances as dictionaries."""

    def __init__(
        self,
        datamodel: Datamodel,
        config: Optional[GeneratorConfig] = None,
        seed: Optional[int] = None,
        unique: Optional[UniqueValueGenerator] = None,
    ) -> None:
        self.logger: Any = logger.bind(component="mock_builder")
        self.datamodel = datamodel
        self.config = config or GeneratorConfig()

        self.faker = Faker(resolve_locale(self.config.mock_data_locale))
        effective_seed = seed if seed is not None else self.config.mock_seed
        if effective_seed is not None:
            self.faker.seed_instance(effective_seed)

        self.selector = MockDataSelector(
            faker=self.faker, date_range_days=self.config.mock_date_range
        )
        self.unique = unique or UniqueValueGenerator()

    def _resolve_model(self, model: Union[str, DMMFModel]) -> DMMFModel:
        name = model if isinstance(model, str) else model.name
        resolved = self.datamodel.get_model(name)
        if resolved is None:
            raise KeyError(f"Unknown model: {name}")
        return resolved

    def create_mock(
        self,
        model: Union[str, DMMFModel],
        overrides: Optional[Dict[str, Any]] = None,
        depth: int = 0,
        max_depth: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Build one mock instance.

        Args:
            model: Model name or DMMF model
            overrides: Values that replace generated ones
            depth: Current relation depth
            max_depth: Relation depth limit; the model's configured depth when omitted

        Returns:
            Dict keyed by field name

        Raises:
            KeyError: If the model is not in the datamodel
        """
        resolved = self._resolve_model(model)
        if max_depth is None:
            max_depth = self.config.get_model_depth(resolved.name)

        data: Dict[str, Any] = {}
        for field in resolved.fields:
            annotation = parse_mock_annotation(field)
            if field.is_relation:
                data[field.name] = self._relation_value(field, annotation, depth, max_depth)
            elif field.is_enum:
                data[field.name] = self._enum_value(field, annotation)
            else:
                data[field.name] = self._scalar_value(resolved, field, annotation)

        if overrides:
            data.update(overrides)
        return data

    def create_mock_batch(
        self,
        model: Union[str, DMMFModel],
        count: Optional[int] = None,
        overrides: Optional[Dict[str, Any]] = None,
        depth: int = 0,
        max_depth: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Build count mock instances."""
        if count is None:
            count = get_settings().default_batch_size
        self.logger.debug(
            "Building mock batch", model=str(getattr(model, "name", model)), count=count, depth=depth
        )
        return [self.create_mock(model, overrides, depth, max_depth) for _ in range(count)]

    def _maybe_null(self, field: DMMFField, value: Any) -> Any:
        if not field.is_required and self.faker.pybool():
            return None
        return value

    def _annotation_value(self, field: DMMFField, annotation: MockAnnotation) -> Tuple[bool, Any]:
        """Evaluate an annotation as (handled, value)."""
        if annotation.type == AnnotationType.RANGE:
            low, high = annotation.min or 0, annotation.max or 0
            if field.type in FLOAT_TYPES:
                return True, self.faker.random.uniform(low, high)
            return True, self.faker.random_int(min=low, max=high)

        if annotation.type == AnnotationType.ENUM:
            if not annotation.options:
                return True, None
            return True, self.faker.random_element(annotation.options)

        if annotation.type == AnnotationType.FIXED and annotation.value:
            literal = annotation.value
            try:
                return True, json.loads(literal)
            except json.JSONDecodeError:
                if len(literal) >= 2 and literal[0] == literal[-1] == "'":
                    return True, literal[1:-1]
                return False, None

        # faker, custom and pattern expressions only run in TypeScript
        return False, None

    def _cuid(self) -> str:
        stamp = _to_base36(int(time.time() * 1000))
        body = "".join(self.faker.random_choices(list(BASE36), length=22))
        return f"c{stamp}{body}".ljust(25, "0")[:25]

    def _default_value(self, field: DMMFField) -> Tuple[bool, Any]:
        default_fn = field.default_function
        if default_fn is not None:
            if default_fn.name == "now":
                return True, datetime.now(timezone.utc)
            if default_fn.name == "uuid":
                return True, self.faker.uuid4()
            if default_fn.name == "cuid":
                return True, self._cuid()
            if default_fn.name == "autoincrement":
                return True, self.faker.random_int(min=1, max=100000)
            return False, None

        if field.has_static_default:
            return True, copy.deepcopy(field.default)
        return False, None

    def _scalar_value(
        self, model: DMMFModel, field: DMMFField, annotation: Optional[MockAnnotation]
    ) -> Any:
        if annotation is not None:
            handled, value = self._annotation_value(field, annotation)
            if handled:
                if field.is_list:
                    value = self._repeat(field, lambda: self._annotation_value(field, annotation)[1])
                return self._maybe_null(field, value)

        if field.kind == FieldKind.UNSUPPORTED:
            return None

        has_default, value = self._default_value(field)
        tracked = field.is_id or field.is_unique
        if has_default and (not tracked or field.has_static_default):
            return value
        if not has_default and field.type not in SUPPORTED_FIELD_TYPES:
            self.logger.debug(
                "No mock value for field type", model=model.name, field=field.name, type=field.type
            )
            return None

        def draw_one() -> Any:
            if has_default:
                return self._default_value(field)[1]
            return self.selector.select(analyze_field_name(field.name), field.type, field.name)

        def draw() -> Any:
            return self._repeat(field, draw_one)

        if tracked:
            return self.unique.generate_unique(field.name, model.name, draw)
        return self._maybe_null(field, draw())

    def _repeat(self, field: DMMFField, produce: Callable[[], Any]) -> Any:
        """One value, or a list of one to three values for list fields."""
        if not field.is_list:
            return produce()
        return [produce() for _ in range(self.faker.random_int(min=1, max=3))]

    def _enum_value(self, field: DMMFField, annotation: Optional[MockAnnotation]) -> Any:
        if annotation is not None:
            handled, value = self._annotation_value(field, annotation)
            if handled:
                if field.is_list:
                    value = self._repeat(field, lambda: self._annotation_value(field, annotation)[1])
                return self._maybe_null(field, value)

        enum = self.datamodel.get_enum(field.type)
        if enum is None or not enum.values:
            return None

        names = enum.value_names
        if field.is_list:
            count = self.faker.random_int(min=1, max=min(3, len(names)))
            return self.faker.random_elements(names, length=count, unique=True)
        return self._maybe_null(field, self.faker.random_element(names))

    def _relation_value(
        self,
        field: DMMFField,
        annotation: Optional[MockAnnotation],
        depth: int,
        max_depth: int,
    ) -> Any:
        terminal: Any = [] if field.is_list else None
        target = self.datamodel.get_model(field.type)
        if not self.config.create_relation_mocks or target is None:
            return terminal

        limit = max_depth
        if annotation is not None and annotation.type == AnnotationType.RELATION_DEPTH:
            limit = min(max_depth, annotation.depth or 0)

        if depth >= limit:
            return terminal

        if field.is_list:
            count = self.faker.random_int(min=1, max=3)
            return self.create_mock_batch(target, count, depth=depth + 1, max_depth=limit)
        return self.create_mock(target, depth=depth + 1, max_depth=limit)
