"""
Multiple Files Writer
=====================

One schema file and one mock file per model, a shared enums file and an
optional index.ts barrel:

    schemas/enums.ts
    schemas/<model>.ts
    mocks/<model>.mock.ts
    index.ts
"""

from typing import Dict, List, Optional

from prisma_zod_mock.config.generator_config import GeneratorConfig
from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.core.codegen.mock_factory import generate_mock_factory, related_models
from prisma_zod_mock.core.codegen.renderer import (
    ZOD_IMPORT,
    TemplateRenderer,
    faker_import,
    get_renderer,
)
from prisma_zod_mock.core.codegen.zod_schema import generate_enum, generate_zod_schema
from prisma_zod_mock.models.schemas import Datamodel, DMMFModel, GeneratedFile

logger = get_logger(__name__)


def used_enums(model: DMMFModel, datamodel: Datamodel) -> List[str]:
    """Names of known enums a model's fields use, in field order."""
    seen: Dict[str, None] = {}
    for field in model.enum_fields:
        if datamodel.get_enum(field.type) is not None:
            seen.setdefault(field.type, None)
    return list(seen)


def schema_imports(model: DMMFModel, datamodel: Datamodel) -> List[str]:
    """Import lines a model's schema file needs besides zod."""
    imports: List[str] = []
    enums = used_enums(model, datamodel)
    if enums:
        imports.append(f"import {{ {', '.join(enums)} }} from './enums';")
    for target in related_models(model, datamodel):
        imports.append(f"import {{ {target}Schema }} from './{target.lower()}';")
    return imports


def mock_imports(model: DMMFModel, datamodel: Datamodel, config: GeneratorConfig) -> List[str]:
    """Import lines a model's mock file needs."""
    imports = [faker_import(config.mock_data_locale)]
    if config.create_zod_schemas and not config.create_model_types:
        # factories are typed as z.infer<typeof XSchema>
        imports.insert(0, ZOD_IMPORT)
    if config.create_zod_schemas:
        names = [f"{model.name}Schema"]
        if config.create_model_types:
            names.insert(0, model.name)
        imports.append(
            f"import {{ {', '.join(names)} }} from '../schemas/{model.name.lower()}';"
        )
    if config.create_relation_mocks:
        for target in related_models(model, datamodel):
            imports.append(
                f"import {{ create{target}Mock, create{target}MockBatch }} "
                f"from './{target.lower()}.mock';"
            )
    return imports


async def build_multiple_files(
    datamodel: Datamodel,
    config: GeneratorConfig,
    renderer: Optional[TemplateRenderer] = None,
) -> List[GeneratedFile]:
    """
    Build per-model schema and mock files plus the barrel.

    Args:
        datamodel: Parsed datamodel
        config: Generator configuration
        renderer: Template renderer; the shared one when omitted

    Returns:
        Files to write, relative to the output directory
    """
    renderer = renderer or get_renderer()
    files: List[GeneratedFile] = []
    exports: List[str] = []

    if datamodel.enums:
        content = await renderer.render(
            "enums_file.ts.j2", enums=[generate_enum(enum) for enum in datamodel.enums]
        )
        files.append(GeneratedFile(path="schemas/enums.ts", content=content, reason="enums"))
        exports.append("./schemas/enums")

    for model in datamodel.models:
        lower = model.name.lower()

        if config.create_zod_schemas:
            content = await renderer.render(
                "schema_file.ts.j2",
                imports=schema_imports(model, datamodel),
                schema=generate_zod_schema(model, config, datamodel),
            )
            files.append(
                GeneratedFile(path=f"schemas/{lower}.ts", content=content, reason=f"{model.name} schema")
            )
            exports.append(f"./schemas/{lower}")

        if config.create_mock_factories:
            content = await renderer.render(
                "mock_file.ts.j2",
                imports=mock_imports(model, datamodel, config),
                seed=config.mock_seed,
                mocks=[generate_mock_factory(model, config, datamodel)],
            )
            files.append(
                GeneratedFile(
                    path=f"mocks/{lower}.mock.ts", content=content, reason=f"{model.name} mocks"
                )
            )
            exports.append(f"./mocks/{lower}.mock")

    if config.write_barrel_files and exports:
        content = await renderer.render("barrel.ts.j2", modules=exports)
        files.append(GeneratedFile(path="index.ts", content=content, reason="barrel"))

    logger.info("Built multiple file output", files=len(files), models=len(datamodel.models))
    return files
