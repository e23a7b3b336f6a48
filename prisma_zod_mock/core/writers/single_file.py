"""
Single File Writer
==================

Lay out all enums, schemas and mock factories in one index.ts, optionally
moving the mock factories into a sibling mocks.ts.
"""

from typing import List, Optional

from prisma_zod_mock.config.generator_config import GeneratorConfig
from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.core.codegen.mock_factory import generate_mock_factory
from prisma_zod_mock.core.codegen.renderer import (
    ZOD_IMPORT,
    TemplateRenderer,
    faker_import,
    get_renderer,
)
from prisma_zod_mock.core.codegen.zod_schema import generate_enum, generate_zod_schema
from prisma_zod_mock.models.schemas import Datamodel, GeneratedFile

logger = get_logger(__name__)


def _index_import_names(datamodel: Datamodel, config: GeneratorConfig) -> List[str]:
    names: List[str] = []
    for model in datamodel.models:
        if config.create_model_types:
            names.append(model.name)
        names.append(f"{model.name}Schema")
    return names


async def build_single_file(
    datamodel: Datamodel,
    config: GeneratorConfig,
    renderer: Optional[TemplateRenderer] = None,
) -> List[GeneratedFile]:
    """
    Build index.ts (and mocks.ts when mock output is separate).

    Args:
        datamodel: Parsed datamodel
        config: Generator configuration
        renderer: Template renderer; the shared one when omitted

    Returns:
        Files to write, relative to the output directory
    """
    renderer = renderer or get_renderer()

    enums = [generate_enum(enum) for enum in datamodel.enums]
    schemas = (
        [generate_zod_schema(model, config, datamodel) for model in datamodel.models]
        if config.create_zod_schemas
        else []
    )
    mocks = (
        [generate_mock_factory(model, config, datamodel) for model in datamodel.models]
        if config.create_mock_factories
        else []
    )
    separate = config.mock_output_separate and bool(mocks)

    imports: List[str] = []
    if config.create_zod_schemas:
        imports.append(ZOD_IMPORT)
    if mocks and not separate:
        imports.append(faker_import(config.mock_data_locale))

    index_content = await renderer.render(
        "single_file.ts.j2",
        imports=imports,
        seed=config.mock_seed if mocks and not separate else None,
        enums=enums,
        schemas=schemas,
        mocks=[] if separate else mocks,
        reexports=["./mocks"] if separate and config.write_barrel_files else [],
    )
    files = [GeneratedFile(path="index.ts", content=index_content, reason="schemas and mocks")]

    if separate:
        mock_imports = [faker_import(config.mock_data_locale)]
        if config.create_zod_schemas and not config.create_model_types:
            mock_imports.insert(0, ZOD_IMPORT)
        if config.create_zod_schemas and datamodel.models:
            names = ", ".join(_index_import_names(datamodel, config))
            mock_imports.append(f"import {{ {names} }} from './index';")
        mocks_content = await renderer.render(
            "mock_file.ts.j2",
            imports=mock_imports,
            seed=config.mock_seed,
            mocks=mocks,
        )
        files.append(GeneratedFile(path="mocks.ts", content=mocks_content, reason="mock factories"))

    logger.info(
        "Built single file output",
        models=len(datamodel.models),
        enums=len(enums),
        separate_mocks=separate,
    )
    return files
