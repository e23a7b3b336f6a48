"""
Generator Entry Point
=====================

Run a full generation: parse the generator config, lay out the output files
and write them to the declared output directory.
"""

from pathlib import Path
from typing import List, Optional, Union

import aiofiles
import aiofiles.os

from prisma_zod_mock.config.generator_config import parse_config
from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.core.dmmf.parser import DMMFParseError, parse_dmmf
from prisma_zod_mock.core.writers.multiple_files import build_multiple_files
from prisma_zod_mock.core.writers.output import write_generated_files
from prisma_zod_mock.core.writers.single_file import build_single_file
from prisma_zod_mock.models.schemas import GeneratorOptions, GeneratorOutput

logger = get_logger(__name__)


class OutputPathError(Exception):
    """Exception raised when the generator block declares no output."""

    pass


async def generate(options: GeneratorOptions) -> List[Path]:
    """
    Generate Zod schemas and mock factories for a datamodel.

    Args:
        options: Generator options with output location, config and datamodel

    Returns:
        Paths of the written files

    Raises:
        OutputPathError: If no output directory was declared
        OSError: Propagated unchanged when writing fails
    """
    output = options.generator.output
    if output is None or not output.value:
        raise OutputPathError("No output was specified for Prisma Zod Mock Generator")

    config = parse_config(options.generator.config)
    output_dir = Path(output.value).resolve()
    await aiofiles.os.makedirs(output_dir, exist_ok=True)

    if config.use_multiple_files:
        files = await build_multiple_files(options.datamodel, config)
    else:
        files = await build_single_file(options.datamodel, config)

    written = await write_generated_files(files, output_dir)

    logger.info(
        "Generated Prisma Zod Mock",
        output=str(output_dir),
        files=len(written),
        multiple_files=config.use_multiple_files,
    )
    return written


async def load_options(path: Union[str, Path], parser_type: Optional[str] = None) -> GeneratorOptions:
    """
    Read and parse a generator options document.

    Args:
        path: JSON or YAML document
        parser_type: "json" or "yaml"; detected from content when omitted

    Returns:
        Parsed generator options

    Raises:
        DMMFParseError: If the document cannot be parsed
    """
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        content = await f.read()

    result = await parse_dmmf(content, parser_type)
    if not result.success or result.options is None:
        raise DMMFParseError("; ".join(result.errors) or "Failed to parse DMMF document")

    for warning in result.warnings:
        logger.warning("DMMF validation warning", warning=warning)
    return result.options


async def generate_from_file(
    path: Union[str, Path],
    output: Optional[Union[str, Path]] = None,
    parser_type: Optional[str] = None,
) -> List[Path]:
    """
    Parse a generator options document and run generate().

    Args:
        path: JSON or YAML document
        output: Output directory overriding the document's generator output
        parser_type: "json" or "yaml"; detected from content when omitted

    Returns:
        Paths of the written files

    Raises:
        DMMFParseError: If the document cannot be parsed
    """
    options = await load_options(path, parser_type)
    if output is not None:
        options.generator.output = GeneratorOutput(value=str(output))

    return await generate(options)
