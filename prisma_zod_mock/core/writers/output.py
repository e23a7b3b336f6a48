"""
Output Writer
=============

Write generated files beneath the output directory.
"""

from pathlib import Path
from typing import Iterable, List, Union

import aiofiles
import aiofiles.os

from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.models.schemas import GeneratedFile

logger = get_logger(__name__)


async def write_generated_files(
    files: Iterable[GeneratedFile], output_dir: Union[str, Path]
) -> List[Path]:
    """
    Write files as UTF-8 text, creating parent directories.

    Args:
        files: Generated files with paths relative to output_dir
        output_dir: Target directory

    Returns:
        Absolute paths written, in input order

    Raises:
        OSError: Propagated unchanged from the filesystem
    """
    root = Path(output_dir)
    written: List[Path] = []

    for generated in files:
        target = root / generated.path
        await aiofiles.os.makedirs(target.parent, exist_ok=True)
        async with aiofiles.open(target, "w", encoding="utf-8") as f:
            await f.write(generated.content)
        written.append(target)
        logger.debug("Wrote generated file", path=str(target), reason=generated.reason)

    return written
