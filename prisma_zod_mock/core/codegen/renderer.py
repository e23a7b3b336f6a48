"""
Template Renderer
=================

Assemble generated TypeScript fragments into complete files using Jinja2
templates from the package's templates directory.
"""

from typing import Any, Optional
from pathlib import Path
import jinja2

from prisma_zod_mock.config.logging import get_logger
from .zod_schema import SchemaGenerationError

logger = get_logger(__name__)

FILE_HEADER = "// This file was generated by prisma-zod-mock. Do not edit manually."

ZOD_IMPORT = "import { z } from 'zod';"


def faker_import(locale: str = "en") -> str:
    """
    Faker import line for a locale.

    Args:
        locale: Prisma-style locale such as "en", "ja" or "pt-BR"

    Returns:
        Import statement binding the localized instance to `faker`
    """
    if not locale or locale == "en":
        return "import { faker } from '@faker-js/faker';"
    suffix = locale.upper().replace("-", "_")
    return f"import {{ faker{suffix} as faker }} from '@faker-js/faker';"


class TemplateRenderer:
    """Jinja2-based renderer for generated TypeScript files."""

    def __init__(self, template_dir: Optional[Path] = None) -> None:
        self.logger: Any = logger.bind(component="renderer")
        self._setup_jinja2_environment(template_dir)

    def _setup_jinja2_environment(self, template_dir: Optional[Path]) -> None:
        """Setup Jinja2 template environment."""
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
            enable_async=True,
        )
        self.env.globals["header"] = FILE_HEADER

    async def render(self, template_name: str, **context: Any) -> str:
        """
        Render a template to TypeScript source.

        Args:
            template_name: Template filename, e.g. "single_file.ts.j2"
            **context: Template variables

        Returns:
            Rendered text ending in exactly one newline

        Raises:
            SchemaGenerationError: If the template cannot be loaded or rendered
        """
        try:
            template = self.env.get_template(template_name)
            content = await template.render_async(**context)
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("File rendering failed", template=template_name, error=error_msg)
            raise SchemaGenerationError(error_msg) from e

        self.logger.debug("Rendered template", template=template_name, length=len(content))
        return content.rstrip() + "\n"


_renderer: Optional[TemplateRenderer] = None


def get_renderer() -> TemplateRenderer:
    """Shared renderer instance."""
    global _renderer
    if _renderer is None:
        _renderer = TemplateRenderer()
    return _renderer
