"""
CV Schema Template

The fixed LaTeX schema (document envelope, style preamble, header block and one
template per role), wrapped so it can be handed to the assembler explicitly or
exported unfilled.
"""

import shutil
from pathlib import Path
from typing import Any, List

from jinja2 import TemplateError

from vitae.contexts.templating.exceptions import TemplateRenderError
from vitae.contexts.templating.logger import _log_debug, _log_info
from vitae.contexts.templating.registries import TemplateRegistry

TEMPLATE_SUFFIX = ".tex.jinja"


class SchemaTemplate:
    """Fills the schema's templates; one instance per schema directory."""

    def __init__(self, template_registry: TemplateRegistry = None):
        self.template_registry = template_registry or TemplateRegistry()

    @property
    def template_path(self) -> Path:
        return self.template_registry.template_path

    def render_type(self, type_name: str, **values: Any) -> str:
        """
        Render a role template, stripped of surrounding blank lines.

        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        try:
            template = self.template_registry.get_template(type_name)
            return template.render(**values).strip("\n")
        except TemplateError as e:
            raise TemplateRenderError(
                "Failed to render role template",
                type_name=type_name,
                template_path=self.template_registry.get_template_path(type_name),
                original_error=e,
            ) from e

    def render_structure(self, name: str, /, **values: Any) -> str:
        """
        Render a document structure template (document, preamble, header).

        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        try:
            return self.template_registry.get_structure_template(name).render(**values)
        except TemplateError as e:
            raise TemplateRenderError(
                "Failed to render structure template",
                type_name=name,
                template_path=self.template_path / "structure" / f"{name}{TEMPLATE_SUFFIX}",
                original_error=e,
            ) from e

    def export(self, dest_dir: Path) -> List[Path]:
        """
        Write the unfilled schema templates to dest_dir, keeping their layout.

        Args:
            dest_dir: Output directory (created if missing)

        Returns:
            Paths of the written files
        """
        dest_dir = Path(dest_dir)
        written = []
        for source in sorted(self.template_path.rglob(f"*{TEMPLATE_SUFFIX}")):
            target = dest_dir / source.relative_to(self.template_path)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
            written.append(target)
            _log_debug(f"Exported {source.relative_to(self.template_path)}")

        _log_info(f"Exported {len(written)} schema templates to {dest_dir}")
        return written
