"""
Templating Registries

Centralized registries for loading and caching schema templates and locale
string tables.
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound
from omegaconf import OmegaConf

load_dotenv()
TEMPLATING_CONTEXT_PATH = Path(__file__).resolve().parent
TEMPLATE_PATH = Path(os.getenv("VITAE_TEMPLATE_PATH", TEMPLATING_CONTEXT_PATH / "template"))
LOCALE_STRINGS_PATH = Path(
    os.getenv("VITAE_LOCALE_STRINGS_PATH", TEMPLATING_CONTEXT_PATH / "config" / "locale_strings.yaml")
)


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Role templates live in {template_path}/types/{type_name}/template.tex.jinja,
    document structure templates in {template_path}/structure/{name}.tex.jinja.
    Custom delimiters avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, template_path: Path = None):
        """
        Initialize the template registry.

        Args:
            template_path: Root of the schema templates. Defaults to
                           VITAE_TEMPLATE_PATH from environment
        """
        if template_path is None:
            template_path = TEMPLATE_PATH

        self.template_path = Path(template_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Block tags leave no stray newlines or indentation in the LaTeX
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def _load(self, relative_path: str) -> Template:
        if relative_path in self._cache:
            return self._cache[relative_path]

        try:
            template = self.env.get_template(relative_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found at {self.template_path / relative_path}"
            ) from e

        self._cache[relative_path] = template
        return template

    def get_template(self, type_name: str) -> Template:
        """
        Get a role template by type name, loading and caching it if necessary.

        Args:
            type_name: Name of the type (e.g., 'entry')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        return self._load(f"types/{type_name}/template.tex.jinja")

    def get_structure_template(self, name: str) -> Template:
        """Get a document structure template (document, preamble, header)."""
        return self._load(f"structure/{name}.tex.jinja")

    def get_template_path(self, type_name: str) -> Path:
        """Get the file path for a role template."""
        return self.template_path / "types" / type_name / "template.tex.jinja"


class LocaleStringsRegistry:
    """
    Registry for per-locale vocabulary (month tables, present literals,
    education markers).

    Strings are stored in a YAML file keyed by locale tag and loaded once.
    """

    def __init__(self, config_path: Path = None):
        if config_path is None:
            config_path = LOCALE_STRINGS_PATH

        self.config_path = Path(config_path)
        self._strings: Dict[str, Dict[str, Any]] = {}

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self._strings:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Locale strings not found at {self.config_path}")
            self._strings = OmegaConf.to_container(OmegaConf.load(self.config_path), resolve=True)
        return self._strings

    def get_strings(self, locale_tag: str) -> Dict[str, Any]:
        """
        Get the vocabulary for one locale.

        Args:
            locale_tag: Locale tag as used in the YAML file ("en", "el")

        Raises:
            KeyError: If the locale has no entry
        """
        strings = self._load()
        if locale_tag not in strings:
            raise KeyError(f"No strings for locale '{locale_tag}'. Available: {list(strings)}")
        return strings[locale_tag]

    def all_strings(self) -> Dict[str, Dict[str, Any]]:
        """Vocabulary for every configured locale."""
        return self._load()


_default_strings = None


def default_locale_strings() -> LocaleStringsRegistry:
    """Shared registry for the configured locale strings file."""
    global _default_strings
    if _default_strings is None:
        _default_strings = LocaleStringsRegistry()
    return _default_strings
