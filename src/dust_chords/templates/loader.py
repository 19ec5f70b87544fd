"""
Template loader - discovers, loads and saves progression templates.

Templates can come from:
1. Built-in library (shipped with package)
2. Project templates (user's own directory)
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from dust_chords.constants import ErrorMessages
from dust_chords.core.errors import TemplateLoadError
from dust_chords.models.template import TemplateConfig
from dust_chords.progression.template import ProgressionTemplate

logger = logging.getLogger(__name__)


class TemplateLoader:
    """
    Discovers and loads progression templates.

    Templates are loaded from YAML files in the library and project
    directories. Project templates override library templates with the
    same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the template loader.

        Args:
            library_path: Path to built-in template library
            project_path: Path to project templates directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, ProgressionTemplate] = {}

    def list_templates(self) -> list[str]:
        """
        List the names of all loadable templates.

        Files that fail to load are skipped with a warning.
        """
        names: set[str] = set()
        for directory in self._search_paths():
            for path in sorted(directory.glob("*.yaml")):
                try:
                    self.load_config(path)
                except TemplateLoadError as e:
                    logger.warning(f"Skipping template file: {e}")
                    continue
                names.add(path.stem)
        return sorted(names)

    def get_template(self, name: str) -> ProgressionTemplate | None:
        """
        Get a template by name.

        Project templates take precedence over library templates.

        Args:
            name: Template name (file stem)

        Returns:
            ProgressionTemplate if found, None otherwise

        Raises:
            TemplateLoadError: If the file exists but is invalid
        """
        if name in self._cache:
            return self._cache[name]

        for directory in reversed(self._search_paths()):
            path = directory / f"{name}.yaml"
            if path.exists():
                template = self.load_file(path)
                self._cache[name] = template
                return template

        return None

    def load_file(self, path: Path) -> ProgressionTemplate:
        """
        Load a template from a YAML file.

        Raises:
            TemplateLoadError: If the file is unreadable, not valid YAML,
                fails validation, or contains an invalid chord
        """
        config = self.load_config(path)
        try:
            template = ProgressionTemplate.from_config(config)
        except TemplateLoadError as e:
            raise TemplateLoadError(
                ErrorMessages.INVALID_TEMPLATE_FILE.format(path=path, error=e)
            ) from e

        logger.info(f"Loaded template '{config.name}' from {path}")
        return template

    def load_config(self, path: Path) -> TemplateConfig:
        """Read and validate a template file without building transitions."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise TemplateLoadError(
                ErrorMessages.INVALID_TEMPLATE_FILE.format(path=path, error=e)
            ) from e

        if not isinstance(data, dict):
            raise TemplateLoadError(
                ErrorMessages.INVALID_TEMPLATE_FILE.format(path=path, error="expected a mapping")
            )

        try:
            return TemplateConfig.from_yaml_dict(data)
        except (KeyError, ValidationError) as e:
            raise TemplateLoadError(
                ErrorMessages.INVALID_TEMPLATE_FILE.format(path=path, error=e)
            ) from e

    def save_to_project(
        self,
        template: ProgressionTemplate,
        name: str | None = None,
        overwrite: bool = False,
    ) -> Path:
        """
        Write a template to the project directory.

        Args:
            template: Template to save
            name: File stem (defaults to the template's name)
            overwrite: Replace an existing project template

        Returns:
            Path to the written file
        """
        if not self.project_path:
            raise ValueError(ErrorMessages.NO_PROJECT_PATH)

        config = template.to_config()
        name = name or config.name
        if name != config.name:
            config = config.model_copy(update={"name": name})

        self.project_path.mkdir(parents=True, exist_ok=True)
        dest_file = self.project_path / f"{name}.yaml"
        if dest_file.exists() and not overwrite:
            raise ValueError(ErrorMessages.TEMPLATE_EXISTS.format(name=name))

        with open(dest_file, "w") as f:
            yaml.safe_dump(config.to_yaml_dict(), f, default_flow_style=False, sort_keys=False)

        # Invalidate cache
        self._cache.pop(name, None)

        return dest_file

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library template to the project for customization.

        Args:
            name: Template name

        Returns:
            Path to copied file, or None if not found
        """
        if not self.project_path:
            raise ValueError(ErrorMessages.NO_PROJECT_PATH)

        library_file = self.library_path / f"{name}.yaml"
        if not library_file.exists():
            return None

        self.project_path.mkdir(parents=True, exist_ok=True)

        dest_file = self.project_path / f"{name}.yaml"
        if dest_file.exists():
            raise ValueError(ErrorMessages.TEMPLATE_EXISTS.format(name=name))

        dest_file.write_text(library_file.read_text())
        self._cache.pop(name, None)
        return dest_file

    def clear_cache(self) -> None:
        self._cache.clear()

    def _search_paths(self) -> list[Path]:
        """Existing template directories, lowest precedence first."""
        paths = []
        if self.library_path.exists():
            paths.append(self.library_path)
        if self.project_path and self.project_path.exists():
            paths.append(self.project_path)
        return paths
