"""Project configuration for Inkwell.

A project works without any configuration file: the defaults read posts from
``posts/``, templates from ``templates/`` and write the site to ``public/``.
An optional ``inkwell.yaml`` at the project root overrides any of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

CONFIG_FILENAME = "inkwell.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "content_dir": "posts",
    "templates_dir": "templates",
    "output_dir": "public",
    "content_extension": ".md",
    "template_extension": ".html.jinja",
    "output_extension": ".html",
    "post_template": "post",
    "index_template": "index",
    "index_name": "index",
    "strict_templates": False,
}

_DIR_KEYS = ("content_dir", "templates_dir", "output_dir")


@dataclass(frozen=True)
class SiteConfig:
    """Resolved settings for one build.

    Attributes:
        project_root: Directory the relative paths were resolved against.
        content_dir: Directory holding the markdown sources.
        templates_dir: Directory holding the page templates.
        output_dir: Directory the site is written to.
        content_extension: Suffix identifying source documents.
        template_extension: Suffix appended to a logical template name.
        output_extension: Suffix of generated pages; also the purge filter.
        post_template: Logical name of the single-document template.
        index_template: Logical name of the listing template.
        index_name: Base name of the generated listing page.
        strict_templates: Fail on references to undefined template variables.
    """

    project_root: Path
    content_dir: Path
    templates_dir: Path
    output_dir: Path
    content_extension: str = ".md"
    template_extension: str = ".html.jinja"
    output_extension: str = ".html"
    post_template: str = "post"
    index_template: str = "index"
    index_name: str = "index"
    strict_templates: bool = False

    @classmethod
    def for_project(cls, project_root: Path, **overrides: Any) -> SiteConfig:
        """Build a config rooted at ``project_root`` using the defaults.

        Args:
            project_root: Root directory of the project.
            **overrides: Values replacing entries of DEFAULT_CONFIG.

        Returns:
            SiteConfig with directories resolved against the project root.
        """
        values = {**DEFAULT_CONFIG, **overrides}
        root = Path(project_root)
        for key in _DIR_KEYS:
            values[key] = root / Path(values[key])
        return cls(project_root=root, **values)

    @property
    def index_filename(self) -> str:
        return f"{self.index_name}{self.output_extension}"

    @property
    def index_path(self) -> Path:
        return self.output_dir / self.index_filename

    def output_path_for(self, slug: str) -> Path:
        """Return the output file path for a document slug."""
        return self.output_dir / f"{slug}{self.output_extension}"


def load_config(project_root: Path) -> SiteConfig:
    """Load site configuration from inkwell.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        SiteConfig with defaults applied for every missing key.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config_path = Path(project_root) / CONFIG_FILENAME
    overrides: dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}", config_path, exc) from exc
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError("Configuration must be a mapping", config_path)
        overrides = {k: v for k, v in loaded.items() if k in DEFAULT_CONFIG}
    return SiteConfig.for_project(Path(project_root), **overrides)
