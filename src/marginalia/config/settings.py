"""Site configuration powered by :mod:`pydantic` settings.

Values come from the site's ``_config.yml``. Anything missing there can be
supplied through ``MARGINALIA_*`` environment variables
(e.g. ``MARGINALIA_OUTPUT_DIR``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from marginalia.data_primitives.post import DEFAULT_PERMALINK, PERMALINK_FIELDS
from marginalia.exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "_config.yml"

# Jekyll permalink styles and :placeholders map onto Post.permalink fields
_PERMALINK_STYLES = {
    "date": DEFAULT_PERMALINK,
    "pretty": "/{categories}/{year}/{month}/{day}/{slug}/",
    "ordinal": DEFAULT_PERMALINK,
    "none": "/{categories}/{slug}.html",
}
_PLACEHOLDER_NAMES = {"title": "slug"}
_JEKYLL_PLACEHOLDER = re.compile(r":(categories|year|month|day|title|slug)\b")


@dataclass(frozen=True, slots=True)
class ResolvedPaths:
    """Absolute directories for one site."""

    site_root: Path
    source_dir: Path
    layouts_dir: Path
    output_dir: Path


class SiteConfig(BaseSettings):
    """Root configuration for a site."""

    title: str = ""
    description: str = ""
    base_url: str = ""
    source_dir: Path = Path("_posts")
    layouts_dir: Path = Path("_layouts")
    output_dir: Path = Path("_site")
    timezone: str = "UTC"
    default_layout: str | None = "post"
    index_layout: str | None = "index"
    permalink: str = DEFAULT_PERMALINK
    strict: bool = True

    model_config = SettingsConfigDict(
        extra="ignore",
        validate_assignment=True,
        env_prefix="MARGINALIA_",
    )

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"unknown timezone {value!r}"
            raise ValueError(msg) from exc
        return value

    @field_validator("permalink")
    @classmethod
    def _translate_permalink(cls, value: str) -> str:
        value = _PERMALINK_STYLES.get(value, value)
        pattern = _JEKYLL_PLACEHOLDER.sub(lambda m: "{" + _PLACEHOLDER_NAMES.get(m.group(1), m.group(1)) + "}", value)
        try:
            pattern.format(**dict.fromkeys(PERMALINK_FIELDS, "x"))
        except (KeyError, IndexError, ValueError) as exc:
            supported = ", ".join("{" + name + "}" for name in PERMALINK_FIELDS)
            msg = f"unsupported permalink {value!r} (placeholders: {supported})"
            raise ValueError(msg) from exc
        return pattern

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def resolve(self, site_root: Path) -> ResolvedPaths:
        """Resolve configured directories against ``site_root``."""
        root = site_root.expanduser().resolve()
        return ResolvedPaths(
            site_root=root,
            source_dir=root / self.source_dir,
            layouts_dir=root / self.layouts_dir,
            output_dir=root / self.output_dir,
        )

    def site_context(self) -> dict[str, Any]:
        """Values exposed to layouts as ``site``."""
        return {"title": self.title, "description": self.description, "base_url": self.base_url}


def load_site_config(site_root: Path, **overrides: Any) -> SiteConfig:
    """Load ``_config.yml`` from ``site_root``.

    A missing file yields the defaults. Keyword ``overrides`` win over file
    values; ``None`` overrides are ignored.

    Raises:
        ConfigLoadError: If the file is not valid YAML or holds invalid values.

    """
    config_path = site_root / CONFIG_FILENAME
    data: dict[str, Any] = {}

    if config_path.exists():
        logger.info("Loading config from %s", config_path)
        try:
            loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(str(config_path), str(exc)) from exc
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigLoadError(str(config_path), "top level must be a mapping")
        data = loaded or {}
        # Jekyll spells it "baseurl"
        if "baseurl" in data and "base_url" not in data:
            data["base_url"] = data.pop("baseurl")
    else:
        logger.debug("No %s found in %s, using defaults", CONFIG_FILENAME, site_root)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return SiteConfig(**data)
    except ValidationError as exc:
        raise ConfigLoadError(str(config_path), str(exc)) from exc
