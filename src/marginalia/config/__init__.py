"""Site configuration."""

from marginalia.config.settings import CONFIG_FILENAME, ResolvedPaths, SiteConfig, load_site_config

__all__ = ["CONFIG_FILENAME", "ResolvedPaths", "SiteConfig", "load_site_config"]
