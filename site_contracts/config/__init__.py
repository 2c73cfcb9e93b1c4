"""Load and validate site build configuration YAML.

This subpackage parses the project's ``config/site.yaml`` file, merges global
defaults with per-page overrides, resolves document and stylesheet paths
relative to the configuration file, and produces typed dataclasses
(:class:`SiteConfig`, :class:`PageConfig`) consumed by the CLI. The primary
entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from site_contracts.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> page = site.get_page("home")  # doctest: +SKIP
>>> page.output_dir  # doctest: +SKIP
PosixPath('config/public/home')
"""

from .loader import load_site_config
from .models import PageConfig, SiteConfig, SiteConfigError

__all__ = ["PageConfig", "SiteConfig", "SiteConfigError", "load_site_config"]
