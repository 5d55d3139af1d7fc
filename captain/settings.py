"""
Initializes the Dynaconf settings object for the captain component.
This module is the single source of truth for all configuration.

Any value can be overridden from the environment with the CAPTAIN_ prefix,
e.g. CAPTAIN_FETCH__CACHE_ROOT=/var/cache/captain.
"""

from pathlib import Path
from dynaconf import Dynaconf

PACKAGE_ROOT = Path(__file__).parent

settings = Dynaconf(
    root_path=PACKAGE_ROOT,
    settings_files=["config/settings.toml"],
    envvar_prefix="CAPTAIN",
    merge_enabled=True,
    environments=False,
)
