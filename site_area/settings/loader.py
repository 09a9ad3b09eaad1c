"""Resolution of engine settings.

Callers hand the engine settings in whichever form they have them: an
``AreaSettings`` instance, the name of a profile packaged under
``site_area/profiles``, a path to a YAML file, or a mapping of overrides on
top of the defaults.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

from ..models.settings import AreaSettings

logger = logging.getLogger(__name__)

PROFILES_DIR = Path(__file__).parent.parent / "profiles"

# Name that always means the model defaults, no file involved
DEFAULT_PROFILE = "default"

SettingsSource = Union[str, os.PathLike]
SettingsLike = Union[AreaSettings, SettingsSource, Mapping[str, Any], None]


def _find_yaml(source: SettingsSource) -> Path:
    path = Path(source)
    if path.suffix not in (".yaml", ".yml"):
        path = PROFILES_DIR / f"{path.name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"No settings profile or YAML file at {path}")
    return path


def load_settings(
    source: SettingsSource = DEFAULT_PROFILE,
    override: Mapping[str, Any] | None = None,
) -> AreaSettings:
    """Load settings from a packaged profile or a YAML file.

    Args:
        source: Profile name (e.g. ``"snapped"``) or path to a ``.yaml`` file
        override: Optional nested values applied on top of the loaded settings

    Returns:
        Validated AreaSettings

    Raises:
        FileNotFoundError: If no profile or file matches ``source``
        ValueError: If the YAML does not describe valid settings
        yaml.YAMLError: If the file is not parseable YAML
    """
    if source == DEFAULT_PROFILE:
        settings = AreaSettings()
    else:
        path = _find_yaml(source)
        settings = AreaSettings.from_yaml(path.read_text())
        logger.debug(f"Loaded settings from {path}")

    if override:
        settings = settings.merge_override(override)
    return settings


def resolve_settings(settings: SettingsLike) -> AreaSettings:
    """Turn any accepted settings form into an AreaSettings instance."""
    if settings is None:
        return AreaSettings()
    if isinstance(settings, AreaSettings):
        return settings
    if isinstance(settings, Mapping):
        return AreaSettings().merge_override(settings)
    return load_settings(settings)
