"""
Presets - Named option sets loaded once from a JSON config file

File shape::

    {
      "defaultOptions": {"browser": "chromium", "timeout": 30000},
      "presets": {"news": {"sectionSelectors": ["article"]}}
    }

Options merge with fixed precedence: defaults < preset < overrides. The merge
is shallow, so a list in a later layer replaces the earlier one entirely.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import ScraperConfig
from .errors import ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'PAGESCRAPE_CONFIG'
DEFAULT_CONFIG_FILE = 'config.json'

# JSON option names accepted besides the dataclass field names
OPTION_ALIASES = {
    'excludeSelectors': 'exclude_selectors',
    'sectionSelectors': 'section_selectors',
    'groupBy': 'section_selectors',
    'group_by': 'section_selectors',
    'waitForSelector': 'wait_for_selector',
    'userAgent': 'user_agent',
    'followRedirects': 'follow_redirects',
}

_CONFIG_FIELDS = {f.name for f in fields(ScraperConfig)}


@dataclass
class PresetConfig:
    """Default options plus named presets, as loaded from disk"""
    default_options: Dict[str, Any] = field(default_factory=dict)
    presets: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    source: Optional[Path] = None

    def list_presets(self) -> List[str]:
        return list(self.presets.keys())

    def get_preset(self, name: str) -> Optional[Dict[str, Any]]:
        return self.presets.get(name)


def normalize_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Map camelCase option names onto ScraperConfig fields, dropping unknown keys"""
    normalized = {}
    for key, value in (options or {}).items():
        name = OPTION_ALIASES.get(key, key)
        if name not in _CONFIG_FIELDS:
            logger.debug(f"Ignoring unknown option '{key}'")
            continue
        normalized[name] = value
    return normalized


def resolve_config_path(path: Union[str, Path, None] = None) -> Path:
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILE


def load_presets(path: Union[str, Path, None] = None) -> PresetConfig:
    """
    Load presets from a JSON file

    Args:
        path: Explicit file; otherwise $PAGESCRAPE_CONFIG, then ./config.json

    Returns:
        The parsed PresetConfig, or built-in defaults if the file is missing
        or unreadable
    """
    config_path = resolve_config_path(path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Could not find {config_path}, using defaults")
        return PresetConfig()
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not load {config_path} ({e}), using defaults")
        return PresetConfig()

    if not isinstance(data, dict):
        logger.warning(f"{config_path} does not contain a JSON object, using defaults")
        return PresetConfig()

    presets = data.get('presets') or {}
    logger.debug(f"Loaded {len(presets)} preset(s) from {config_path}")
    return PresetConfig(
        default_options=dict(data.get('defaultOptions') or {}),
        presets={name: dict(options or {}) for name, options in presets.items()},
        source=config_path
    )


def resolve_config(preset_config: PresetConfig, preset_name: Optional[str] = None,
                   overrides: Optional[Mapping[str, Any]] = None) -> ScraperConfig:
    """
    Merge defaults, a named preset and per-call overrides into one ScraperConfig

    Raises:
        ValidationError: if preset_name is unknown or the merged options are invalid
    """
    merged = normalize_options(preset_config.default_options)

    if preset_name:
        preset = preset_config.get_preset(preset_name)
        if preset is None:
            available = ', '.join(preset_config.list_presets()) or 'none'
            raise ValidationError(f"Unknown preset: {preset_name} (available: {available})")
        merged.update(normalize_options(preset))

    merged.update(normalize_options(overrides))

    try:
        config = ScraperConfig(**merged)
    except TypeError as e:
        raise ValidationError(f"Invalid options: {e}") from e
    return config.validate()
