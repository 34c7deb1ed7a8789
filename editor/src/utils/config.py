"""Configuration management for the mask editor engine"""

import os
import json
import logging
from dataclasses import asdict, dataclass, fields

from constants import (
    DRAFT_MIN_POINT_DISTANCE,
    DEFAULT_MARKUP, DEFAULT_TAX_RATE, DEFAULT_LABOR_COST, MAX_HISTORY_ENTRIES,
)

_logger = logging.getLogger('EditorConfig')


@dataclass
class EditorConfig:
    """Runtime-tunable settings, persisted as JSON"""
    draft_min_point_distance: float = DRAFT_MIN_POINT_DISTANCE
    default_markup: float = DEFAULT_MARKUP
    default_tax_rate: float = DEFAULT_TAX_RATE
    default_labor_cost: float = DEFAULT_LABOR_COST
    max_history: int = MAX_HISTORY_ENTRIES
    log_level: str = 'WARNING'

    @classmethod
    def from_dict(cls, data):
        """Build config from a dict, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            _logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self):
        return asdict(self)

    def quote_settings(self):
        """Pricing defaults for a QuoteBook"""
        from models.quote import QuoteSettings
        return QuoteSettings(self.default_markup, self.default_tax_rate, self.default_labor_cost)

    def apply_logging(self):
        from utils.logger import setup_logging
        setup_logging(self.log_level)


def default_config_path():
    """Per-user config file location"""
    config_dir = os.path.join(os.path.expanduser('~'), '.mask_editor')
    return os.path.join(config_dir, 'config.json')


def load_config(path=None):
    """Load settings from a JSON config file

    Args:
        path: Config file path (defaults to default_config_path())

    Returns:
        EditorConfig (defaults when the file does not exist)

    Raises:
        ValueError: If the file exists but is not a JSON object
    """
    path = path or default_config_path()
    if not os.path.exists(path):
        _logger.debug(f"No config at {path}, using defaults")
        return EditorConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    _logger.info(f"Loaded config from {path}")
    return EditorConfig.from_dict(data)


def save_config(config, path=None):
    """Save settings to a JSON config file, creating its directory"""
    path = path or default_config_path()
    config_dir = os.path.dirname(path)
    if config_dir:
        os.makedirs(config_dir, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)
    _logger.info(f"Saved config to {path}")
