"""
Configuration Service - Manages persisted user defaults.

This service handles loading and saving the default page range and padding
settings to/from a JSON file, with proper validation and defaults.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_PADDING_PAGE,
    DEFAULT_PADDING_POSITION,
    DEFAULT_SINGLE_PAGES,
)
from ..models import BookletDefaults, PaddingPosition

log = logging.getLogger(__name__)


class ConfigService:
    """
    Manages user defaults persistence.

    Handles loading defaults from config.json, saving changes,
    and providing built-in defaults when the file doesn't exist.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Optional custom config file path.
                        If None, uses ~/.config/pdf-booklet/config.json.
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        self.config_path = config_path

    def load(self) -> BookletDefaults:
        """
        Load defaults from file.

        Returns:
            BookletDefaults with loaded settings, or built-in defaults if
            the file doesn't exist or cannot be used
        """
        if not self.config_path.exists():
            return BookletDefaults()

        try:
            with open(self.config_path) as f:
                data = json.load(f)

            return BookletDefaults(
                single_pages=str(data.get('single_pages', DEFAULT_SINGLE_PAGES)),
                padding_position=PaddingPosition(
                    data.get('padding_position', DEFAULT_PADDING_POSITION)
                ),
                padding_page=int(data.get('padding_page', DEFAULT_PADDING_PAGE)),
                output_suffix=str(data.get('output_suffix', DEFAULT_OUTPUT_SUFFIX)),
            )

        except (json.JSONDecodeError, OSError, ValueError, TypeError, AttributeError) as e:
            log.warning("Failed to load config from %s: %s", self.config_path, e)
            log.warning("Using default configuration")
            return BookletDefaults()

    def save(self, defaults: BookletDefaults):
        """
        Save defaults to file.

        Args:
            defaults: BookletDefaults to save

        Note:
            Failures are logged, not raised - saving defaults is best-effort.
        """
        data = {
            'single_pages': defaults.single_pages,
            'padding_position': defaults.padding_position.value,
            'padding_page': defaults.padding_page,
            'output_suffix': defaults.output_suffix,
        }

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w') as f:
                json.dump(data, f, indent=2)

        except OSError as e:
            log.warning("Failed to save config to %s: %s", self.config_path, e)

    def reset_to_defaults(self) -> bool:
        """
        Delete config file to reset to defaults.

        Returns:
            True if config was deleted, False if it didn't exist or couldn't be deleted
        """
        try:
            if self.config_path.exists():
                self.config_path.unlink()
                return True
            return False

        except OSError as e:
            log.warning("Failed to delete config file %s: %s", self.config_path, e)
            return False

    def get_config_path(self) -> Path:
        """
        Get the path to the configuration file.

        Returns:
            Path to config file (may not exist yet)
        """
        return self.config_path
