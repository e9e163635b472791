"""
Configuration management for TestForge.

Handles loading project-level configuration: formatting of generated files and
the directories the test generator reads from and writes to.

Configuration priority (highest to lowest):
1. Environment variables (for Docker/container deployments)
2. config.json file (for local development)
3. Built-in defaults
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Config file path at project root
CONFIG_FILE = Path(__file__).parent.parent.parent / "config.json"

# Default values (used when neither env var nor config.json specifies)
DEFAULT_INDENT_UNIT = "  "
DEFAULT_OUTPUT_ROOT = "generated_tests"
DEFAULT_SESSIONS_DIR = "sessions"


class Config:
    """
    Project-level configuration manager.

    Priority: ENV > config.json > defaults

    Environment variables for Docker:
      - INDENT_UNIT: Indentation written by the formatter ("  ", "    " or "\\t")
      - OUTPUT_ROOT: Root directory for generated Cypress spec files
      - SESSIONS_DIR: Directory holding saved session fragments (preliminary code)
      - PAGES_DIR: Page objects directory used in generated import lines
    """

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = Path(config_file) if config_file else CONFIG_FILE
        self.data = self.load()

    def load(self) -> Dict[str, Any]:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except Exception as e:
                logger.error(f"Failed to load config: {e}")
                return self._default_config()
        else:
            return self._default_config()

    def _default_config(self) -> Dict[str, Any]:
        """Return default configuration."""
        return {
            "formatting": {
                "indent_unit": DEFAULT_INDENT_UNIT
            },
            "paths": {
                "output_root": DEFAULT_OUTPUT_ROOT,
                "sessions_dir": DEFAULT_SESSIONS_DIR
            }
        }

    def _get(self, env_var: str, section: str, key: str, default: Optional[str]) -> Optional[str]:
        # Environment variable takes precedence (Docker/container deployments)
        env_value = os.getenv(env_var)
        if env_value:
            return env_value

        # Config file second (local development)
        file_value = self.data.get(section, {}).get(key)
        if file_value:
            return file_value

        return default

    def get_indent_unit(self) -> str:
        """
        Get the indentation unit used by the formatter.

        Priority: INDENT_UNIT env var > config.json > default (two spaces)
        """
        unit = self._get('INDENT_UNIT', 'formatting', 'indent_unit', DEFAULT_INDENT_UNIT)
        # Allow "\t" to be written literally in env files
        return unit.replace('\\t', '\t')

    def get_output_root(self) -> str:
        """Get the root directory for generated spec files (ENV > config.json > default)."""
        return self._get('OUTPUT_ROOT', 'paths', 'output_root', DEFAULT_OUTPUT_ROOT)

    def get_sessions_dir(self) -> str:
        """Get the saved sessions directory (ENV > config.json > default)."""
        return self._get('SESSIONS_DIR', 'paths', 'sessions_dir', DEFAULT_SESSIONS_DIR)

    def get_pages_dir(self) -> Optional[str]:
        """Get the page objects directory, or None when imports should not be generated."""
        return self._get('PAGES_DIR', 'paths', 'pages_dir', None)


# Global config instance
config = Config()
