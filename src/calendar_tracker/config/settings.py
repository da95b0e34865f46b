from pathlib import Path
import json
from typing import Dict, Any, Optional

# Package defaults (bundled with code)
PACKAGE_CONFIG_DIR = Path(__file__).parent / "defaults"

# User configs (in project root, gitignored)
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
USER_CONFIG_DIR = PROJECT_ROOT / "config"

RULES_CONFIG_NAME = "categories.json"

# Google OAuth client secrets and the token cached after the first login
CREDENTIALS_FILE = USER_CONFIG_DIR / "credentials.json"
TOKEN_FILE = USER_CONFIG_DIR / "token.json"

class ConfigLoader:
    """Load configuration with user overrides"""

    @staticmethod
    def read_json(path: Path) -> Dict[str, Any]:
        """
        Read a JSON config file.

        Raises:
            ValueError: If the file is not valid JSON or not a JSON object
        """
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Config file '{path}' is not valid JSON: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file '{path}' must contain a JSON object")

        return data

    @staticmethod
    def load_config(config_name: str) -> Dict[str, Any]:
        """
        Load config with fallback: user config -> default config

        Args:
            config_name: Name of the config file (e.g., 'categories.json')

        Raises:
            FileNotFoundError: If no config file was found

        Returns:
            Parsed JSON configuration
        """
        user_config_path = USER_CONFIG_DIR / config_name
        if user_config_path.exists():
            return ConfigLoader.read_json(user_config_path)

        default_config_path = PACKAGE_CONFIG_DIR / config_name
        if default_config_path.exists():
            return ConfigLoader.read_json(default_config_path)

        raise FileNotFoundError(
            f"Config file '{config_name}' not found in:\n"
            f" - {user_config_path}\n"
            f" - {default_config_path}"
        )

    @staticmethod
    def load_rules_config(path: Optional[Path] = None) -> Dict[str, Any]:
        """
        Load the category rules configuration.

        Args:
            path: Explicit rules file. If None, falls back to load_config.

        Raises:
            FileNotFoundError: If the explicit file does not exist
        """
        if path is None:
            return ConfigLoader.load_config(RULES_CONFIG_NAME)

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file '{path}' not found")

        return ConfigLoader.read_json(path)
