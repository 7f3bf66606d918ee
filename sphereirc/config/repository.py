from __future__ import annotations

import json
import os
from typing import Any

from ..errors import ConfigurationError


class ConfigRepository:
    """Reads the JSON configuration document from disk."""

    def __init__(self, path: str | os.PathLike[str]):
        """Initialize the ConfigRepository.

        Args:
            path: Path to the configuration file.
        """
        if not isinstance(path, str | os.PathLike):
            raise TypeError("path must be str or os.PathLike")
        self.path = str(path)

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def load_raw(self) -> dict[str, Any]:
        """Load the raw configuration mapping.

        Returns:
            The top-level JSON object.

        Raises:
            ConfigurationError: If the file is missing, unreadable, not JSON,
                or not a JSON object.
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Configuration file not found: {self.path}", data={"path": self.path}
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Configuration file unreadable: {e}", data={"path": self.path}
            ) from e
        except ValueError as e:
            raise ConfigurationError(
                f"Configuration file is not valid JSON: {e}", data={"path": self.path}
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a JSON object",
                data={"path": self.path},
            )
        return data
