"""File operations shared by the settings loader, frame source and debug output."""

import json
import os
import logging
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp")


class FileUtils:
    """File operations and utilities."""

    @staticmethod
    def load_json(filepath: str) -> Optional[Dict[str, Any]]:
        """Load a JSON object from file, None when missing or malformed."""
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)

            if not isinstance(data, dict):
                logger.error(f"Expected a JSON object in {filepath}, got {type(data).__name__}")
                return None

            logger.debug(f"Loaded JSON data from {filepath}")
            return data

        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load JSON from {filepath}: {e}")
            return None

    @staticmethod
    def ensure_directory_exists(dirpath: str) -> bool:
        """Create directory if it doesn't exist."""
        try:
            if not os.path.exists(dirpath):
                os.makedirs(dirpath, exist_ok=True)
                logger.debug(f"Created directory: {dirpath}")
            return True

        except OSError as e:
            logger.error(f"Failed to create directory {dirpath}: {e}")
            return False

    @staticmethod
    def list_files(directory: str, extensions: Optional[Sequence[str]] = None) -> List[str]:
        """List files in directory sorted by name, optionally filtered by extension."""
        if not os.path.isdir(directory):
            return []

        wanted = tuple(ext.lower() for ext in extensions) if extensions else None
        files = []
        for filename in os.listdir(directory):
            filepath = os.path.join(directory, filename)
            if not os.path.isfile(filepath):
                continue
            if wanted is None or filename.lower().endswith(wanted):
                files.append(filepath)

        return sorted(files)

    @staticmethod
    def list_images(directory: str) -> List[str]:
        return FileUtils.list_files(directory, IMAGE_EXTENSIONS)
