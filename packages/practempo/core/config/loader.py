"""Load the PracTempo app config from a JSON or YAML file.

The file is optional: without one every setting takes its default. A file
that exists but cannot be read as a mapping is an error.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from practempo.core.config.models import AppConfig
from practempo.core.utils.logging import configure_logging as _configure_root_logging

logger = logging.getLogger(__name__)

_SUFFIX_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def detect_format(file_path: Path | str) -> str:
    """Return "json" or "yaml" for a config file path.

    Raises:
        ValueError: For any other suffix.

    Example:
        >>> detect_format("practempo.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    try:
        return _SUFFIX_FORMATS[suffix]
    except KeyError:
        raise ValueError(f"Unsupported config format: {suffix or '(none)'}") from None


def _parse(text: str, fmt: str, path: Path) -> Any:
    if fmt == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    try:
        content = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    # An empty YAML document loads as None
    return {} if content is None else content


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a config file into a plain dict.

    Args:
        path: ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is unsupported, the content does not parse,
            or the top level is not a mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    content = _parse(path.read_text(encoding="utf-8"), detect_format(path), path)
    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate the app config.

    Args:
        path: Config file; None, or a path that does not exist, yields the
            defaults.

    Raises:
        ValueError: If the file is unreadable as a config mapping.
        pydantic.ValidationError: If a value is out of range or a key is
            unknown.
    """
    if path is None:
        return AppConfig()
    if not Path(path).exists():
        logger.debug(f"Config file {path} not found, using defaults")
        return AppConfig()

    config = AppConfig.model_validate(load_config(path))
    logger.debug(f"Loaded config from {path}")
    return config


def configure_logging(config: AppConfig | None = None) -> None:
    """Apply the ``logging`` section of an app config to the root logger."""
    section = (config or AppConfig()).logging
    _configure_root_logging(
        level=section.level,
        format_string=section.format,
        filename=section.filename,
        structured=section.structured,
    )
