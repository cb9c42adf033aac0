import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import yaml

from ..domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_config_file(path: PathLike, root_key: str = "indexwire") -> Dict[str, Any]:
    """Read one YAML or JSON document.

    When the document has a top-level ``root_key`` section only that
    section is returned, so the search settings can share a file with the
    rest of an application's configuration.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigurationError(f"Cannot parse {config_path}: {err}") from err

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(
            f"{config_path} must contain a mapping, got {type(document).__name__}"
        )
    if root_key and isinstance(document.get(root_key), dict):
        document = document[root_key]

    logger.debug("Loaded configuration from %s", config_path)
    return document


def load_config_files(paths: Iterable[PathLike], root_key: str = "indexwire") -> List[Dict[str, Any]]:
    return [load_config_file(path, root_key=root_key) for path in paths]
