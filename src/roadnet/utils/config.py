"""Configuration loader.

Reads YAML configuration files into plain dictionaries.  The defaults
for road generation live in ``configs/world.yaml`` at the project root;
`roadnet.world.RoadConfig` turns the loaded mapping into validated
parameters.
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..errors import InvalidParameterError


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    Parameters
    ----------
    path : str or Path
        Path to the YAML configuration file.

    Returns
    -------
    dict
        Parsed configuration.  A missing or empty file gives an empty
        dict.

    Raises
    ------
    InvalidParameterError
        If the file is not valid YAML or its top level is not a mapping.
    """
    cfg_path = Path(path)
    if not cfg_path.is_file():
        return {}
    with open(cfg_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise InvalidParameterError(f"cannot parse {cfg_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidParameterError(
            f"{cfg_path} must contain a mapping, got {type(data).__name__}"
        )
    return data
