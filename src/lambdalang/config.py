"""Environment files and settings for the lambdalang command line.

An environment file is a YAML document binding variables and declaring
operators:

    variables:
      x: "5"
      big: "99999999999999999999"
      greeting: "'hello'"
    operators:
      - "+"
      - "*"

Variable values are raw tokens and are classified exactly as source
tokens would be, so `x` above is bound to an int and `big` to a bigint.
Operators may also be given as a mapping of name -> description.

Environment Variables:
    LAMBDALANG_ENV:       Path to a default environment file.
    LAMBDALANG_LOG_LEVEL: Logging level name (DEBUG, INFO, ...).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import LangError, error_invalid_config
from .runtime.context import Environment
from .runtime.registry import Classifier, get_classifier

__all__ = [
    "LAMBDALANG_ENV",
    "LAMBDALANG_LOG_LEVEL",
    "load_environment",
    "environment_from_dict",
    "default_environment_path",
    "configure_logging",
]

# Environment variable names
LAMBDALANG_ENV = "LAMBDALANG_ENV"
LAMBDALANG_LOG_LEVEL = "LAMBDALANG_LOG_LEVEL"

logger = logging.getLogger(__name__)


def default_environment_path() -> Optional[Path]:
    """Return the environment file named by LAMBDALANG_ENV, if any."""
    env_path = os.environ.get(LAMBDALANG_ENV, "").strip()
    return Path(env_path) if env_path else None


def configure_logging(verbose: bool = False) -> None:
    """Set up logging from the verbosity flag or LAMBDALANG_LOG_LEVEL."""
    if verbose:
        level = "DEBUG"
    else:
        level = os.environ.get(LAMBDALANG_LOG_LEVEL, "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "WARNING"
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def environment_from_dict(
    data: Dict[str, Any],
    source: str = "<dict>",
    classifier: Optional[Classifier] = None,
) -> Environment:
    """Build an Environment from an already parsed document."""
    classifier = classifier or get_classifier()
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise error_invalid_config(source, "top level must be a mapping")

    unknown = set(data) - {"variables", "operators"}
    if unknown:
        raise error_invalid_config(source, f"unknown section(s): {', '.join(sorted(unknown))}")

    env = Environment()

    variables = data.get("variables") or {}
    if not isinstance(variables, dict):
        raise error_invalid_config(source, "'variables' must be a mapping of name to token")
    for name, token in variables.items():
        # YAML turns bare 5 / true into Python scalars; classify their text.
        if isinstance(token, bool):
            token = "true" if token else "false"
        elif not isinstance(token, (str, int, float)):
            raise error_invalid_config(source, f"variable '{name}' must be a scalar token")
        try:
            env.bind(str(name), classifier.classify(str(token)))
        except LangError as e:
            raise error_invalid_config(source, f"variable '{name}': {e.diagnostic.message}") from e

    operators = data.get("operators") or []
    if isinstance(operators, dict):
        for name, definition in operators.items():
            env.define_operator(str(name), definition if definition is not None else True)
    elif isinstance(operators, list):
        for name in operators:
            env.define_operator(str(name))
    else:
        raise error_invalid_config(source, "'operators' must be a list or a mapping")

    logger.debug("loaded %d variable(s) and %d operator(s) from %s",
                 len(variables), len(operators), source)
    return env


def load_environment(
    path: Union[str, Path],
    classifier: Optional[Classifier] = None,
) -> Environment:
    """Load an Environment from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise error_invalid_config(str(path), "file not found")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise error_invalid_config(str(path), f"YAML parse error: {e}") from e
    return environment_from_dict(data, source=str(path), classifier=classifier)
