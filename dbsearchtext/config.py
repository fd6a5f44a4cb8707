"""
Config file + environment.

~/.dbsearchtext.json (path overridable with DBSEARCHTEXT_CONFIG):

    {
      "dialect": "postgresql",
      "connection_string": "postgresql://me@localhost/shop",
      "postgresql": {"cross_database": true}
    }

DBSEARCHTEXT_DIALECT and DBSEARCHTEXT_CONNECTION override the file.
If both are set the file is optional.
"""

import json
import os
from dataclasses import dataclass, field

from .errors import ConfigError

CFG_PATH = os.path.expanduser("~/.dbsearchtext.json")


@dataclass(frozen=True)
class SearchConfig:
    dialect: str
    connection_string: str
    options: dict = field(default_factory=dict)


def config_path() -> str:
    return os.environ.get("DBSEARCHTEXT_CONFIG") or CFG_PATH


def load_config(path: str = None) -> SearchConfig:
    """
    Resolve dialect, connection string and per-dialect options.

    Raises:
        ConfigError: file missing (and env incomplete), bad JSON, or
                     no dialect / connection string anywhere.
    """
    path = path or config_path()
    env_dialect = os.environ.get("DBSEARCHTEXT_DIALECT", "").strip()
    env_conn = os.environ.get("DBSEARCHTEXT_CONNECTION", "").strip()

    cfg = {}
    if os.path.exists(path):
        try:
            with open(path) as f:
                cfg = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read {path}: {e}") from e
        if not isinstance(cfg, dict):
            raise ConfigError(f"{path} must contain a JSON object")
    elif not (env_dialect and env_conn):
        raise ConfigError(
            f"No connection given and no config at {path}. "
            f"Pass a dialect and connection string, set DBSEARCHTEXT_DIALECT and "
            f"DBSEARCHTEXT_CONNECTION, or create {path}."
        )

    dialect = (env_dialect or cfg.get("dialect") or "").lower().strip()
    if not dialect:
        raise ConfigError(f"No 'dialect' in {path} and DBSEARCHTEXT_DIALECT not set.")

    connection_string = env_conn or cfg.get("connection_string")
    if not connection_string:
        raise ConfigError(
            f"No 'connection_string' in {path} and DBSEARCHTEXT_CONNECTION not set."
        )

    options = cfg.get(dialect, {})
    if not isinstance(options, dict):
        raise ConfigError(f"'{dialect}' section in {path} must be a JSON object")

    return SearchConfig(dialect=dialect, connection_string=connection_string,
                        options=dict(options))
