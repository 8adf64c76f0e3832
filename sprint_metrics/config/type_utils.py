"""Type utilities for configuration processing."""

from .exceptions import ConfigError


def force_list(val) -> list:
    """
    Ensure the value is a list.
    """
    return list(val) if isinstance(val, (list, tuple)) else [val]


def force_str(key, value) -> str:
    """
    Ensure value is a non-empty string, raise ConfigError otherwise.
    """
    if value is None or isinstance(value, (dict, list, tuple)) or str(value) == "":
        raise ConfigError(
            f"Value `{value}` for key `{expand_key(key)}` must be a file name or text"
        )
    return str(value)


def expand_key(key) -> str:
    """
    Expand config key for display and lookup: `velocity_data` -> `velocity data`.
    """
    return str(key).replace("_", " ").lower()
