"""Configuration loader for Sprint Metrics."""

import logging
import os.path

import yaml
from pydicti import odicti

from ..common_constants import CHART_FILENAME_KEYS, CHART_TITLE_KEYS, DATA_FILENAME_KEYS
from ..utils import resolve_path
from .exceptions import ConfigError
from .type_utils import expand_key, force_list, force_str

logger = logging.getLogger(__name__)


class _OrderedLoader(yaml.SafeLoader):
    """SafeLoader that builds case-insensitive, ordered mappings."""


def _construct_mapping(loader, node):
    loader.flatten_mapping(node)
    return odicti(loader.construct_pairs(node))


_OrderedLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping
)


def _create_default_options():
    """Create default options dictionary."""
    return {
        "data": {
            "sprints": None,
            "tasks": None,
        },
        "settings": {
            **{key: None for key in DATA_FILENAME_KEYS},
            **{key: None for key in CHART_FILENAME_KEYS},
            **{key: None for key in CHART_TITLE_KEYS},
        },
    }


def _parse_data_config(config, options, cwd):
    """Parse the `Data` section: where to read sprints and tasks from."""
    if "data" not in config:
        return

    data_config = config["data"] or {}
    for key in ("sprints", "tasks"):
        if key in data_config:
            options["data"][key] = resolve_path(force_str(key, data_config[key]), cwd)


def _parse_output_config(config, options):
    """Parse the `Output` section."""
    if "output" not in config:
        return

    output_config = config["output"] or {}
    settings = options["settings"]
    known_keys = {expand_key("output_directory")}

    if expand_key("output_directory") in output_config:
        options["output_directory"] = force_str(
            "output_directory", output_config[expand_key("output_directory")]
        )

    for key in DATA_FILENAME_KEYS:
        known_keys.add(expand_key(key))
        if expand_key(key) in output_config:
            settings[key] = [
                os.path.basename(force_str(key, value))
                for value in force_list(output_config[expand_key(key)])
            ]

    for key in CHART_FILENAME_KEYS:
        known_keys.add(expand_key(key))
        if expand_key(key) in output_config:
            settings[key] = os.path.basename(
                force_str(key, output_config[expand_key(key)])
            )

    for key in CHART_TITLE_KEYS:
        known_keys.add(expand_key(key))
        if expand_key(key) in output_config:
            settings[key] = str(output_config[expand_key(key)])

    for key in output_config:
        if str(key).lower() not in known_keys:
            logger.warning("Ignoring unknown `Output` setting `%s`", key)


def config_to_options(data, cwd=None, _visited_files=None):
    """
    Parse YAML config data and return options dict.

    Relative paths in the `Data` section are resolved against `cwd`, which
    is also where `Extends` looks for the base file.
    """
    if _visited_files is None:
        _visited_files = set()

    try:
        config = yaml.load(data, _OrderedLoader)
    except yaml.YAMLError as e:
        raise ConfigError("Unable to parse YAML configuration file.") from e

    if config is None:
        raise ConfigError("Configuration file is empty") from None

    if not isinstance(config, odicti):
        raise ConfigError("Configuration file must contain a mapping of sections")

    options = _create_default_options()

    if "extends" in config:
        if cwd is None:
            raise ConfigError("`extends` is not supported here.")

        extends_filename = os.path.abspath(
            os.path.normpath(
                os.path.join(cwd, str(config["extends"]).replace("/", os.path.sep))
            )
        )

        if not os.path.exists(extends_filename):
            raise ConfigError(
                f"File `{extends_filename}` referenced in `extends` not found."
            ) from None

        if extends_filename in _visited_files:
            raise ConfigError(
                f"Circular extends reference detected: {extends_filename}"
            ) from None

        _visited_files.add(extends_filename)

        logger.debug("Extending file %s", extends_filename)
        with open(extends_filename, encoding="utf-8") as extends_file:
            options = config_to_options(
                extends_file.read(),
                cwd=os.path.dirname(extends_filename),
                _visited_files=_visited_files,
            )

    _parse_data_config(config, options, cwd)
    _parse_output_config(config, options)

    return options
