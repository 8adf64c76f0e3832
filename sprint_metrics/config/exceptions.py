"""Configuration exceptions for Sprint Metrics."""


class ConfigError(Exception):
    """
    Exception raised for errors in the configuration file or command line.
    """
