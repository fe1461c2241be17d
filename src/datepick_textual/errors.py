"""Custom exceptions for datepick-textual."""


class ConfigError(Exception):
    """Raised when config.toml or the command line holds an invalid setting."""
