"""Exception raised for unusable configuration."""


class ConfigError(ValueError):
    """A configuration value is missing, of the wrong type, or unsupported."""
