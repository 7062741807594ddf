"""Exception types raised by contribslist."""


class ContribsListError(Exception):
    """Base class for contribslist errors."""


class MalformedTitleError(ContribsListError):
    """A page title could not be normalized (empty or contains illegal characters)."""


class ConfigError(ContribsListError):
    """Configuration is missing or invalid."""


__all__ = [
    'ContribsListError',
    'MalformedTitleError',
    'ConfigError',
]
