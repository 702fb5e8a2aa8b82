"""Exception hierarchy for the server browser."""


class BrowserError(Exception):
    """Base exception for omp-browser."""


class ConfigError(BrowserError):
    """Raised when the configuration file is invalid."""


class FetchError(BrowserError):
    """Raised when the server list cannot be downloaded or parsed."""


class FavoritesError(BrowserError):
    """Raised when the favorites file exists but cannot be parsed."""


class LaunchError(BrowserError):
    """Raised when the game client cannot be started."""
