class SteamLocatorError(Exception):
    """Base class for errors raised inside steam_locator."""

    pass


class ManifestParseError(SteamLocatorError):
    """Raised when an appmanifest file is not valid KeyValues text."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"Could not parse app manifest {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
