# Base Exception
class InlinerError(Exception):
    # Base exception for data URI inlining errors
    pass


# Fetch Exceptions
class AssetFetchError(InlinerError):
    # Raised when an asset cannot be read from disk or downloaded

    def __init__(self, location: str, reason: str = "Fetch failed"):
        self.location = location
        self.reason = reason
        super().__init__(f"{reason}: {location}")


class NetworkTimeoutError(AssetFetchError):
    # Raised when a remote asset request times out

    def __init__(self, location: str):
        super().__init__(location, "Timeout downloading")


# Input Exceptions
class UnsupportedInputError(InlinerError):
    # Raised when document contents are a stream instead of text or bytes
    pass


class InvalidInputError(InlinerError):
    # Raised when an input document is missing or unreadable
    pass
