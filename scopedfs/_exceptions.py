class SFSPathPolicyError(ValueError):
    """Raised when a path cannot address an entry below the node it is resolved against."""
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid entry path '{path}': {reason}")


class SFSQuotaExceededError(OSError):
    """Raised when the quota limit is exceeded. Subclass of OSError."""
    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"SFS quota exceeded: requested {requested} bytes, "
            f"only {available} bytes available."
        )
