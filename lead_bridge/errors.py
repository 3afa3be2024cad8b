"""
Error taxonomy for the bridge.

Each error knows its HTTP status and the JSON body the webhook source receives.
"""


class BridgeError(Exception):
    """Base error; anything not more specific is an internal failure (500)."""

    status_code = 500

    def __init__(self, message: str = "Internal error"):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"ok": False, "error": self.message}


class ConfigurationError(BridgeError):
    """Required environment value absent or malformed. Fatal at startup."""


class AuthError(BridgeError):
    """Token missing or not equal to BRIDGE_TOKEN."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)

    def to_body(self) -> dict:
        return {"error": self.message}


class ValidationError(BridgeError):
    """Declared kind is not one of lead / prequal."""

    status_code = 400

    def __init__(self, message: str = "Invalid kind"):
        super().__init__(message)

    def to_body(self) -> dict:
        return {"error": self.message}


class TransportError(BridgeError):
    """SMTP send failed. Surfaced to the caller, never retried."""
