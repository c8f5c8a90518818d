from __future__ import annotations

from typing import Any, Optional


class PlacePickerError(Exception):
    """Base error. `kind` is the stable identifier reported to UI callbacks."""
    kind = "error"


class GeocodingError(PlacePickerError):
    kind = "geocoding_error"


class Timeout(GeocodingError):
    kind = "timeout"

    def __init__(self, message: str = "Request timed out"):
        super().__init__(message)


class NoConnection(GeocodingError):
    kind = "no_connection"

    def __init__(self, message: str = "No internet connection"):
        super().__init__(message)


class ServerError(GeocodingError):
    kind = "server_error"

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Server error: {status}")


class MalformedResponse(GeocodingError):
    kind = "malformed_response"

    def __init__(self, message: str = "Bad response format"):
        super().__init__(message)


class ProviderError(GeocodingError):
    kind = "provider_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Provider error: {message}")

    @classmethod
    def from_payload(cls, error: Any) -> "ProviderError":
        # Nominatim sends either a bare string or {"code": ..., "message": ...}
        if isinstance(error, dict):
            message: Optional[Any] = error.get("message") or error.get("code")
            return cls(str(message) if message is not None else str(error))
        return cls(str(error))


class MissingCoordinates(GeocodingError):
    kind = "missing_coordinates"

    def __init__(self, message: str = "No coordinates found"):
        super().__init__(message)


class PositionError(PlacePickerError):
    kind = "position_error"


class ServicesDisabled(PositionError):
    kind = "services_disabled"

    def __init__(self, message: str = "Location services are disabled."):
        super().__init__(message)


class PermissionDenied(PositionError):
    kind = "permission_denied"

    def __init__(self, message: str = "Location permissions are denied."):
        super().__init__(message)


class PermissionDeniedForever(PositionError):
    kind = "permission_denied_forever"

    def __init__(
        self,
        message: str = "Location permissions are denied permanently. Please enable them in settings.",
    ):
        super().__init__(message)
