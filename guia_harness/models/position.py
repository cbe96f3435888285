"""
Geolocation API compatible position models and in-page script results.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Mirror of the browser's GeolocationCoordinates."""

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    accuracy: float = Field(default=10.0, ge=0.0)
    altitude: Optional[float] = None
    altitudeAccuracy: Optional[float] = None
    heading: Optional[float] = None
    speed: Optional[float] = None


class MockPosition(BaseModel):
    """
    Mirror of the browser's GeolocationPosition.

    A ``timestamp`` of None means the page stamps the position with
    ``Date.now()`` when it is installed.
    """

    coords: Coordinates
    timestamp: Optional[int] = None

    def to_js_dict(self) -> Dict[str, Any]:
        """Payload handed to the page as a script argument."""
        return {
            "coords": self.coords.model_dump(),
            "timestamp": self.timestamp,
        }


class MockSetupResult(BaseModel):
    """Outcome of installing the mock provider in the page."""

    success: bool
    coordinates: Optional[Dict[str, float]] = None
    providerType: Optional[str] = None
    error: Optional[str] = None
    stack: Optional[str] = None


class MockVerification(BaseModel):
    """State of the mock provider as seen from the page."""

    configured: bool
    providerExists: bool = False
    isSupported: bool = False
    hasPosition: bool = False
    position: Optional[Dict[str, float]] = None
    error: Optional[str] = None


class ProviderProbeResult(BaseModel):
    """Result of calling getCurrentPosition on the mock provider."""

    success: bool
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    accuracy: Optional[float] = None
    timestamp: Optional[float] = None
    error: Optional[str] = None
    code: Optional[int] = None
    stack: Optional[str] = None
