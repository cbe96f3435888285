# ============================================================================
# guia_harness/server/__init__.py
# ============================================================================
"""Mock services used by browser tests."""
from guia_harness.server.mock_geolocation import (
    MockGeolocationServer,
    create_app,
    geolocation_payload
)

__all__ = [
    'MockGeolocationServer',
    'create_app',
    'geolocation_payload',
]
