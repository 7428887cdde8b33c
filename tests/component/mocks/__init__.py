"""
Component Test Mocks

Shared test doubles for component testing.
These replace the HTTP client, the user's dialogs and FastAPI uploads.
"""

from .catalog_client_mock import MockCatalogClient
from .ui_mock import ScriptedUI
from .upload_mock import FakeUpload

__all__ = [
    'MockCatalogClient',
    'ScriptedUI',
    'FakeUpload',
]
