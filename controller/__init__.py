"""
App Config Validation Controller Package

HTTP surface around the app_spec validator.

Components:
- API: FastAPI app exposing validation, examples and metrics
- main: uvicorn daemon entry point
"""

from .api import app as api_app

__version__ = "1.0.0"

__all__ = [
    "api_app"
]
