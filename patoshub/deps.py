# patoshub/deps.py

from fastapi import Request

from .config import Settings
from .storage import ImageStorage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> ImageStorage:
    return request.app.state.storage
