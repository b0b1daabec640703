"""Request-scoped accessors for the gateways built in ``create_app``."""

from fastapi import Request

from .config import Settings
from .services.chain import ChainGateway
from .services.content_storage import ContentStorageGateway
from .services.inference import InferenceGateway


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_chain(request: Request) -> ChainGateway:
    return request.app.state.chain


def get_storage(request: Request) -> ContentStorageGateway:
    return request.app.state.storage


def get_inference(request: Request) -> InferenceGateway:
    return request.app.state.inference
