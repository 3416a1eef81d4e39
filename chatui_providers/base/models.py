"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``chatui_providers.base.models_parts`` so callers have a single stable import
path.
"""

from .models_parts.message import Message, Role, ROLES
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse
from .models_parts.usage import Usage, usage_from_mapping
from .models_parts.model_info import ModelInfo

__all__ = [
    "Message",
    "Role",
    "ROLES",
    "ChatRequest",
    "ChatResponse",
    "Usage",
    "usage_from_mapping",
    "ModelInfo",
]
