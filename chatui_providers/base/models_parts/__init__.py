"""One-class-per-file DTO implementations re-exported by ``base.models``."""

from .message import Message, Role, ROLES
from .chat_request import ChatRequest
from .chat_response import ChatResponse
from .usage import Usage, usage_from_mapping
from .model_info import ModelInfo

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
