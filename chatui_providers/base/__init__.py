"""
Providers Base Package

Exports the provider-agnostic contracts, DTOs, registry, catalogue and
factory shared by the vendor adapters:
- Interfaces: the uniform ``Provider`` boundary
- Models (DTOs): request/response value objects
- Errors: the closed ``ErrorCode`` taxonomy and ``ProviderError``
- Registry and factory: name-keyed adapter lookup and lazy construction
"""

from .cancellation import CancellationToken, Cancellable, is_cancelled, raise_if_cancelled
from .catalog import MODEL_CATALOG, model_ids, models_for
from .dto import AdapterParams
from .errors import ErrorCode, ProviderError
from .factory import ProviderFactory, UnknownProviderError
from .interfaces import HasCredential, HasDefaultModel, Provider
from .models import (
    ChatRequest,
    ChatResponse,
    Message,
    ModelInfo,
    Role,
    Usage,
)
from .registry import ProviderRegistry

__all__ = [
    "AdapterParams",
    "CancellationToken",
    "Cancellable",
    "ChatRequest",
    "ChatResponse",
    "ErrorCode",
    "HasCredential",
    "HasDefaultModel",
    "Message",
    "MODEL_CATALOG",
    "ModelInfo",
    "Provider",
    "ProviderError",
    "ProviderFactory",
    "ProviderRegistry",
    "Role",
    "UnknownProviderError",
    "Usage",
    "is_cancelled",
    "model_ids",
    "models_for",
    "raise_if_cancelled",
]
