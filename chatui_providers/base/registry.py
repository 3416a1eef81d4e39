"""Name-keyed registry of constructed provider adapters.

Built once at process start and read concurrently thereafter. Registration
is serialized by a lock; reads are plain dictionary lookups.
"""
from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from .interfaces import Provider


class ProviderRegistry:
    """Mapping from ``provider_name`` to a provider instance.

    ``register`` overwrites any prior entry with the same name (last write
    wins). ``get`` reports absence through its found flag rather than raising.
    """

    def __init__(self) -> None:
        self._providers: Dict[str, Provider] = {}
        self._lock = threading.Lock()

    def register(self, provider: Provider) -> None:
        """Store ``provider`` under its ``provider_name``."""
        name = provider.provider_name
        with self._lock:
            self._providers[name] = provider

    def get(self, name: str) -> Tuple[Optional[Provider], bool]:
        """Return ``(provider, True)`` or ``(None, False)``."""
        provider = self._providers.get(name)
        return provider, provider is not None

    def list(self) -> List[str]:
        """Return registered names. Callers must not rely on the order."""
        return list(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)


__all__ = ["ProviderRegistry"]
