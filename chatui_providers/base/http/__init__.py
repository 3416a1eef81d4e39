"""HTTP utilities package for providers.

Exposes pooled httpx clients and the single-attempt JSON POST helper.
"""

from .client import get_httpx_client, close_all_clients
from .request import post_json

__all__ = ["get_httpx_client", "close_all_clients", "post_json"]
