from .client import AO3ApiClient

__all__ = [
    "AO3ApiClient",
]
