"""Protocol interfaces shared across layers."""

from .services import CatalogClientProtocol, RefinementClientProtocol

__all__ = [
    "CatalogClientProtocol",
    "RefinementClientProtocol",
]
