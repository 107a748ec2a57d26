"""Package initialisation for the providers feature."""

from .routes import router
from .service import ProviderCatalogService

__all__ = ["router", "ProviderCatalogService"]
