"""Provider Index - Import-Time Registration of All Media Providers
This module is the central registration point for every media provider. All
providers are registered with the provider registry when it is imported.
Registration Flow:
    1. main.py imports the providers feature router
    2. The feature service imports from core.providers
    3. This __init__.py runs, registering every Docker-backed provider
    4. Resolvers can now look up any registered provider by id or capability
Usage Example:
    from core.providers.resolvers import get_provider
    provider = get_provider("kokoro-docker")
    model = await provider.get_model("kokoro-82m")
    result = await model.transform("Hello there")
See Also:
    - core/providers/registries.py: provider registry
    - core/providers/resolvers.py: lookup helpers used by routes and scripts
    - config/docker/: service URLs, defaults and capability priority
"""

import logging

from core.providers.docker import (
    ChatterboxDockerProvider,
    CowsayDockerProvider,
    DOCKER_PROVIDERS,
    FFMPEGDockerProvider,
    KokoroDockerProvider,
    OllamaDockerProvider,
    WhisperDockerProvider,
    ZonosDockerProvider,
)
from core.providers.registries import get_provider_registry, register_provider
from core.providers.resolvers import (
    find_best_provider,
    get_model,
    get_model_for_capability,
    get_provider,
    get_providers,
    get_providers_by_capability,
)

for _provider_class in DOCKER_PROVIDERS:
    register_provider(_provider_class.id, _provider_class)

logger = logging.getLogger(__name__)
logger.debug(
    "Provider registry initialised",
    extra={"providers": get_provider_registry().get_available_providers()},
)

__all__ = [
    "ChatterboxDockerProvider",
    "CowsayDockerProvider",
    "FFMPEGDockerProvider",
    "KokoroDockerProvider",
    "OllamaDockerProvider",
    "WhisperDockerProvider",
    "ZonosDockerProvider",
    "find_best_provider",
    "get_model",
    "get_model_for_capability",
    "get_provider",
    "get_provider_registry",
    "get_providers",
    "get_providers_by_capability",
    "register_provider",
]
