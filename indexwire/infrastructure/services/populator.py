import logging
from typing import Dict, List, Optional, Tuple

from ...domain.ports.provider_port import ProgressCallback, ProviderPort

logger = logging.getLogger(__name__)


class Populator:

    def __init__(self) -> None:
        self._providers: List[Tuple[str, str, ProviderPort]] = []

    def add_provider(
        self,
        provider_id: str,
        provider: ProviderPort,
        index_name: str,
    ) -> None:
        self._providers.append((provider_id, index_name, provider))

    @property
    def provider_ids(self) -> List[str]:
        return [provider_id for provider_id, _, _ in self._providers]

    def get_providers(self, index_name: Optional[str] = None) -> Dict[str, ProviderPort]:
        return {
            provider_id: provider
            for provider_id, provider_index, provider in self._providers
            if index_name is None or provider_index == index_name
        }

    def populate(
        self,
        index_name: Optional[str] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for provider_id, provider in self.get_providers(index_name).items():
            logger.info("Populating with provider %s", provider_id)
            counts[provider_id] = provider.populate(progress)
            logger.info(
                "Provider %s indexed %d objects", provider_id, counts[provider_id]
            )
        return counts
