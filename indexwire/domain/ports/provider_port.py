
from abc import ABC, abstractmethod
from typing import Callable, Optional

ProgressCallback = Callable[[int, int], None]


class ProviderPort(ABC):

    @abstractmethod
    def populate(self, progress: Optional[ProgressCallback] = None) -> int:
        ...
