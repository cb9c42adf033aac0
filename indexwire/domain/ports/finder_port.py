
from abc import ABC, abstractmethod
from typing import Any, List, Optional


class FinderPort(ABC):

    @abstractmethod
    def find(self, query: Any, limit: Optional[int] = None) -> List[Any]:
        ...
