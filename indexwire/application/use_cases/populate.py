import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from ...domain.ports.provider_port import ProgressCallback

if TYPE_CHECKING:
    from ...infrastructure.services import IndexManager, MappingSetter, Populator

logger = logging.getLogger(__name__)


@dataclass
class PopulateResult:

    indexes: List[str] = field(default_factory=list)
    mappings_set: int = 0
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def total_indexed(self) -> int:
        return sum(self.counts.values())


class PopulateUseCase:

    def __init__(
        self,
        index_manager: "IndexManager",
        mapping_setter: "MappingSetter",
        populator: "Populator",
    ) -> None:
        self._index_manager = index_manager
        self._mapping_setter = mapping_setter
        self._populator = populator

    def execute(
        self,
        index_name: Optional[str] = None,
        reset: bool = True,
        progress: Optional[ProgressCallback] = None,
    ) -> PopulateResult:
        if index_name is None:
            indexes = self._index_manager.get_all_indexes()
        else:
            indexes = {index_name: self._index_manager.get_index(index_name)}

        result = PopulateResult(indexes=list(indexes))

        for name, index in indexes.items():
            index.create(
                settings=self._index_manager.get_settings(name),
                recreate=reset,
            )
            result.mappings_set += self._mapping_setter.set_mappings(index.name)

            counts = self._populator.populate(index_name=name, progress=progress)
            result.counts.update(counts)
            index.refresh()

            logger.info(
                "Populated index %s with %d objects", name, sum(counts.values())
            )

        return result
