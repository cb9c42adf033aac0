from dataclasses import dataclass

from ..constants import SERVICE_PREFIX


@dataclass(frozen=True)
class ServiceIds:
    """Naming conventions for every id the extension registers.

    Type ids hang off their index id (``<prefix>.index.<index>.<type>``);
    per-type integration services use ``<prefix>.<kind>.<index>.<type>``.
    """

    prefix: str = SERVICE_PREFIX

    @property
    def default_client(self) -> str:
        return f"{self.prefix}.client"

    @property
    def default_index(self) -> str:
        return f"{self.prefix}.index"

    @property
    def index_manager(self) -> str:
        return f"{self.prefix}.index_manager"

    @property
    def mapping_setter(self) -> str:
        return f"{self.prefix}.mapping_setter"

    @property
    def populator(self) -> str:
        return f"{self.prefix}.populator"

    @property
    def finder_prototype(self) -> str:
        return f"{self.prefix}.finder.prototype"

    @property
    def model_to_document_prototype(self) -> str:
        return f"{self.prefix}.model_to_document_transformer.prototype.auto"

    def client(self, name: str) -> str:
        return f"{self.prefix}.client.{name}"

    def index(self, name: str) -> str:
        return f"{self.prefix}.index.{name}"

    def type(self, index_name: str, type_name: str) -> str:
        return f"{self.index(index_name)}.{type_name}"

    def search_to_model_transformer(self, index_name: str, type_name: str) -> str:
        return f"{self.prefix}.search_to_model_transformer.{index_name}.{type_name}"

    def model_to_document_transformer(self, index_name: str, type_name: str) -> str:
        return f"{self.prefix}.model_to_document_transformer.{index_name}.{type_name}"

    def provider(self, index_name: str, type_name: str) -> str:
        return f"{self.prefix}.provider.{index_name}.{type_name}"

    def finder(self, index_name: str, type_name: str) -> str:
        return f"{self.prefix}.finder.{index_name}.{type_name}"

    def search_to_model_prototype(self, driver: str) -> str:
        return f"{self.prefix}.search_to_model_transformer.prototype.{driver}"

    def provider_prototype(self, driver: str) -> str:
        return f"{self.prefix}.provider.prototype.{driver}"

    def object_manager(self, driver: str) -> str:
        return f"{self.prefix}.{driver}.object_manager"
