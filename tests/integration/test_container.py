import pytest

from indexwire.application.use_cases import PopulateUseCase
from indexwire.domain.exceptions import MissingObjectsError
from indexwire.infrastructure.di import AppInjector

from sample_models import Category, Product


@pytest.fixture
def injector(shop_config, extension_config):
    injector = AppInjector(configs=[shop_config], extension_config=extension_config)
    yield injector
    injector.close()


class TestShopContainer:

    def test_every_configured_service_is_registered(self, injector):
        registry = injector.registry

        for service_id in [
            "indexwire.client.primary",
            "indexwire.client.archive",
            "indexwire.index.shop",
            "indexwire.index.shop.product",
            "indexwire.index.shop.category",
            "indexwire.index.archive",
            "indexwire.index.archive.old_product",
            "indexwire.search_to_model_transformer.shop.product",
            "indexwire.model_to_document_transformer.shop.product",
            "indexwire.provider.shop.product",
            "indexwire.finder.shop.product",
            "indexwire.index_manager",
            "indexwire.mapping_setter",
            "indexwire.populator",
            "indexwire.client",
            "indexwire.index",
        ]:
            assert registry.has(service_id), service_id

        assert not registry.has("indexwire.provider.archive.old_product")

    def test_populate_then_find(self, injector):
        result = injector.get(PopulateUseCase).execute()

        assert result.indexes == ["shop", "archive"]
        assert result.counts == {
            "indexwire.provider.shop.product": 3,
            "indexwire.provider.shop.category": 2,
        }
        assert result.total_indexed == 5

        products = injector.get("indexwire.finder.shop.product").find("red")
        assert [product.id for product in products] == [1, 3]
        assert all(isinstance(product, Product) for product in products)

        categories = injector.get("indexwire.finder.shop.category").find("light")
        assert [category.title for category in categories] == ["Lighting"]
        assert isinstance(categories[0], Category)

    def test_documents_and_mappings(self, injector):
        injector.get(PopulateUseCase).execute(index_name="shop")

        product_type = injector.get("indexwire.index.shop.product")
        assert product_type.mapping == {
            "name": {"type": "text"},
            "price": {"type": "float"},
            "created_at": {"type": "date"},
        }
        assert product_type.documents["2"] == {
            "name": "Blue table",
            "price": 120.0,
            "created_at": "2024-02-03T11:30:00",
        }
        assert "4" not in product_type.documents

        shop = injector.get("indexwire.index")
        assert shop.settings == {"number_of_shards": 1}
        assert shop.refresh_calls == 1

    def test_populate_without_reset_keeps_documents(self, injector):
        use_case = injector.get(PopulateUseCase)
        use_case.execute(index_name="shop")
        product_type = injector.get("indexwire.index.shop.product")
        product_type.documents["999"] = {"name": "stale"}

        use_case.execute(index_name="shop", reset=False)

        assert "999" in product_type.documents

    def test_populate_with_reset_clears_documents(self, injector):
        use_case = injector.get(PopulateUseCase)
        use_case.execute(index_name="shop")
        product_type = injector.get("indexwire.index.shop.product")
        product_type.documents["999"] = {"name": "stale"}

        use_case.execute(index_name="shop")

        assert "999" not in product_type.documents

    def test_stale_documents_fail_the_finder(self, injector):
        injector.get(PopulateUseCase).execute(index_name="shop")
        product_type = injector.get("indexwire.index.shop.product")
        product_type.documents["999"] = {"name": "Red ghost"}

        with pytest.raises(MissingObjectsError) as exc_info:
            injector.get("indexwire.finder.shop.product").find("red")

        assert exc_info.value.missing_ids == ["999"]

    def test_archive_index_uses_archive_client(self, injector):
        archive_client = injector.get("indexwire.client.archive")
        index = injector.get("indexwire.index.archive")

        assert archive_client.indexes["archive"] is index
        assert archive_client.params["port"] == 9201


class TestYamlConfiguration:

    def test_resolves_from_file(self, tmp_path, extension_config):
        path = tmp_path / "search.yaml"
        path.write_text(
            "indexwire:\n"
            "  clients:\n"
            "    default: {host: localhost, port: 9200}\n"
            "  indexes:\n"
            "    catalog:\n"
            "      types:\n"
            "        category:\n"
            "          mappings:\n"
            "            title: {type: text}\n"
            "          persistence:\n"
            "            driver: orm\n"
            "            model: sample_models.Category\n"
            "            provider: ~\n"
            "            finder: ~\n"
        )

        injector = AppInjector(config_paths=[str(path)], extension_config=extension_config)
        try:
            result = injector.get(PopulateUseCase).execute()
            found = injector.get("indexwire.finder.catalog.category").find("furniture")
        finally:
            injector.close()

        assert result.counts == {"indexwire.provider.catalog.category": 2}
        assert [category.id for category in found] == [1]
