import pytest

from indexwire.application.configuration import (
    parse_settings,
    parse_type_settings,
)
from indexwire.domain.exceptions import ConfigurationError


class TestParseSettings:

    def test_minimal_document(self, minimal_config):
        settings = parse_settings(minimal_config)

        assert list(settings.clients) == ["default"]
        assert settings.clients["default"].port == 9200
        assert list(settings.indexes) == ["website"]
        assert settings.default_client is None
        assert settings.default_index is None

    def test_empty_document(self):
        settings = parse_settings(None)

        assert settings.clients == {}
        assert settings.indexes == {}

    def test_null_blocks_become_empty(self):
        settings = parse_settings(
            {"clients": {"default": None}, "indexes": {"website": None}}
        )

        assert settings.clients["default"].host == "localhost"
        assert settings.indexes["website"].types == {}

    def test_client_extra_options_are_kept(self):
        settings = parse_settings(
            {"clients": {"default": {"host": "h", "port": 9300, "max_retries": 5}}}
        )

        params = settings.clients["default"].connection_params()

        assert params["host"] == "h"
        assert params["port"] == 9300
        assert params["max_retries"] == 5
        assert "username" not in params

    def test_invalid_port(self):
        with pytest.raises(ConfigurationError, match="clients.default.port"):
            parse_settings({"clients": {"default": {"port": "not-a-port"}}})

    def test_unknown_root_key(self):
        with pytest.raises(ConfigurationError, match="Invalid search configuration"):
            parse_settings({"clientz": {}})

    def test_declaration_order_is_kept(self):
        settings = parse_settings(
            {"clients": {"zeta": {}, "alpha": {}, "mid": {}}}
        )

        assert list(settings.clients) == ["zeta", "alpha", "mid"]


class TestParseTypeSettings:

    def test_defaults_without_persistence(self):
        settings = parse_type_settings("website", "page", {})

        assert settings.mappings == {}
        assert settings.persistence is None

    def test_persistence_defaults(self):
        settings = parse_type_settings(
            "shop",
            "product",
            {"persistence": {"driver": "orm", "model": "app.Product"}},
        )

        persistence = settings.persistence
        assert persistence.identifier == "id"
        assert persistence.provider is None
        assert persistence.finder is None
        assert persistence.search_to_model_transformer.hydrate is True
        assert persistence.search_to_model_transformer.service is None
        assert persistence.model_to_document_transformer.service is None

    def test_bare_provider_and_finder_are_enabled(self):
        settings = parse_type_settings(
            "shop",
            "product",
            {
                "persistence": {
                    "driver": "orm",
                    "model": "app.Product",
                    "provider": None,
                    "finder": True,
                }
            },
        )

        assert settings.persistence.provider is not None
        assert settings.persistence.provider.batch_size == 100
        assert settings.persistence.provider.query_builder_method == "create_query_builder"
        assert settings.persistence.provider.clear_object_manager is True
        assert settings.persistence.finder is not None

    def test_disabled_finder(self):
        settings = parse_type_settings(
            "shop",
            "product",
            {"persistence": {"driver": "orm", "model": "app.Product", "finder": False}},
        )

        assert settings.persistence.finder is None

    def test_provider_values_pass_through(self):
        settings = parse_type_settings(
            "shop",
            "product",
            {
                "persistence": {
                    "driver": "mongodb",
                    "model": "app.Product",
                    "provider": {
                        "batch_size": 500,
                        "clear_object_manager": False,
                        "query_builder_method": "published",
                    },
                }
            },
        )

        provider = settings.persistence.provider
        assert provider.batch_size == 500
        assert provider.clear_object_manager is False
        assert provider.query_builder_method == "published"

    def test_missing_model_names_the_type(self):
        with pytest.raises(ConfigurationError, match='"shop.product"'):
            parse_type_settings("shop", "product", {"persistence": {"driver": "orm"}})

    def test_invalid_batch_size(self):
        with pytest.raises(ConfigurationError, match="batch_size"):
            parse_type_settings(
                "shop",
                "product",
                {
                    "persistence": {
                        "driver": "orm",
                        "model": "app.Product",
                        "provider": {"batch_size": 0},
                    }
                },
            )

    def test_unknown_type_key(self):
        with pytest.raises(ConfigurationError):
            parse_type_settings("shop", "product", {"mapping": {}})
