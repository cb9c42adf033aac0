from indexwire.domain.services.config_merger import deep_union, merge_documents


class TestDeepUnion:

    def test_nested_mappings_are_merged(self):
        base = {"a": {"x": 1, "y": 2}}
        override = {"a": {"y": 3, "z": 4}}

        assert deep_union(base, override) == {"a": {"x": 1, "y": 3, "z": 4}}

    def test_scalar_override_wins(self):
        assert deep_union({"a": 1, "b": 2}, {"b": 5}) == {"a": 1, "b": 5}

    def test_mapping_replaced_by_scalar(self):
        assert deep_union({"a": {"x": 1}}, {"a": None}) == {"a": None}

    def test_scalar_replaced_by_mapping(self):
        assert deep_union({"a": 1}, {"a": {"x": 1}}) == {"a": {"x": 1}}

    def test_lists_are_replaced_not_concatenated(self):
        assert deep_union({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_deeply_nested(self):
        base = {"persistence": {"provider": {"batch_size": 10, "clear_object_manager": True}}}
        override = {"persistence": {"provider": {"batch_size": 50}, "model": "app.User"}}

        merged = deep_union(base, override)

        assert merged == {
            "persistence": {
                "provider": {"batch_size": 50, "clear_object_manager": True},
                "model": "app.User",
            }
        }

    def test_inputs_are_not_mutated(self):
        base = {"a": {"x": 1}}
        override = {"a": {"y": 2}}

        deep_union(base, override)

        assert base == {"a": {"x": 1}}
        assert override == {"a": {"y": 2}}

    def test_empty_sides(self):
        assert deep_union({}, {"a": 1}) == {"a": 1}
        assert deep_union({"a": 1}, {}) == {"a": 1}

    def test_key_order_keeps_base_first(self):
        merged = deep_union({"b": 1, "a": 2}, {"c": 3, "b": 4})

        assert list(merged) == ["b", "a", "c"]


class TestMergeDocuments:

    def test_later_documents_win(self):
        documents = [
            {"clients": {"default": {"host": "a", "port": 9200}}},
            {"clients": {"default": {"host": "b"}}},
        ]

        assert merge_documents(documents) == {
            "clients": {"default": {"host": "b", "port": 9200}}
        }

    def test_empty_documents_are_skipped(self):
        assert merge_documents([None, {}, {"a": 1}]) == {"a": 1}

    def test_no_documents(self):
        assert merge_documents([]) == {}
