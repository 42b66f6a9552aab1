import logging

from swagger_diff.common_types import no_common_types
from swagger_diff.parser.refs import get_local_definition, get_original_parameter, is_ref, ref_name


class TestIsRef:
    def test_ref_object(self):
        assert is_ref({"$ref": "#/definitions/Widget"}) is True

    def test_inline_schema(self):
        assert is_ref({"type": "string"}) is False

    def test_non_mapping(self):
        assert is_ref(None) is False
        assert is_ref("#/definitions/Widget") is False


class TestRefName:
    def test_local_ref(self):
        assert ref_name("#/definitions/Widget") == "Widget"

    def test_file_ref(self):
        assert ref_name("../common-types/v5/types.json#/definitions/Resource") == "Resource"


class TestGetLocalDefinition:
    def test_found(self):
        doc = {"definitions": {"Widget": {"properties": {"color": {"type": "string"}}}}}
        assert get_local_definition("#/definitions/Widget", doc) == doc["definitions"]["Widget"]

    def test_missing_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert get_local_definition("#/definitions/Gadget", {"definitions": {}}) is None
        assert "Gadget cannot be found" in caplog.text

    def test_document_without_definitions(self):
        assert get_local_definition("#/definitions/Widget", {}) is None


class TestGetOriginalParameter:
    def test_local_parameter(self):
        doc = {"parameters": {"Body": {"name": "body", "in": "body"}}}
        assert get_original_parameter("#/parameters/Body", doc, no_common_types)["in"] == "body"

    def test_resolver_takes_precedence(self):
        shared = {"name": "api-version", "in": "query"}
        doc = {"parameters": {"ApiVersion": {"name": "other", "in": "header"}}}
        result = get_original_parameter("#/parameters/ApiVersion", doc, lambda ref: (shared, {}))
        assert result is shared

    def test_missing_parameter(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert get_original_parameter("#/parameters/Nope", {}, no_common_types) is None
        assert "#/parameters/Nope" in caplog.text
