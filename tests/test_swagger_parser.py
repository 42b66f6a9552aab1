from pathlib import Path

import pytest

from swagger_diff.parser.detect import detect_format
from swagger_diff.parser.swagger import DocumentError, load_document

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_detect_swagger(self):
        assert detect_format({"swagger": "2.0"}) == "swagger"

    def test_detect_openapi(self):
        assert detect_format({"openapi": "3.0.0"}) == "openapi"

    def test_detect_unknown(self):
        assert detect_format({"info": {}}) == "unknown"
        assert detect_format(["swagger"]) == "unknown"
        assert detect_format(None) == "unknown"


class TestLoadDocument:
    def test_load_yaml(self):
        doc = load_document(FIXTURES / "widgets.old.yaml")
        assert "/widgets" in doc["paths"]
        assert "Widget" in doc["definitions"]

    def test_load_json(self):
        doc = load_document(FIXTURES / "common-types" / "v5" / "types.json")
        assert "Resource" in doc["definitions"]

    def test_rejects_openapi3(self):
        with pytest.raises(DocumentError, match="OpenAPI 3.x"):
            load_document(FIXTURES / "petstore.openapi3.yaml")

    def test_rejects_non_swagger(self, tmp_path):
        f = tmp_path / "doc.md"
        f.write_text("# API Docs\nSome text")
        with pytest.raises(DocumentError, match="not a Swagger 2.0 document"):
            load_document(f)

    def test_rejects_invalid_yaml(self, tmp_path):
        f = tmp_path / "broken.json"
        f.write_text('{"swagger": "2.0", "paths": [}')
        with pytest.raises(DocumentError, match="invalid JSON/YAML"):
            load_document(f)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentError) as exc_info:
            load_document(tmp_path / "missing.json")
        assert exc_info.value.path == tmp_path / "missing.json"
