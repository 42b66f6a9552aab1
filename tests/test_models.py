import pytest
from pydantic import ValidationError

from swagger_diff.differ.models import DefinitionDiff, DiffList, PathDiff


class TestPathDiff:
    def test_create_minimal(self):
        d = PathDiff(before="/a", after="/b", operation_id="Widgets_Get", type="path", level="error")
        assert d.kind == "path"
        assert d.parameter_name is None
        assert d.change_type is None

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            PathDiff(operation_id="Widgets_Get", type="verb", level="error")

    def test_rejects_unknown_level(self):
        with pytest.raises(ValidationError):
            PathDiff(operation_id="Widgets_Get", type="path", level="info")

    def test_is_immutable(self):
        d = PathDiff(operation_id="Widgets_Get", type="summary", level="error")
        with pytest.raises(ValidationError):
            d.level = "warning"

    def test_accepts_camel_case(self):
        d = PathDiff(operationId="Widgets_Get", type="parameter", parameterName="body", changeType="presence", level="error")
        assert d.operation_id == "Widgets_Get"
        assert d.parameter_name == "body"


class TestDefinitionDiff:
    def test_create_property_diff(self):
        d = DefinitionDiff(
            before="#/definitions/A",
            after="#/definitions/B",
            name="Widget",
            property_name="owner",
            type="property",
            change_type="reference",
            level="warning",
        )
        assert d.kind == "definition"
        assert d.model_dump(by_alias=True)["propertyName"] == "owner"


class TestDiffList:
    def test_json_keeps_variants_apart(self):
        diffs = [
            PathDiff(before=2, after=3, operation_id="Widgets_Get", type="parameters", level="error"),
            DefinitionDiff(before=["a"], after=["a", "b"], name="Widget", type="required", level="warning"),
        ]
        data = DiffList.validate_json(DiffList.dump_json(diffs, by_alias=True))
        assert isinstance(data[0], PathDiff)
        assert isinstance(data[1], DefinitionDiff)
        assert data == diffs
