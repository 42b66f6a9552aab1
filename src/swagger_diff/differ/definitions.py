"""Definition-level comparison.

Definitions are compared by their effective property set: properties
inherited through ``allOf`` are merged in before comparing, so moving a
property into a base model is not reported as a change.
"""

import logging

from swagger_diff.common_types import CommonTypeResolver
from swagger_diff.differ.context import CompareContext
from swagger_diff.differ.models import DefinitionDiff
from swagger_diff.parser.refs import get_local_definition, is_ref, ref_name

logger = logging.getLogger(__name__)

# Added to resource models automatically; gaining it is not a break.
SYSTEM_DATA_PROPERTY = "systemData"

CLIENT_FLATTEN = "x-ms-client-flatten"


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def get_all_properties(
    schema: dict,
    document: dict,
    resolver: CommonTypeResolver,
    properties: dict | None = None,
    _expanding: set[tuple[int, str]] | None = None,
) -> dict:
    """Collect the properties of *schema*, including those inherited via ``allOf``.

    Base schemas are merged first and the schema's own properties last, so
    the most derived declaration of a property wins.
    """
    if properties is None:
        properties = {}
    if _expanding is None:
        _expanding = set()

    for base in schema.get("allOf") or []:
        if is_ref(base):
            ref = base["$ref"]
            common = resolver(ref)
            if common is not None:
                base_schema, base_document = common
            else:
                base_schema, base_document = get_local_definition(ref, document), document

            key = (id(base_document), ref_name(ref))
            if base_schema is None or key in _expanding:
                continue
            _expanding.add(key)
            get_all_properties(_as_dict(base_schema), base_document, resolver, properties, _expanding)
            _expanding.discard(key)
        elif isinstance(base, dict):
            properties.update(_as_dict(base.get("properties")))

    properties.update(_as_dict(schema.get("properties")))
    return properties


def resolve_common_type(prop: dict, resolver: CommonTypeResolver) -> dict:
    """Substitute a common-type reference with the body of the referenced schema."""
    if is_ref(prop):
        common = resolver(prop["$ref"])
        if common is not None:
            rest = {k: v for k, v in prop.items() if k != "$ref"}
            return {**rest, **_as_dict(common[0])}
    return prop


def compare_named_definition(
    old_definition: dict,
    old_document: dict,
    new_definition: dict,
    new_document: dict,
    name: str,
    ctx: CompareContext,
) -> list[DefinitionDiff]:
    """Compare two definitions registered under the same name."""
    name = str(name)
    if not ctx.visit(name):
        logger.warning('Definition "%s" has been compared before, skipping.', name)
        return []

    old_definition = _as_dict(old_definition)
    new_definition = _as_dict(new_definition)
    diffs: list[DefinitionDiff] = []

    old_required = old_definition.get("required") or []
    new_required = new_definition.get("required") or []
    if (
        len(old_required) != len(new_required)
        or not all(item in new_required for item in old_required)
        or not all(item in old_required for item in new_required)
    ):
        diffs.append(DefinitionDiff(before=old_required, after=new_required, name=name, type="required", level="warning"))

    old_properties = get_all_properties(old_definition, old_document, ctx.resolver)
    new_properties = get_all_properties(new_definition, new_document, ctx.resolver)
    old_keys = sorted(old_properties, key=str)
    new_keys = sorted(new_properties, key=str)

    added = [key for key in new_keys if key not in old_properties]
    only_system_data = added == [SYSTEM_DATA_PROPERTY]

    if len(old_keys) != len(new_keys):
        system_data_only = len(new_keys) == len(old_keys) + 1 and only_system_data
        diffs.append(
            DefinitionDiff(
                before=old_keys,
                after=new_keys,
                name=name,
                type="properties",
                level="warning" if system_data_only else "error",
            )
        )
    for key in old_keys:
        if key not in new_properties:
            diffs.append(DefinitionDiff(before=old_keys, after=new_keys, name=name, type="properties", level="error"))
    for key in added:
        diffs.append(
            DefinitionDiff(
                before=old_keys,
                after=new_keys,
                name=name,
                type="properties",
                level="warning" if only_system_data else "error",
            )
        )

    for key in old_keys:
        old_property = old_properties[key]
        new_property = new_properties.get(key)
        if old_property is not None and new_property is not None:
            diffs.extend(
                compare_definition_property(old_property, new_property, old_document, new_document, str(key), str(name), ctx)
            )

    return diffs


def compare_definition_property(
    old_property: dict,
    new_property: dict,
    old_document: dict,
    new_document: dict,
    property_name: str,
    model_name: str,
    ctx: CompareContext,
) -> list[DefinitionDiff]:
    """Compare one property present on both sides of a definition."""
    property_name = str(property_name)
    model_name = str(model_name)
    diffs: list[DefinitionDiff] = []
    old_property = _as_dict(old_property)
    new_property = _as_dict(new_property)

    old_flatten = old_property.get(CLIENT_FLATTEN) or False
    new_flatten = new_property.get(CLIENT_FLATTEN) or False
    if old_flatten != new_flatten:
        diffs.append(
            DefinitionDiff(
                before=old_flatten,
                after=new_flatten,
                name=model_name,
                property_name=property_name,
                type="property",
                change_type=CLIENT_FLATTEN,
                level="error",
            )
        )

    old_schema = resolve_common_type(old_property, ctx.resolver)
    new_schema = resolve_common_type(new_property, ctx.resolver)
    if is_ref(old_schema) and is_ref(new_schema):
        if old_schema["$ref"] != new_schema["$ref"]:
            diffs.append(
                DefinitionDiff(
                    before=old_schema["$ref"],
                    after=new_schema["$ref"],
                    name=model_name,
                    property_name=property_name,
                    type="property",
                    change_type="reference",
                    level="warning",
                )
            )
    elif not is_ref(old_schema) and not is_ref(new_schema):
        diffs.extend(
            compare_named_definition(old_schema, old_document, new_schema, new_document, f"{model_name}.{property_name}", ctx)
        )
    # A reference on one side and an inline schema on the other is accepted.

    return diffs
