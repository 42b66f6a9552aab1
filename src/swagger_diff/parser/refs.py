"""`$ref` helpers shared by the differ.

Swagger 2.0 documents point at definitions and parameters with JSON
references such as ``#/definitions/Widget``. Only the last segment of a
reference is meaningful to the differ, since definitions are compared by
name rather than by location.
"""

import logging

logger = logging.getLogger(__name__)


def is_ref(value) -> bool:
    """Return True if *value* is a reference object (``{"$ref": ...}``)."""
    return isinstance(value, dict) and "$ref" in value


def ref_name(ref: str) -> str:
    """Return the last path segment of a reference string."""
    return ref.split("/")[-1]


def get_local_definition(ref: str, document: dict) -> dict | None:
    """Look up the definition named by *ref* in the document's own table."""
    name = ref_name(ref)
    definitions = document.get("definitions") or {}
    if name not in definitions:
        logger.warning("Reference to %s cannot be found, skipping.", name)
        return None
    return definitions[name]


def get_original_parameter(ref: str, document: dict, resolver) -> dict | None:
    """Resolve a parameter reference.

    Shared parameters are tried through *resolver* first, then the
    document's own ``parameters`` table.
    """
    common = resolver(ref)
    if common is not None:
        return common[0]

    name = ref_name(ref)
    parameters = document.get("parameters") or {}
    if name not in parameters:
        logger.warning("Parameter reference %s cannot be found, skipping.", ref)
        return None
    return parameters[name]
