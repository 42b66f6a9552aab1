"""Top-level comparison of two Swagger 2.0 documents."""

import logging

from swagger_diff.common_types import CommonTypeResolver, no_common_types
from swagger_diff.differ.context import CompareContext
from swagger_diff.differ.definitions import compare_named_definition
from swagger_diff.differ.models import Diff
from swagger_diff.differ.operations import compare_paths

logger = logging.getLogger(__name__)


def compare_documents(
    old_document: dict,
    new_document: dict,
    resolver: CommonTypeResolver = no_common_types,
) -> list[Diff]:
    """Compare two documents and return every difference found.

    Operations are compared first, then each definition present in both
    documents. A definition found in only one document is not reported:
    it was most likely orphaned in the old document or anonymous there.
    """
    ctx = CompareContext(resolver=resolver)
    diffs: list[Diff] = []
    diffs.extend(compare_paths(old_document, new_document, ctx))

    old_definitions = old_document.get("definitions") or {}
    new_definitions = new_document.get("definitions") or {}
    for name, new_definition in new_definitions.items():
        old_definition = old_definitions.get(name)
        if old_definition is not None:
            diffs.extend(compare_named_definition(old_definition, old_document, new_definition, new_document, str(name), ctx))

    logger.debug("Found %d differences", len(diffs))
    return diffs
