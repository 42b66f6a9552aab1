"""Operation-level comparison.

Operations are matched across documents by ``operationId``. Each matched
pair is checked facet by facet; every facet reports on its own, so one
mismatch never hides another.
"""

import logging

from swagger_diff.differ.context import CompareContext
from swagger_diff.differ.models import PathDiff
from swagger_diff.parser.refs import get_original_parameter, is_ref, ref_name

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

DEFAULT_FINAL_STATE = "location"

PAGEABLE = "x-ms-pageable"
LONG_RUNNING = "x-ms-long-running-operation"
LONG_RUNNING_OPTIONS = "x-ms-long-running-operation-options"


def index_operations(document: dict) -> dict[str, tuple[str, dict]]:
    """Map each operationId to its ``(route, operation)``.

    Operations without an operationId are left out. If two operations
    share an id, the one found last wins.
    """
    operations: dict[str, tuple[str, dict]] = {}
    for route, path_item in (document.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for verb, operation in path_item.items():
            if verb not in HTTP_METHODS or not isinstance(operation, dict):
                continue
            operation_id = operation.get("operationId")
            if operation_id:
                # YAML loads numeric ids as integers.
                operations[str(operation_id)] = (route, operation)
    return operations


def compare_paths(old_document: dict, new_document: dict, ctx: CompareContext) -> list[PathDiff]:
    """Compare every operation of both documents."""
    old_operations = index_operations(old_document)
    new_operations = index_operations(new_document)
    logger.debug("Comparing %d old and %d new operations", len(old_operations), len(new_operations))

    diffs: list[PathDiff] = []
    for operation_id, (old_route, old_operation) in old_operations.items():
        if operation_id not in new_operations:
            diffs.append(PathDiff(before=operation_id, after=None, operation_id=operation_id, type="operationId", level="error"))
            continue

        new_route, new_operation = new_operations[operation_id]
        if old_route != new_route:
            diffs.append(PathDiff(before=old_route, after=new_route, operation_id=operation_id, type="path", level="error"))
        diffs.extend(compare_operation(old_operation, new_operation, operation_id, old_document, new_document, ctx))

    for operation_id in new_operations:
        if operation_id not in old_operations:
            diffs.append(PathDiff(before=None, after=operation_id, operation_id=operation_id, type="operationId", level="error"))

    return diffs


def compare_operation(
    old_operation: dict,
    new_operation: dict,
    operation_id: str,
    old_document: dict,
    new_document: dict,
    ctx: CompareContext,
) -> list[PathDiff]:
    """Run all facet comparisons for one pair of operations."""
    diffs: list[PathDiff] = []

    old_count = len(old_operation.get("parameters") or [])
    new_count = len(new_operation.get("parameters") or [])
    if old_count != new_count:
        diffs.append(PathDiff(before=old_count, after=new_count, operation_id=operation_id, type="parameters", level="error"))

    diffs.extend(compare_tags(old_operation, new_operation, operation_id))
    diffs.extend(compare_summary(old_operation, new_operation, operation_id))
    diffs.extend(compare_external_docs(old_operation, new_operation, operation_id))
    diffs.extend(compare_pagination(old_operation, new_operation, operation_id))
    diffs.extend(compare_long_running(old_operation, new_operation, operation_id))
    diffs.extend(compare_responses(old_operation, new_operation, operation_id))
    diffs.extend(compare_body_parameter(old_operation, new_operation, operation_id, old_document, new_document, ctx))
    return diffs


def _same_members(old: list, new: list) -> bool:
    return len(old) == len(new) and all(item in new for item in old) and all(item in old for item in new)


def compare_tags(old_operation: dict, new_operation: dict, operation_id: str) -> list[PathDiff]:
    old_tags = old_operation.get("tags") or []
    new_tags = new_operation.get("tags") or []
    if not _same_members(old_tags, new_tags):
        return [PathDiff(before=old_tags, after=new_tags, operation_id=operation_id, type="tags", level="error")]
    return []


def compare_summary(old_operation: dict, new_operation: dict, operation_id: str) -> list[PathDiff]:
    old_summary = old_operation.get("summary") or ""
    new_summary = new_operation.get("summary") or ""
    if old_summary != new_summary:
        return [PathDiff(before=old_summary, after=new_summary, operation_id=operation_id, type="summary", level="error")]
    return []


def compare_external_docs(old_operation: dict, new_operation: dict, operation_id: str) -> list[PathDiff]:
    old_docs = old_operation.get("externalDocs")
    new_docs = new_operation.get("externalDocs")
    # A bare string or other non-mapping counts as docs without url/description.
    if old_docs is not None and not isinstance(old_docs, dict):
        old_docs = {}
    if new_docs is not None and not isinstance(new_docs, dict):
        new_docs = {}

    if old_docs is None and new_docs is None:
        return []

    if old_docs is None or new_docs is None:
        return [PathDiff(before=old_docs, after=new_docs, operation_id=operation_id, type="externalDocs", level="error")]

    if old_docs.get("url") != new_docs.get("url") or old_docs.get("description") != new_docs.get("description"):
        return [PathDiff(before=old_docs, after=new_docs, operation_id=operation_id, type="externalDocs", level="error")]

    return []


def compare_pagination(old_operation: dict, new_operation: dict, operation_id: str) -> list[PathDiff]:
    # Only presence of the marker matters, not its options.
    if (PAGEABLE in old_operation) != (PAGEABLE in new_operation):
        return [
            PathDiff(
                before=old_operation.get(PAGEABLE),
                after=new_operation.get(PAGEABLE),
                operation_id=operation_id,
                type="pageable",
                level="error",
            )
        ]
    return []


def _final_state_options(operation: dict) -> dict:
    options = operation.get(LONG_RUNNING_OPTIONS)
    return options if isinstance(options, dict) else {}


def compare_long_running(old_operation: dict, new_operation: dict, operation_id: str) -> list[PathDiff]:
    diffs: list[PathDiff] = []

    old_long_running = old_operation.get(LONG_RUNNING) is True
    new_long_running = new_operation.get(LONG_RUNNING) is True
    if old_long_running != new_long_running:
        diffs.append(
            PathDiff(before=old_long_running, after=new_long_running, operation_id=operation_id, type="longrunning", level="error")
        )

    old_final_state = _final_state_options(old_operation).get("final-state-via") or DEFAULT_FINAL_STATE
    new_final_state = _final_state_options(new_operation).get("final-state-via") or DEFAULT_FINAL_STATE
    if old_final_state != new_final_state:
        diffs.append(
            PathDiff(before=old_final_state, after=new_final_state, operation_id=operation_id, type="finalstate", level="error")
        )

    # The new side may declare its final result explicitly; the old side only
    # had the 200 response to go by.
    if old_long_running:
        final_schema = _final_state_options(new_operation).get("final-state-schema")
        if isinstance(final_schema, str):
            new_result = ref_name(final_schema)
        else:
            new_result = get_response_schema(_responses(new_operation).get("200"))
        old_result = get_response_schema(_responses(old_operation).get("200"))
        if new_result != old_result:
            diffs.append(
                PathDiff(before=old_result, after=new_result, operation_id=operation_id, type="finalresult", level="error")
            )

    return diffs


def _responses(operation: dict) -> dict:
    # YAML loads bare status codes as integers.
    return {str(code): response for code, response in (operation.get("responses") or {}).items()}


def get_response_schema(response) -> str | None:
    """Return the definition name a response's schema refers to, if any."""
    if isinstance(response, dict) and is_ref(response.get("schema")):
        return ref_name(response["schema"]["$ref"])
    return None


def compare_responses(old_operation: dict, new_operation: dict, operation_id: str) -> list[PathDiff]:
    diffs: list[PathDiff] = []

    old_responses = _responses(old_operation)
    new_responses = _responses(new_operation)
    old_codes = [code for code in old_responses if not code.startswith("x-")]
    new_codes = [code for code in new_responses if not code.startswith("x-")]

    if set(old_codes) != set(new_codes):
        diffs.append(PathDiff(before=old_codes, after=new_codes, operation_id=operation_id, type="responses", level="error"))

    for code in old_codes:
        old_response = old_responses.get(code)
        new_response = new_responses.get(code)
        if get_response_schema(old_response) != get_response_schema(new_response):
            diffs.append(
                PathDiff(before=old_response, after=new_response, operation_id=operation_id, type="response", level="error")
            )

    return diffs


def get_body_parameter(operation: dict, document: dict, ctx: CompareContext) -> dict | None:
    """Return the operation's ``in: body`` parameter, resolving references."""
    for param in operation.get("parameters") or []:
        if is_ref(param):
            param = get_original_parameter(param["$ref"], document, ctx.resolver)
        if isinstance(param, dict) and param.get("in") == "body":
            return param
    return None


def compare_body_parameter(
    old_operation: dict,
    new_operation: dict,
    operation_id: str,
    old_document: dict,
    new_document: dict,
    ctx: CompareContext,
) -> list[PathDiff]:
    diffs: list[PathDiff] = []

    old_body = get_body_parameter(old_operation, old_document, ctx)
    new_body = get_body_parameter(new_operation, new_document, ctx)

    if (old_body is None) != (new_body is None):
        return [
            PathDiff(
                before="present" if old_body is not None else "absent",
                after="present" if new_body is not None else "absent",
                operation_id=operation_id,
                type="parameter",
                parameter_name="body",
                change_type="presence",
                level="error",
            )
        ]

    if old_body is None or new_body is None:
        return diffs

    old_required = old_body.get("required") or False
    new_required = new_body.get("required") or False
    if old_required != new_required:
        diffs.append(
            PathDiff(
                before=old_required,
                after=new_required,
                operation_id=operation_id,
                type="parameter",
                parameter_name="body",
                change_type="required",
                level="error",
            )
        )

    old_schema = old_body.get("schema")
    new_schema = new_body.get("schema")
    if old_schema is not None and new_schema is not None:
        old_ref = old_schema["$ref"] if is_ref(old_schema) else None
        new_ref = new_schema["$ref"] if is_ref(new_schema) else None

        if old_ref and new_ref:
            if ref_name(old_ref) != ref_name(new_ref):
                diffs.append(
                    PathDiff(
                        before=ref_name(old_ref),
                        after=ref_name(new_ref),
                        operation_id=operation_id,
                        type="parameter",
                        parameter_name="body",
                        change_type="schema",
                        level="error",
                    )
                )
        elif old_ref != new_ref:
            diffs.append(
                PathDiff(
                    before=old_ref or "inline schema",
                    after=new_ref or "inline schema",
                    operation_id=operation_id,
                    type="parameter",
                    parameter_name="body",
                    change_type="schema",
                    level="warning",
                )
            )

    return diffs
