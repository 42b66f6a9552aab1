"""Human-readable rendering of diff records."""

import json
from collections import Counter

from swagger_diff.differ.models import DefinitionDiff, Diff, DiffList, PathDiff

REPORT_HEADER = "| Type | Level | Message |\n| ---- | ----- | ------- |\n"

NO_DIFFERENCES = "No differences found.\n"

_PATH_MESSAGES = {
    "path": 'The path for operation "{operation_id}" changed:',
    "parameters": 'The number of parameters for operation "{operation_id}" changed:',
    "parameter": 'The {change_type} of parameter "{parameter_name}" for operation "{operation_id}" changed:',
    "pageable": 'The pageable for operation "{operation_id}" changed:',
    "longrunning": 'The long-running status for operation "{operation_id}" changed:',
    "finalstate": 'The final state for operation "{operation_id}" changed:',
    "finalresult": 'The final result schema for operation "{operation_id}" changed:',
    "responses": 'The response codes for operation "{operation_id}" changed:',
    "response": 'The response schema for operation "{operation_id}" changed:',
    "tags": 'The tags for operation "{operation_id}" changed:',
    "summary": 'The summary for operation "{operation_id}" changed:',
    "externalDocs": 'The external docs for operation "{operation_id}" changed:',
}

_DEFINITION_MESSAGES = {
    "properties": 'The property names of definition "{name}" changed:',
    "property": 'The {change_type} of property "{property_name}" in definition "{name}" changed:',
    "required": 'The required properties of definition "{name}" changed:',
}


def _to_json(value) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def _path_message(diff: PathDiff) -> str:
    if diff.type == "operationId":
        side = "new" if diff.after is None else "old"
        return f'The operationId "{diff.operation_id}" is missing in {side} document:'
    return _PATH_MESSAGES[diff.type].format(**diff.model_dump())


def _definition_message(diff: DefinitionDiff) -> str:
    return _DEFINITION_MESSAGES[diff.type].format(**diff.model_dump())


def print_diff(diff: Diff) -> str:
    """Render one diff as a pipe-delimited table row."""
    if isinstance(diff, PathDiff):
        message = _path_message(diff)
    else:
        message = _definition_message(diff)
    return f"| {diff.type} | {diff.level} | {message} {_to_json(diff.before)} -> {_to_json(diff.after)} |\n"


def format_report(diffs: list[Diff]) -> str:
    """Render all diffs as a Markdown table."""
    if not diffs:
        return NO_DIFFERENCES
    return REPORT_HEADER + "".join(print_diff(diff) for diff in diffs)


def summarize(diffs: list[Diff]) -> dict[str, int]:
    """Count diffs per level."""
    counts = Counter(diff.level for diff in diffs)
    return {"error": counts["error"], "warning": counts["warning"]}


def diffs_to_json(diffs: list[Diff]) -> str:
    """Serialize diffs to a JSON array using camelCase field names."""
    return DiffList.dump_json(diffs, by_alias=True, indent=2).decode("utf-8")
