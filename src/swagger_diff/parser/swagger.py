"""Swagger 2.0 document loader.

Documents are kept as the plain mappings produced by the YAML parser.
The differ reads them and never writes to them.
"""

from pathlib import Path

import yaml

from .detect import detect_format


class DocumentError(ValueError):
    """Raised when a file cannot be loaded as a Swagger 2.0 document."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


def load_document(file_path: Path) -> dict:
    """Load a Swagger 2.0 JSON or YAML file."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(file_path, f"cannot read file ({e.strerror})") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(file_path, f"invalid JSON/YAML ({e})") from e

    fmt = detect_format(doc)
    if fmt == "openapi":
        raise DocumentError(file_path, "OpenAPI 3.x documents are not supported, expected Swagger 2.0")
    if fmt != "swagger":
        raise DocumentError(file_path, "not a Swagger 2.0 document")

    return doc
