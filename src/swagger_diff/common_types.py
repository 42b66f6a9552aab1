"""Resolvers for references that point outside the compared document.

A resolver is any callable taking a reference string and returning a
``(schema, owning_document)`` pair, or ``None`` when the reference is not
a common type. Resolvers must not raise.
"""

import logging
from pathlib import Path
from typing import Protocol

import yaml

from swagger_diff.parser.refs import ref_name

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")


class CommonTypeResolver(Protocol):
    def __call__(self, ref: str) -> tuple[dict, dict] | None: ...


def no_common_types(ref: str) -> None:
    """Default resolver: nothing is a common type."""
    return None


class FileCommonTypeResolver:
    """Resolves ``<file>#/<section>/<Name>`` references against a directory.

    The file part of the reference is matched by file name against every
    document under *root*, so relative paths like
    ``../../common-types/v5/types.json`` work regardless of where the
    referring document lives. When several files share a name, the one with
    the longest matching path suffix wins.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._documents: dict[Path, dict | None] = {}
        self._index: dict[str, list[Path]] | None = None
        self._files: dict[str, Path | None] = {}

    def __call__(self, ref: str) -> tuple[dict, dict] | None:
        file_part, _, pointer = ref.partition("#")
        if not file_part:
            return None

        if file_part not in self._files:
            self._files[file_part] = self._find_file(file_part)
            if self._files[file_part] is None:
                logger.warning("Common type file %s not found under %s.", file_part, self.root)
        path = self._files[file_part]
        if path is None:
            return None

        document = self._load(path)
        if document is None:
            return None

        section = pointer.strip("/").split("/")[0] if pointer else "definitions"
        table = document.get(section) or {}
        name = ref_name(pointer) if pointer else ""
        if name not in table:
            logger.warning("Common type %s cannot be found in %s.", name, path)
            return None
        return table[name], document

    def _find_file(self, file_part: str) -> Path | None:
        if self._index is None:
            self._index = {}
            for path in sorted(self.root.rglob("*")):
                if path.is_file() and path.suffix in DOCUMENT_SUFFIXES:
                    self._index.setdefault(path.name, []).append(path)

        parts = [p for p in Path(file_part).parts if p not in (".", "..")]
        candidates = self._index.get(parts[-1], []) if parts else []
        if not candidates:
            return None

        def score(path: Path) -> int:
            matched = 0
            for mine, theirs in zip(reversed(path.parts), reversed(parts)):
                if mine != theirs:
                    break
                matched += 1
            return matched

        return max(candidates, key=score)

    def _load(self, path: Path) -> dict | None:
        if path not in self._documents:
            try:
                data = yaml.safe_load(path.read_text(encoding="utf-8"))
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Cannot load common types from %s: %s", path, e)
                data = None
            self._documents[path] = data if isinstance(data, dict) else None
        return self._documents[path]
