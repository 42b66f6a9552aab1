"""State carried through one comparison pass."""

from dataclasses import dataclass, field

from swagger_diff.common_types import CommonTypeResolver, no_common_types


@dataclass
class CompareContext:
    """Per-call state: the resolver and the names of definitions already compared.

    A fresh context is created for every ``compare_documents`` call, so a
    definition skipped as a repeat in one pass is still compared in the next.
    """

    resolver: CommonTypeResolver = no_common_types
    visited: set[str] = field(default_factory=set)

    def visit(self, name: str) -> bool:
        """Mark *name* as compared. Returns False if it already was."""
        if name in self.visited:
            return False
        self.visited.add(name)
        return True
