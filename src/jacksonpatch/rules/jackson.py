#!/usr/bin/env python3
"""
JACKSONPATCH RULES - Jackson Inclusion Policy
---------------------------------------------
Ensures an embedded Spring configuration carries
`spring.jackson.default-property-inclusion`. The rule only ever adds:
an existing value, a non-mapping or an alias in the way means hands off.

Author: JacksonPatch Team
Date: 2026-10-19
"""

from typing import Sequence, Tuple

from jacksonpatch.core.config import JACKSON_PATH, JACKSON_VALUE
from jacksonpatch.core.models import Node, NodeKind


class JacksonInclusionRule:
    """
    Walks the target path one mapping level at a time and appends the
    first missing segment, together with everything below it, at the end
    of the mapping that lacks it.
    """

    def __init__(self, path: Sequence[str] = JACKSON_PATH, value: str = JACKSON_VALUE):
        if not path:
            raise ValueError("target path must have at least one key")
        self.path = tuple(path)
        self.value = value

    def apply(self, root: Node) -> Tuple[bool, str]:
        """
        Returns (changed, message). The root must be a mapping; anything
        else is left alone.
        """
        if root.kind is not NodeKind.MAPPING:
            return False, f"Skipped: document root is a {root.kind.value}, not a mapping."
        return self._ensure_under(root, self.path)

    def build(self) -> Node:
        """A fresh mapping holding only the target path."""
        return self._branch(self.path)

    def _ensure_under(self, mapping: Node, path: Tuple[str, ...]) -> Tuple[bool, str]:
        head, rest = path[0], path[1:]
        dotted = ".".join(self.path[:len(self.path) - len(rest)])

        child = mapping.get(head)
        if child is None:
            mapping.append(head, self._branch(rest) if rest else Node.scalar(self.value))
            return True, f"Action: Added '{dotted}'."
        if not rest:
            return False, f"Kept: '{dotted}' already set."
        if child.kind is not NodeKind.MAPPING:
            return False, f"Skipped: '{dotted}' is not a mapping."
        if child.is_alias:
            # Appending here would also edit the anchored original
            return False, f"Skipped: '{dotted}' is an alias."
        return self._ensure_under(child, rest)

    def _branch(self, path: Tuple[str, ...]) -> Node:
        node = Node.scalar(self.value)
        for key in reversed(path):
            node = Node.mapping([(key, node)])
        return node
