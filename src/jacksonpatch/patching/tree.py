#!/usr/bin/env python3
"""
JACKSONPATCH TREE - High-Fidelity Round-Trip
--------------------------------------------
Parses YAML text into the Node model and serializes it back. Built on
the ruamel.yaml round-trip loader so key order, comments, quotes and
block scalar styles survive an edit.

Author: JacksonPatch Team
Date: 2026-10-19
"""

import io
import re
from typing import Any, Set, Tuple

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.constructor import DuplicateKeyError

from jacksonpatch.core.config import LINE_WIDTH, MAPPING_INDENT, SEQUENCE_INDENT, SEQUENCE_OFFSET
from jacksonpatch.core.errors import TreeParseError
from jacksonpatch.core.models import Document, Node

DOC_START = re.compile(r"^---(\s|$)")


def _has_explicit_start(text: str) -> bool:
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or stripped.startswith("%"):
            continue
        return bool(DOC_START.match(stripped))
    return False


def _alias_sites(data: Any) -> Set[Tuple[int, Any]]:
    """
    Locations (id(container), key) holding a mapping or sequence already
    seen earlier in document order, i.e. the targets of `*alias` nodes.
    """
    seen: Set[int] = set()
    sites: Set[Tuple[int, Any]] = set()

    def visit(container):
        seen.add(id(container))
        pairs = container.items() if isinstance(container, dict) else enumerate(container)
        for key, value in pairs:
            if not isinstance(value, (dict, list)):
                continue
            if id(value) in seen:
                sites.add((id(container), key))
            else:
                visit(value)

    if isinstance(data, (dict, list)):
        visit(data)
    return sites


class YamlTree:
    """
    The Reconstructor: text -> Document -> text.
    """

    def __init__(self, explicit_start: bool = False):
        self.explicit_start = explicit_start
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True
        # Mappings at 2, sequences indented 4 with the dash at offset 2
        self.yaml.indent(mapping=MAPPING_INDENT, sequence=SEQUENCE_INDENT, offset=SEQUENCE_OFFSET)
        self.yaml.width = LINE_WIDTH

    def parse(self, text: str) -> Document:
        try:
            data = self.yaml.load(text)
            if data is None and self._is_blank(text):
                return Document(Node.empty())
        except DuplicateKeyError as e:
            raise TreeParseError(f"duplicate key, document left untouched: {e}") from e
        except YAMLError as e:
            raise TreeParseError(str(e)) from e
        root = Node.wrap(data, aliases=frozenset(_alias_sites(data)))
        return Document(root, explicit_start=_has_explicit_start(text))

    def _is_blank(self, text: str) -> bool:
        # A null scalar ("~", "null") still composes to a node; no content does not
        return self.yaml.compose(text) is None

    def serialize(self, document: Document) -> str:
        if document.is_empty:
            return ""
        self.yaml.explicit_start = self.explicit_start or document.explicit_start
        stream = io.StringIO()
        self.yaml.dump(document.root.value, stream)
        return stream.getvalue()
