#!/usr/bin/env python3
"""
JACKSONPATCH CORE MODELS
------------------------
Typed view over a round-trip YAML tree. A Node records what kind of
YAML construct it is, the scalar style and tag it was written with, and
holds the live ruamel.yaml object underneath, so edits made through a
Node land directly in the tree that will be serialized.

Author: JacksonPatch Team
Date: 2026-10-19
"""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Optional, Tuple

from ruamel.yaml.comments import CommentedMap, TaggedScalar
from ruamel.yaml.scalarbool import ScalarBoolean
from ruamel.yaml.scalarstring import (
    DoubleQuotedScalarString,
    FoldedScalarString,
    LiteralScalarString,
    SingleQuotedScalarString,
)

STR_TAG = "tag:yaml.org,2002:str"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"
BOOL_TAG = "tag:yaml.org,2002:bool"
NULL_TAG = "tag:yaml.org,2002:null"
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
MAP_TAG = "tag:yaml.org,2002:map"
SEQ_TAG = "tag:yaml.org,2002:seq"


class NodeKind(Enum):
    EMPTY = "empty"
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


class ScalarStyle(Enum):
    PLAIN = "plain"
    LITERAL = "literal"
    FOLDED = "folded"
    QUOTED = "quoted"


def _scalar_style(value: Any) -> ScalarStyle:
    if isinstance(value, LiteralScalarString):
        return ScalarStyle.LITERAL
    if isinstance(value, FoldedScalarString):
        return ScalarStyle.FOLDED
    if isinstance(value, (SingleQuotedScalarString, DoubleQuotedScalarString)):
        return ScalarStyle.QUOTED
    return ScalarStyle.PLAIN


def _infer_tag(value: Any) -> Optional[str]:
    # ScalarBoolean subclasses int, so booleans are checked first
    if value is None:
        return NULL_TAG
    if isinstance(value, (bool, ScalarBoolean)):
        return BOOL_TAG
    if isinstance(value, int):
        return INT_TAG
    if isinstance(value, float):
        return FLOAT_TAG
    if isinstance(value, str):
        return STR_TAG
    if isinstance(value, datetime.date):
        return TIMESTAMP_TAG
    return None


def _explicit_tag(value: TaggedScalar) -> Optional[str]:
    tag = value.tag
    return getattr(tag, "value", tag)


@dataclass
class Node:
    """
    One YAML node. `value` is the underlying round-trip object
    (CommentedMap, CommentedSeq, a str subclass, a number, ...), shared
    with the parent container so in-place edits are visible on output.
    """
    kind: NodeKind
    value: Any = None
    style: Optional[ScalarStyle] = None
    tag: Optional[str] = None
    # (id(container), key) pairs whose value is a repeat of an anchored node
    aliases: FrozenSet[Tuple[int, Any]] = frozenset()
    is_alias: bool = False

    @classmethod
    def wrap(cls, value: Any, aliases: FrozenSet[Tuple[int, Any]] = frozenset(), is_alias: bool = False) -> "Node":
        if isinstance(value, dict):
            return cls(NodeKind.MAPPING, value, tag=MAP_TAG, aliases=aliases, is_alias=is_alias)
        if isinstance(value, list):
            return cls(NodeKind.SEQUENCE, value, tag=SEQ_TAG, aliases=aliases, is_alias=is_alias)
        if isinstance(value, TaggedScalar):
            return cls(NodeKind.SCALAR, value, style=ScalarStyle.PLAIN, tag=_explicit_tag(value), is_alias=is_alias)
        return cls(NodeKind.SCALAR, value, style=_scalar_style(value), tag=_infer_tag(value), is_alias=is_alias)

    @classmethod
    def empty(cls) -> "Node":
        return cls(NodeKind.EMPTY)

    @classmethod
    def scalar(cls, text: str, style: ScalarStyle = ScalarStyle.PLAIN) -> "Node":
        if style is ScalarStyle.LITERAL:
            return cls.wrap(LiteralScalarString(text))
        if style is ScalarStyle.FOLDED:
            return cls.wrap(FoldedScalarString(text))
        if style is ScalarStyle.QUOTED:
            return cls.wrap(DoubleQuotedScalarString(text))
        return cls.wrap(str(text))

    @classmethod
    def mapping(cls, pairs: Iterable[Tuple[str, "Node"]] = ()) -> "Node":
        data = CommentedMap()
        for key, child in pairs:
            data[key] = child.value
        return cls.wrap(data)

    @property
    def is_string(self) -> bool:
        return self.kind is NodeKind.SCALAR and self.tag == STR_TAG

    @property
    def text(self) -> Optional[str]:
        """Scalar content as text; a null scalar reads as empty text."""
        if self.kind is not NodeKind.SCALAR:
            return None
        if self.value is None:
            return ""
        if isinstance(self.value, TaggedScalar):
            return str(self.value.value)
        return str(self.value)

    def get(self, key: str) -> Optional["Node"]:
        """First child whose key is literally `key`, or None."""
        if self.kind is not NodeKind.MAPPING:
            return None
        for child_key, child in self.value.items():
            if isinstance(child_key, str) and child_key == key:
                return self._child(child_key, child)
        return None

    def items(self) -> List[Tuple[Any, "Node"]]:
        if self.kind is not NodeKind.MAPPING:
            return []
        return [(k, self._child(k, v)) for k, v in self.value.items()]

    def children(self) -> List["Node"]:
        if self.kind is not NodeKind.SEQUENCE:
            return []
        return [self._child(i, v) for i, v in enumerate(self.value)]

    def _child(self, key: Any, value: Any) -> "Node":
        is_alias = self.is_alias or (id(self.value), key) in self.aliases
        return Node.wrap(value, aliases=self.aliases, is_alias=is_alias)

    def append(self, key: str, child: "Node"):
        """Adds a new key as the last entry of this mapping."""
        if self.kind is not NodeKind.MAPPING:
            raise TypeError(f"cannot append to a {self.kind.value} node")
        self.value[key] = child.value

    def replace(self, key: Any, child: "Node"):
        """Swaps the value of an existing key in place, keeping its position."""
        if self.kind is not NodeKind.MAPPING:
            raise TypeError(f"cannot replace in a {self.kind.value} node")
        if key not in self.value:
            raise KeyError(key)
        self.value[key] = child.value


@dataclass
class Document:
    """A parsed YAML document: a single root node, EMPTY when there is no content."""
    root: Node
    explicit_start: bool = False

    @property
    def is_empty(self) -> bool:
        return self.root.kind is NodeKind.EMPTY
