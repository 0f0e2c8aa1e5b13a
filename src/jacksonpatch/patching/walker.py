#!/usr/bin/env python3
"""
JACKSONPATCH DOCUMENT WALKER - The Chief Surgeon
------------------------------------------------
Bridges one outer configuration document to the embedded-config merger:
locate the `data` mappings, pick the candidate fields, merge each one,
and reassemble the outer document only when something changed.

A field that fails to parse is logged and left alone; the rest of the
document is still processed.

Author: JacksonPatch Team
Date: 2026-10-19
"""

import logging
from typing import Any, Union

from jacksonpatch.core.config import LayoutProfile, StyleOnChange
from jacksonpatch.core.errors import EmbeddedParseError, OuterParseError, TreeParseError
from jacksonpatch.core.models import Node, NodeKind, ScalarStyle
from jacksonpatch.patching.context import FieldOutcome, WalkResult
from jacksonpatch.patching.merger import EmbeddedConfigMerger
from jacksonpatch.patching.tree import YamlTree
from jacksonpatch.validator.shape import DataBlock, OuterShapeValidator

logger = logging.getLogger("jacksonpatch.walker")

BLOCK_STYLES = (ScalarStyle.LITERAL, ScalarStyle.FOLDED)


class DocumentWalker:
    """
    Runs a strictly ordered sequence per outer document:
    parse -> locate data blocks -> merge candidates -> reassemble.
    """

    def __init__(self, profile: LayoutProfile):
        self.profile = profile
        self.tree = YamlTree(explicit_start=profile.explicit_start)
        self.validator = OuterShapeValidator(profile)
        self.merger = EmbeddedConfigMerger(leading_newline=profile.leading_newline)

    def walk(self, outer: Union[str, bytes]) -> WalkResult:
        """
        Returns the rewritten text when a field changed; otherwise
        `content` is `outer` itself, bytes and BOM included.
        """
        # --- PHASE 1: DECODE & PARSE ---
        text = outer
        if isinstance(outer, bytes):
            try:
                text = outer.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise OuterParseError(f"file is not valid UTF-8: {e}") from e
        try:
            document = self.tree.parse(text)
        except TreeParseError as e:
            raise OuterParseError(f"failed to parse YAML: {e}") from e

        # --- PHASE 2: SHAPE (raises OuterShapeError) ---
        blocks = self.validator.locate(document)

        # --- PHASE 3: MERGE EVERY CANDIDATE ---
        outcomes = []
        for block in blocks:
            if block.data.is_alias:
                logger.debug(f"{block.owner}: data is an alias, skipped")
                continue
            for key, value in block.data.items():
                if not self._is_candidate(key, value):
                    continue
                outcomes.append(self._merge_field(block, key, value))

        # --- PHASE 4: REASSEMBLY ---
        if not any(o.changed for o in outcomes):
            return WalkResult(outer, False, outcomes)
        return WalkResult(self.tree.serialize(document), True, outcomes)

    def _is_candidate(self, key: Any, value: Node) -> bool:
        if not self.profile.accepts_key(key):
            return False
        if value.kind is not NodeKind.SCALAR:
            return False
        if value.style in BLOCK_STYLES or value.is_string:
            return True
        # `x.yaml:` with no value reads as an empty embedded document
        return self.profile.suffix_filter and value.value is None

    def _merge_field(self, block: DataBlock, key: str, value: Node) -> FieldOutcome:
        outcome = FieldOutcome(owner=block.owner, field=str(key), region=block.region)
        try:
            result = self.merger.merge_jackson_config(value.text)
        except EmbeddedParseError as e:
            logger.warning(f"Could not process embedded YAML in {key}: {e}")
            outcome.error = str(e)
            return outcome

        if result.changed:
            block.data.replace(key, self._restyle(result.text, value))
            outcome.changed = True
            logger.debug(f"{block.owner}/{key}: {result.message}")
        return outcome

    def _restyle(self, text: str, original: Node) -> Node:
        if self.profile.style_on_change is StyleOnChange.LITERAL:
            return Node.scalar(text, ScalarStyle.LITERAL)
        if original.style in BLOCK_STYLES:
            return Node.scalar(text, original.style)
        if "\n" in text:
            return Node.scalar(text, ScalarStyle.LITERAL)
        return Node.scalar(text)
