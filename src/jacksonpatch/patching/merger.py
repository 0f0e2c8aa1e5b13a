#!/usr/bin/env python3
"""
JACKSONPATCH MERGER - Embedded Config Surgery
---------------------------------------------
Parses one embedded YAML blob, applies the Jackson inclusion rule and
serializes the result. Text that needs no change is handed back exactly
as it came in, so untouched blobs are never reformatted.

Author: JacksonPatch Team
Date: 2026-10-19
"""

import logging
from typing import Optional

from jacksonpatch.core.errors import EmbeddedParseError, TreeParseError
from jacksonpatch.core.models import Document
from jacksonpatch.patching.context import MergeResult
from jacksonpatch.patching.tree import YamlTree
from jacksonpatch.rules.jackson import JacksonInclusionRule

logger = logging.getLogger("jacksonpatch.merger")


class EmbeddedConfigMerger:
    """
    Args:
        leading_newline: prefix every updated blob with "\\n" (the listed
            layout's convention).
        rule: the injection rule; defaults to the Jackson inclusion rule.
    """

    def __init__(self, leading_newline: bool = False, rule: Optional[JacksonInclusionRule] = None):
        self.leading_newline = leading_newline
        self.rule = rule or JacksonInclusionRule()
        self.tree = YamlTree()

    def merge_jackson_config(self, raw_text: str) -> MergeResult:
        try:
            document = self.tree.parse(raw_text)
        except TreeParseError as e:
            raise EmbeddedParseError(f"failed to parse embedded YAML: {e}") from e

        if document.is_empty:
            text = self.tree.serialize(Document(self.rule.build()))
            if raw_text.strip():
                # Comment-only input: keep the comments above the new block
                return MergeResult(
                    self._finish(raw_text.rstrip() + "\n" + text), True,
                    "Action: Appended configuration below comment-only input.",
                )
            return MergeResult(self._finish(text), True, "Action: Created configuration from empty input.")

        changed, message = self.rule.apply(document.root)
        if not changed:
            logger.debug(message)
            return MergeResult(raw_text, False, message)

        return MergeResult(self._finish(self.tree.serialize(document)), True, message)

    def _finish(self, text: str) -> str:
        if self.leading_newline and not text.startswith("\n"):
            return "\n" + text
        return text


def merge_jackson_config(raw_text: str, leading_newline: bool = False) -> MergeResult:
    """Convenience wrapper around a default EmbeddedConfigMerger."""
    return EmbeddedConfigMerger(leading_newline=leading_newline).merge_jackson_config(raw_text)
