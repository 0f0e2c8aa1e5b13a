#!/usr/bin/env python3
"""
JACKSONPATCH SHAPE VALIDATOR - The Judge
----------------------------------------
Checks that an outer document has the top-level shape its layout
expects and hands back the `data` mappings that hold embedded configs.
Nothing beyond the path to those mappings is validated.

Author: JacksonPatch Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from jacksonpatch.core.config import Discovery, LayoutProfile
from jacksonpatch.core.errors import OuterShapeError
from jacksonpatch.core.models import Document, Node, NodeKind

logger = logging.getLogger("jacksonpatch.validator")


@dataclass
class DataBlock:
    """A `data` mapping together with the record that owns it."""
    owner: str
    data: Node
    region: Optional[str] = None


class OuterShapeValidator:
    """
    Grouped layout:  {data: {<key>: <embedded>, ...}}
    Listed layout:   {version: ..., configmaps: [{name, region, namespace, data}, ...]}
    """

    def __init__(self, profile: LayoutProfile):
        self.profile = profile

    def locate(self, document: Document) -> List[DataBlock]:
        root = document.root
        if root.kind is not NodeKind.MAPPING:
            raise OuterShapeError(f"document root is a {root.kind.value}, expected a mapping")

        if self.profile.discovery is Discovery.APP_FOLDERS:
            return [self._grouped_block(root)]
        return self._listed_blocks(root)

    def _grouped_block(self, root: Node) -> DataBlock:
        data = root.get("data")
        if data is None:
            raise OuterShapeError("missing required top-level field 'data'")
        if data.kind is not NodeKind.MAPPING:
            raise OuterShapeError("'data' must be a mapping")
        return DataBlock(owner="data", data=data)

    def _listed_blocks(self, root: Node) -> List[DataBlock]:
        configmaps = root.get("configmaps")
        if configmaps is None:
            raise OuterShapeError("missing required top-level field 'configmaps'")
        if configmaps.kind is not NodeKind.SEQUENCE:
            raise OuterShapeError("'configmaps' must be a list")

        blocks = []
        for index, record in enumerate(configmaps.children()):
            if record.kind is not NodeKind.MAPPING:
                raise OuterShapeError(f"'configmaps[{index}]' must be a mapping")

            name = self._text_of(record.get("name")) or f"configmaps[{index}]"
            region = self._text_of(record.get("region"))
            data = record.get("data")
            if data is None or data.kind is not NodeKind.MAPPING:
                logger.debug(f"Record '{name}' has no data mapping, skipping.")
                continue
            blocks.append(DataBlock(owner=name, data=data, region=region))
        return blocks

    @staticmethod
    def _text_of(node: Optional[Node]) -> Optional[str]:
        if node is None:
            return None
        return node.text or None
