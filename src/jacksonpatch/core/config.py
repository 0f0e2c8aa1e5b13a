#!/usr/bin/env python3
"""
JACKSONPATCH CONFIG - Layout Profiles
-------------------------------------
Process-wide constants: the injected path and value, the YAML emitter
settings, and one LayoutProfile per supported outer layout.

Author: JacksonPatch Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# spring.jackson.default-property-inclusion = non_null
JACKSON_PATH: Tuple[str, ...] = ("spring", "jackson", "default-property-inclusion")
JACKSON_VALUE = "non_null"

# Emitter settings shared by embedded and outer documents
MAPPING_INDENT = 2
SEQUENCE_INDENT = 4
SEQUENCE_OFFSET = 2
LINE_WIDTH = 4096

EMBEDDED_SUFFIXES = (".yaml", ".yml")


class Discovery(Enum):
    """How the batch driver finds files under a root directory."""
    APP_FOLDERS = "app-folders"   # <root>/<app>/configmap.yaml
    FLAT_FILES = "flat-files"     # <root>/*.yaml then <root>/*.yml


class StyleOnChange(Enum):
    """Scalar style given to an embedded field after it was rewritten."""
    LITERAL = "literal"     # always emit as a block literal
    PRESERVE = "preserve"   # keep literal/folded, otherwise library default


@dataclass(frozen=True)
class LayoutProfile:
    name: str
    roots: Tuple[str, ...]
    discovery: Discovery
    suffix_filter: bool           # only data keys ending in .yaml/.yml are candidates
    leading_newline: bool         # updated blobs start with "\n"
    style_on_change: StyleOnChange
    explicit_start: bool          # rewritten outer document starts with "---"
    target_name: str = "configmap.yaml"

    def accepts_key(self, key: str) -> bool:
        if not self.suffix_filter:
            return True
        return isinstance(key, str) and key.endswith(EMBEDDED_SUFFIXES)


GROUPED = LayoutProfile(
    name="grouped",
    roots=("templates/clients", "templates/services", "templates/jobs"),
    discovery=Discovery.APP_FOLDERS,
    suffix_filter=False,
    leading_newline=False,
    style_on_change=StyleOnChange.LITERAL,
    explicit_start=False,
)

LISTED = LayoutProfile(
    name="listed",
    roots=("dev/configmaps", "cert-dev/configmaps", "pre/configmaps", "pro/configmaps"),
    discovery=Discovery.FLAT_FILES,
    suffix_filter=True,
    leading_newline=True,
    style_on_change=StyleOnChange.PRESERVE,
    explicit_start=True,
)
