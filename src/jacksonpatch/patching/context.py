#!/usr/bin/env python3
"""
JACKSONPATCH PATCH CONTEXT
--------------------------
Result records passed from the merger and walker back to the engine.

Author: JacksonPatch Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class MergeResult:
    """Outcome of one embedded-config merge."""
    text: str                 # updated text, or the untouched input when unchanged
    changed: bool
    message: str = ""         # what the rule did, for reporting


@dataclass
class FieldOutcome:
    """One embedded field the walker looked at."""
    owner: str                       # configmap name, or the outer file's data block
    field: str                       # key under `data`
    region: Optional[str] = None     # listed layout only
    changed: bool = False
    error: Optional[str] = None      # set when the embedded text failed to parse


@dataclass
class WalkResult:
    """Outcome of walking one outer document."""
    content: Union[str, bytes]     # the input itself when nothing changed
    changed: bool
    fields: List[FieldOutcome] = field(default_factory=list)

    @property
    def changed_fields(self) -> List[FieldOutcome]:
        return [f for f in self.fields if f.changed]

    @property
    def failed_fields(self) -> List[FieldOutcome]:
        return [f for f in self.fields if f.error]
