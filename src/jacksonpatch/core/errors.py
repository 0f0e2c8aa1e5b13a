#!/usr/bin/env python3
"""
JACKSONPATCH ERRORS - Failure Taxonomy
--------------------------------------
Every failure the migration can hit is contained at the smallest scope
(field, then file, then directory) and turned into a logged warning.
These classes give each scope its own type so callers can catch exactly
the level they are responsible for.

Author: JacksonPatch Team
Date: 2026-10-19
"""


class JacksonPatchError(Exception):
    """Base class for all migration errors."""


class TreeParseError(JacksonPatchError):
    """Raised by the node tree model when text is not well-formed YAML."""


class DirectoryNotFound(JacksonPatchError):
    """A configured root directory does not exist under the base directory."""


class DirectoryUnreadable(JacksonPatchError):
    """A root directory exists but its entries could not be listed."""


class OuterParseError(JacksonPatchError):
    """A discovered file is not valid YAML."""


class OuterShapeError(JacksonPatchError):
    """A discovered file lacks the top-level shape its layout expects."""


class EmbeddedParseError(JacksonPatchError):
    """One embedded field's text is not valid YAML."""


class WriteError(JacksonPatchError):
    """The destination file could not be overwritten."""
