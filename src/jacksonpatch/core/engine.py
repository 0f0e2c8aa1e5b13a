#!/usr/bin/env python3
"""
JACKSONPATCH ENGINE - The Batch Orchestrator
--------------------------------------------
The MigrationEngine discovers configuration files under a base
directory, runs each one through the DocumentWalker and overwrites the
files whose embedded configs changed. Failures are contained per
directory and per file; the batch always runs to the end.

Author: JacksonPatch Team
Date: 2026-10-19
"""

import os
import shutil
import time
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from jacksonpatch.core.config import Discovery, LayoutProfile
from jacksonpatch.core.errors import (
    DirectoryNotFound,
    DirectoryUnreadable,
    OuterParseError,
    OuterShapeError,
    WriteError,
)
from jacksonpatch.patching.walker import DocumentWalker

logger = logging.getLogger("jacksonpatch.engine")


class MigrationEngine:
    """
    Principal orchestrator for one layout. Files are processed strictly
    one at a time, in discovery order.
    """

    def __init__(self, base_dir: str, profile: LayoutProfile):
        self.base_dir = Path(base_dir)
        self.profile = profile
        self.walker = DocumentWalker(profile)
        self.skipped_dirs: List[Dict[str, str]] = []

    # --- Discovery ---

    def discover(self) -> Iterator[Path]:
        """Yields target files root by root; missing or unreadable roots are logged and skipped."""
        self.skipped_dirs = []
        for root in self.profile.roots:
            root_path = self.base_dir / root
            try:
                yield from self._scan_root(root_path)
            except (DirectoryNotFound, DirectoryUnreadable) as e:
                logger.warning(f"Could not process directory {root_path}: {e}")
                self.skipped_dirs.append({"directory": str(root_path), "error": str(e)})

    def _scan_root(self, root_path: Path) -> List[Path]:
        if not root_path.is_dir():
            raise DirectoryNotFound(f"directory does not exist: {root_path}")

        try:
            if self.profile.discovery is Discovery.APP_FOLDERS:
                return [
                    child / self.profile.target_name
                    for child in sorted(root_path.iterdir())
                    if child.is_dir() and (child / self.profile.target_name).is_file()
                ]

            files = []
            for pattern in ("*.yaml", "*.yml"):
                files.extend(sorted(f for f in root_path.glob(pattern) if f.is_file()))
            return files
        except OSError as e:
            raise DirectoryUnreadable(f"could not list directory: {e}") from e

    # --- Per-file processing ---

    def process_file(self, file_path: Path) -> Dict[str, Any]:
        """Walks one file and overwrites it if any embedded field changed."""
        file_path = Path(file_path)
        try:
            raw = file_path.read_bytes()
        except OSError as e:
            logger.error(f"Error reading {file_path}: {e}")
            return self._file_error(file_path, "READ_ERROR", f"failed to read file: {e}")

        try:
            walk = self.walker.walk(raw)
        except OuterParseError as e:
            logger.warning(f"Skipping {file_path}: {e}")
            return self._file_error(file_path, "PARSE_ERROR", str(e))
        except OuterShapeError as e:
            logger.warning(f"Skipping {file_path}: {e}")
            return self._file_error(file_path, "SHAPE_ERROR", str(e))

        result = {
            "file_path": str(file_path),
            "status": "PATCHED" if walk.changed else "UNCHANGED",
            "success": True,
            "written": False,
            "fields": walk.fields,
            "error": None,
            "timestamp": time.time(),
        }
        if not walk.changed:
            return result

        try:
            self._atomic_write(file_path, walk.content)
            result["written"] = True
        except WriteError as e:
            logger.error(f"Error writing {file_path}: {e}")
            result.update(status="WRITE_ERROR", success=False, error=str(e))
        return result

    def run(self, on_report: Optional[Callable[[Dict[str, Any]], None]] = None) -> List[Dict[str, Any]]:
        reports = []
        for file_path in self.discover():
            report = self.process_file(file_path)
            reports.append(report)
            if on_report:
                on_report(report)
        return reports

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Provides SRE-style run metrics."""
        total = len(reports)
        successful = sum(1 for r in reports if r.get("success", False))
        return {
            "total_files": total,
            "successful": successful,
            "patched": sum(1 for r in reports if r.get("status") == "PATCHED"),
            "unchanged": sum(1 for r in reports if r.get("status") == "UNCHANGED"),
            "failed": total - successful,
            "written_to_disk": sum(1 for r in reports if r.get("written", False)),
            "field_warnings": sum(1 for r in reports for f in r.get("fields", []) if f.error),
            "skipped_dirs": len(self.skipped_dirs),
            "success_rate": (successful / total) if total > 0 else 0,
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _atomic_write(self, target_path: Path, content: str):
        # Write through symlinks; the link itself stays in place
        target_path = Path(target_path).resolve()
        if not os.access(target_path, os.W_OK):
            raise WriteError(f"No write access to {target_path}")
        if not os.access(target_path.parent, os.W_OK):
            raise WriteError(f"No write access to directory {target_path.parent}")
        temp_file = target_path.with_name(target_path.name + ".jacksonpatch.tmp")
        try:
            temp_file.write_text(content, encoding="utf-8")
            shutil.copymode(target_path, temp_file)
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise WriteError(f"failed to write file: {e}") from e

    def _file_error(self, path: Path, status: str, error: str) -> Dict[str, Any]:
        return {
            "file_path": str(path), "status": status, "error": error,
            "success": False, "written": False, "fields": [],
        }
