#!/usr/bin/env python3
"""
JACKSONPATCH CLI
----------------
Batch entry points, one per layout. Each takes a single optional
positional argument, the base directory, and always runs to the final
"Processing complete!" line; failures are reported, not fatal.

Author: JacksonPatch Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from typing import List, Optional

from rich.logging import RichHandler

from jacksonpatch.cli.formatter import ReportFormatter, console
from jacksonpatch.core.config import GROUPED, LISTED, LayoutProfile
from jacksonpatch.core.engine import MigrationEngine


def configure_logging(level: int = logging.INFO):
    """Routes the package's warnings through Rich to stdout."""
    logger = logging.getLogger("jacksonpatch")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


class JacksonPatchCLI:
    """
    CLI wrapper that translates the command line into one engine run.
    """

    def __init__(self, profile: LayoutProfile):
        self.profile = profile
        self.formatter = ReportFormatter()
        self.parser = argparse.ArgumentParser(
            prog=f"jacksonpatch-{profile.name}",
            description=(
                "Inject spring.jackson.default-property-inclusion: non_null into "
                f"embedded configs ({profile.name} layout)."
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="Roots scanned: " + ", ".join(profile.roots),
        )
        self.parser.add_argument("base_dir", nargs="?", default=".", help="Base directory (default: current directory)")

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        configure_logging()

        self.formatter.print_header(f"Jackson Inclusion Migration ({self.profile.name})")
        engine = MigrationEngine(args.base_dir, self.profile)
        reports = engine.run(on_report=self.formatter.print_file_report)

        if reports:
            self.formatter.print_final_table(reports)
        self.formatter.print_summary(engine.generate_summary(reports))
        self.formatter.line("Processing complete!")
        return 0


def _main(profile: LayoutProfile, argv: Optional[List[str]] = None) -> int:
    try:
        return JacksonPatchCLI(profile).run(argv)
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        return 1


def main_grouped(argv: Optional[List[str]] = None):
    """Entry point for the folder-per-application layout."""
    sys.exit(_main(GROUPED, argv))


def main_listed(argv: Optional[List[str]] = None):
    """Entry point for the flat, multi-region layout."""
    sys.exit(_main(LISTED, argv))


if __name__ == "__main__":
    main_listed()
