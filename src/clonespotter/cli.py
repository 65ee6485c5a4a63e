#!/usr/bin/env python3
"""
Clone Spotter CLI — Command line interface for content-based duplicate detection.
Runs the same core engine as library callers, with colored console output,
an interactive prompt mode and a JSON report written to disk.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import json
import os
import sys
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

try:
    from rich.console import Console
except ImportError:
    _MISSING_DEPS.append("rich")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install -e .", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from clonespotter import __version__
from clonespotter.commands import ScanCommand
from clonespotter.core.models import (
    HashAlgorithm, ScanError, ScanParams, ScanResult, ScanWarning, DEFAULT_EXCLUDED_DIRS, clean_dir_path
)
from clonespotter.services.report_service import ReportService
from clonespotter.utils.convert_utils import ConvertUtils
from clonespotter.aliases import (
    APP_NAME, APP_AUTHOR, DEFAULT_OUTPUT_DIR, DEFAULT_FILENAME, MAX_VERBOSE_GROUPS,
    ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT, EXCLUDE_HELP_TEXT, WORKERS_HELP_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.console = Console(highlight=False, emoji=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
        self.warnings: List[ScanWarning] = []

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="clone-spotter",
            description=f"{APP_NAME} — find duplicate files based on content, not names",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "root",
            nargs="?",
            default=None,
            help="Directory to search (same as --directory)"
        )
        parser.add_argument(
            "--directory", "-d",
            default=None,
            type=str,
            help="Directory to search for duplicates"
        )

        # Output options
        parser.add_argument(
            "--output", "-o",
            default=DEFAULT_OUTPUT_DIR,
            type=str,
            metavar='',
            help=f"Output directory. Default: {DEFAULT_OUTPUT_DIR}"
        )
        parser.add_argument(
            "--filename", "-f",
            default=DEFAULT_FILENAME,
            type=str,
            metavar='',
            help=f"Output filename without extension. Default: {DEFAULT_FILENAME}"
        )

        # Scan options
        parser.add_argument(
            "--algorithm", "-a",
            default=HashAlgorithm.default().value,
            type=str,
            metavar='',
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--exclude", "-e",
            default="",
            type=str,
            metavar='',
            help=EXCLUDE_HELP_TEXT
        )
        parser.add_argument(
            "--no-default-excludes",
            action="store_true",
            help="Do not exclude the default directories"
        )
        parser.add_argument(
            "--workers", "-w",
            default="4",
            type=str,
            metavar='',
            help=WORKERS_HELP_TEXT
        )

        # Modes and verbosity
        parser.add_argument(
            "--interactive", "-i",
            action="store_true",
            help="Run with guided prompts for all options"
        )
        parser.add_argument(
            "--terminal", "-t",
            action="store_true",
            help="Also print the JSON results to the terminal"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Minimal output"
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Verbose output with detailed information"
        )
        parser.add_argument(
            "--version", "-V",
            action="version",
            version=f"{APP_NAME} v{__version__}\nMade with ❤️ by {APP_AUTHOR}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        if not HashAlgorithm.is_valid(args.algorithm):
            self.error_exit(
                f"Unsupported algorithm: {args.algorithm}. "
                f"Supported: {', '.join(ALGORITHM_CHOICES)}"
            )

        root_dir = clean_dir_path(self.root_dir_of(args) or "")
        if not os.path.exists(root_dir):
            self.error_exit(f"Directory not found or not accessible: {root_dir}")
        if not os.path.isdir(root_dir):
            self.error_exit(f"Path is not a directory: {root_dir}")

        try:
            workers = int(args.workers)
        except ValueError:
            workers = 0
        if workers <= 0:
            self.warning(f"Invalid worker count '{args.workers}', using default")

        if not args.filename.strip():
            self.error_exit("Output filename cannot be empty")

    @staticmethod
    def root_dir_of(args: argparse.Namespace) -> Optional[str]:
        """Positional directory wins over --directory."""
        return args.root or args.directory

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_user_input(
                root_dir=self.root_dir_of(args),
                algorithm=args.algorithm,
                exclude_str=args.exclude,
                workers=args.workers,
                use_default_excludes=not args.no_default_excludes
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    # =============================
    # Interactive mode
    # =============================
    def prompt_for_directory(self) -> str:
        """Asks until an existing directory is given."""
        while True:
            root_dir = input("\n📁 Directory to search: ").strip()
            if not root_dir:
                self.log_error("Directory is required")
                continue

            root_dir = clean_dir_path(root_dir)
            if not os.path.isdir(root_dir):
                self.log_error(f"Directory not found or not accessible: {root_dir}")
                continue
            return root_dir

    def prompt_for_algorithm(self) -> str:
        algorithms = list(HashAlgorithm)
        default = HashAlgorithm.default()

        self.log_bold("\n🔐 Available hash algorithms:")
        for i, algorithm in enumerate(algorithms, 1):
            marker = " (default)" if algorithm == default else ""
            self.console.print(f"  {i}. {algorithm.value}{marker}", markup=False)

        answer = input(f"\n🔐 Choose algorithm [1-{len(algorithms)}] (default: 1): ").strip()
        if not answer:
            return default.value
        try:
            choice = int(answer)
        except ValueError:
            choice = 0
        if choice < 1 or choice > len(algorithms):
            self.log_warning(f"Invalid choice, using default ({default.display_name})")
            return default.value
        return algorithms[choice - 1].value

    def prompt_for_excluded_dirs(self) -> str:
        self.log_bold("\n🚫 Default excluded directories:")
        self.console.print(f"  {', '.join(DEFAULT_EXCLUDED_DIRS)}", markup=False)
        return input("\n🚫 Additional directories to exclude (comma-separated, or press Enter for default): ").strip()

    def prompt_for_output(self) -> tuple:
        output_dir = input(f"\n📤 Output directory (default: {DEFAULT_OUTPUT_DIR}): ").strip() or DEFAULT_OUTPUT_DIR
        filename = input(f"📄 Output filename (default: {DEFAULT_FILENAME}): ").strip() or DEFAULT_FILENAME
        terminal = ConvertUtils.parse_yes_no(input("🖥️  Display results in terminal? [y/N]: "))
        verbose = ConvertUtils.parse_yes_no(input("📊 Verbose output? [y/N]: "))
        return output_dir, filename, terminal, verbose

    def run_interactive(self, args: argparse.Namespace) -> argparse.Namespace:
        """Fills `args` from prompts instead of flags."""
        self.log_bold(f"\n🔍 {APP_NAME} Interactive Mode")
        self.log_cyan("=" * 50)

        args.root = self.prompt_for_directory()
        args.directory = None
        args.algorithm = self.prompt_for_algorithm()
        args.exclude = self.prompt_for_excluded_dirs()
        args.output, args.filename, args.terminal, args.verbose = self.prompt_for_output()
        args.quiet = False
        return args

    # =============================
    # Scan and reporting
    # =============================
    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if self.quiet:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    def warning_callback(self, warning: ScanWarning) -> None:
        """Collects warnings; they are printed after the progress line is finished."""
        self.warnings.append(warning)

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (Ctrl+C raises KeyboardInterrupt instead)."""
        return False

    def run_scan(self, params: ScanParams) -> ScanResult:
        """Execute the scan workflow."""
        command = ScanCommand()
        try:
            result = command.execute(
                params,
                progress_callback=self.progress_callback if not self.quiet else None,
                stopped_flag=self.stopped_flag,
                warning_callback=self.warning_callback
            )
        except ScanError as e:
            if not self.quiet:
                sys.stderr.write("\n")
            self.error_exit(f"Search failed: {e}")

        if not self.quiet:
            sys.stderr.write("\n")
            self.log_success("Search completed")

        if self.verbose:
            for warning in self.warnings:
                self.warning(str(warning))
            self.console.print("\n" + result.print_summary(), markup=False)

        return result

    def print_header(self, params: ScanParams, output_path: str, terminal: bool) -> None:
        self.log_bold(f"\n🚀 {APP_NAME} Starting Search")
        self.log_cyan("=" * 50)
        self.log_info(f"Searching: {params.root_dir}")
        self.log_info(f"Algorithm: {params.algorithm.value}")
        self.log_info(f"Excluded: {', '.join(params.excluded_dirs) or '(none)'}")
        self.log_info(f"Workers: {params.workers}")
        self.log_info(f"Output: {output_path}")
        if terminal:
            self.log_info("Terminal output: enabled")
        self.console.print()

    def output_summary(self, result: ScanResult) -> None:
        """Show the counts and reclaimable space."""
        stats = result.stats
        self.log_bold("\n📊 Results Summary")
        self.log_cyan("-" * 30)
        self.log_success(f"Found {stats.total_duplicates} duplicate files")
        self.log_info(f"Unique originals: {stats.unique_originals}")
        self.log_info(f"Total duplicate files: {stats.total_duplicate_files}")

        if stats.total_duplicates > 0:
            reclaimable = ReportService.reclaimable_bytes(result.groups)
            self.log_warning(f"Potential space savings: {ConvertUtils.bytes_to_human(reclaimable)}")
        if result.warning_count:
            self.log_warning(f"{result.warning_count} files or directories could not be read")

    def output_terminal(self, result: ScanResult) -> None:
        """Prints the JSON report without styling so it can be piped."""
        print("\n=== Output Data ===")
        print(json.dumps(ReportService.build_report(result.groups), indent=2, ensure_ascii=False))
        print("==================\n")

    def output_groups(self, result: ScanResult) -> None:
        """Shows the first groups in color (verbose mode)."""
        if not result.groups:
            return

        self.log_bold("\n📋 Detailed Results")
        self.log_cyan("-" * 30)
        for idx, (original, duplicates) in enumerate(result.groups.items(), 1):
            if idx > MAX_VERBOSE_GROUPS:
                self.log_warning(f"\n... and {len(result.groups) - MAX_VERBOSE_GROUPS} more groups")
                break
            self.console.print(f"\nGroup {idx}:", style="yellow", markup=False)
            self.console.print(f"  Original: {original}", style="green", markup=False)
            for duplicate in duplicates:
                self.console.print(f"  Duplicate: {duplicate}", style="red", markup=False)

    # =============================
    # Colored output helpers
    # =============================
    def log_error(self, message: str) -> None:
        self.err_console.print(f"❌ Error: {message}", style="red", markup=False)

    def log_success(self, message: str) -> None:
        self.console.print(f"✅ {message}", style="green", markup=False)

    def log_warning(self, message: str) -> None:
        self.console.print(f"⚠️  {message}", style="yellow", markup=False)

    def log_info(self, message: str) -> None:
        self.console.print(f"ℹ️  {message}", style="cyan", markup=False)

    def log_bold(self, message: str) -> None:
        self.console.print(message, style="bold", markup=False)

    def log_cyan(self, message: str) -> None:
        self.console.print(message, style="cyan", markup=False)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            self.err_console.print(f"⚠️  {message}", style="yellow", markup=False)

    def error_exit(self, message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        self.log_error(message)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)

        if args.interactive or not self.root_dir_of(args):
            args = self.run_interactive(args)

        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger("clonespotter").setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)
        output_path = ReportService.massage_path(args.output, args.filename)

        if not self.quiet:
            self.print_header(params, output_path, args.terminal)

        result = self.run_scan(params)

        if not self.quiet:
            self.output_summary(result)

        try:
            saved_path = ReportService.save_result(result, args.output, args.filename)
        except RuntimeError as e:
            self.error_exit(f"Failed to save results: {e}")
        self.log_success(f"Results saved to {saved_path}")

        if args.terminal:
            self.output_terminal(result)

        if self.verbose:
            self.output_groups(result)

        elapsed = time.time() - self.start_time
        if not self.quiet:
            self.log_bold(f"\n🎉 {APP_NAME} Complete! ({ConvertUtils.seconds_to_human(elapsed)})")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except EOFError:
        print("\n⚠️  Input closed, nothing to do")
        sys.exit(1)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
