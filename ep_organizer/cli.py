"""Command line interface for the episode organizer."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .core.config import OrganizerConfig
from .core.errors import OrganizerError
from .logging.file_log import setup_file_logging, teardown_file_logging
from .logging.rich_logger import RichProgressReporter, QuietProgressReporter


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ep-organizer",
        description=(
            "Organizes files into numbered episode folders "
            "(episode_X, episode_X+1, etc.) starting from a given index."
        ),
        epilog="Example: ep-organizer -s ./source -d ./destination -n external -l 2 -i 5 -r",
    )
    
    # Global options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )
    
    parser.add_argument(
        "-s", "--source",
        type=Path,
        required=True,
        help="Source directory containing files to organize",
    )
    parser.add_argument(
        "-d", "--dest",
        type=Path,
        required=True,
        help="Target directory where episode folders are created",
    )
    parser.add_argument(
        "-n", "--name",
        type=str,
        required=True,
        help="New name for files inside episode folders (extension excluded)",
    )
    parser.add_argument(
        "-l", "--number-length",
        type=int,
        default=0,
        help="Number of digits to use for sorting filenames (default: 0, alphabetical)",
    )
    parser.add_argument(
        "-i", "--start-index",
        type=int,
        default=1,
        help="Starting index for episode folders (default: 1)",
    )
    parser.add_argument(
        "-r", "--replace",
        action="store_true",
        help="Replace files that already exist in episode folders",
    )
    parser.add_argument(
        "-t", "--threads",
        type=int,
        default=1,
        help="Number of files to copy in parallel (default: 1)",
    )
    parser.add_argument(
        "-e", "--extension",
        type=str,
        default="mp4",
        help="Extension of the files to organize, case-insensitive (default: mp4)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a log of every operation to this file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without copying",
    )
    
    return parser


def build_config(args: argparse.Namespace) -> OrganizerConfig:
    """Turn parsed arguments into a validated config."""
    return OrganizerConfig(
        source_dir=args.source,
        dest_dir=args.dest,
        new_name=args.name,
        digit_length=args.number_length,
        start_index=args.start_index,
        replace_existing=args.replace,
        threads=args.threads,
        extension=args.extension,
        log_file=args.log_file,
        dry_run=args.dry_run,
    )


def run(config: OrganizerConfig, reporter) -> int:
    """Run the organizer for a config.
    
    Returns:
        Process exit code: 0 when nothing failed to copy.
    """
    from .services.organizer import EpisodeOrganizer, OrganizerDependencies
    
    reporter.print_header("ep-organizer")
    reporter.print_config({
        "Source Directory": str(config.source_dir),
        "Destination Directory": str(config.dest_dir),
        "New Name": config.new_name,
        "Extension": config.extension,
        "Sort Mode": config.sort_mode.value,
        "Number Length": config.digit_length,
        "Start Index": config.start_index,
        "Replace Existing": config.replace_existing,
        "Threads": config.threads,
        "Dry Run": config.dry_run,
    })
    
    deps = OrganizerDependencies.from_config(config, reporter)
    organizer = EpisodeOrganizer(config=config, deps=deps)
    stats = organizer.run()
    reporter.print_stats(stats)
    return 0 if stats.failed == 0 else 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    
    if args.quiet:
        reporter = QuietProgressReporter()
    else:
        reporter = RichProgressReporter(verbose=args.verbose)
    
    handler = None
    try:
        config = build_config(args)
        if config.log_file is not None:
            handler = setup_file_logging(config.log_file, verbose=args.verbose)
        return run(config, reporter)
    except KeyboardInterrupt:
        # Clean exit on Ctrl+C - no stack trace
        return 130
    except OrganizerError as e:
        reporter.error(f"Error: {e}")
        return 1
    except OSError as e:
        reporter.error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    finally:
        if handler is not None:
            teardown_file_logging(handler)


if __name__ == "__main__":
    sys.exit(main())
