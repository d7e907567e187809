"""CLI log inspector — list rotated log files and tail the log stream."""

import argparse
import os
import sys

from rotlog.config import Config
from rotlog.errors import IOFailure
from rotlog.inspector import format_size, list_log_files, tail_log_dir


def main():
    parser = argparse.ArgumentParser(description="Inspect rotated log files")
    parser.add_argument("--log-dir", default=os.environ.get("LOG_DIR", Config.path),
                        help="Directory containing log files")
    parser.add_argument("--format",
                        default=os.environ.get("LOG_FILENAME_FORMAT", Config.filename_format),
                        help="strftime pattern of the log file names")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--list", action="store_true", help="List log files, oldest first")
    group.add_argument("--tail", type=int, metavar="N",
                       help="Print the last N lines across all log files")
    args = parser.parse_args()

    try:
        if args.list:
            files = list_log_files(args.log_dir, args.format)
            if not files:
                print("No log files found.")
                return
            for name, size in files:
                print(f"  {name}  ({format_size(size)})")
        else:
            lines = tail_log_dir(args.log_dir, args.format, args.tail)
            if not lines:
                print("No log lines found.")
                return
            for line in lines:
                print(line)
    except IOFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
