"""Main entry point: optional development checks, then the Markdown conversion."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from xmldoc_emit.xmldoc_to_markdown import main as convert


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> int:
    """Run the checks if requested, then convert with the remaining arguments."""
    parser = argparse.ArgumentParser(
        description="Generate Markdown API documentation from XML doc comments.",
        add_help=False,
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before generating documentation",
    )
    args, remaining = parser.parse_known_args()

    if args.dev:
        print("--- Running Development Checks ---")
        root_dir = Path(__file__).parent
        run_command([sys.executable, str(root_dir / "dev.py"), "--ci"], cwd=root_dir)
        print("\nDevelopment checks passed. Proceeding with conversion.\n")

    return convert(remaining)


if __name__ == "__main__":
    raise SystemExit(main())
