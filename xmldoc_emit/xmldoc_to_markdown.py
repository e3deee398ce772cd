"""Convert assembly metadata and XML documentation files to Markdown.

Each metadata manifest is paired with the compiler-generated XML
documentation file next to it (same base name, ``.xml`` extension) unless
``--docs`` names one explicitly. The output is produced by a recipe, by
default the bundled single-page API reference.
"""

import argparse
import logging
from pathlib import Path

from xmldoc_emit.errors import ConversionError
from xmldoc_emit.markdown_presets import PRESETS
from xmldoc_emit.run_conversion import run_conversion

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Convert assembly XML documentation to Markdown.",
    )
    ap.add_argument(
        "metadata",
        type=Path,
        nargs="*",
        help="Assembly metadata manifests (*.yml)",
    )
    ap.add_argument(
        "--docs",
        type=Path,
        help="XML documentation file for a single metadata manifest",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--out-dir",
        type=Path,
        help="Output directory (default: current directory)",
    )
    ap.add_argument(
        "--out-file",
        help="Output file name relative to the output directory (default: API.md)",
    )
    ap.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Markdown flavor (default: github)",
    )
    ap.add_argument(
        "--recipe",
        help="Recipe to run, as module:function",
    )
    ap.add_argument(
        "--include-non-public",
        action="store_true",
        help="Document non-public members too",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the conversion process."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run_conversion(args)
    except ConversionError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
