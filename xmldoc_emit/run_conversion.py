"""Orchestration logic for converting assembly documentation to Markdown."""

import argparse
import logging
from pathlib import Path
from typing import Any

from xmldoc_emit.document_index import DocumentIndex
from xmldoc_emit.load_config import load_config
from xmldoc_emit.load_recipe import load_recipe
from xmldoc_emit.markdown_presets import PRESETS
from xmldoc_emit.source_pair import SourcePair
from xmldoc_emit.targets import emission_run, in_directory, registered_targets, to_file

logger = logging.getLogger(__name__)


def run_conversion(args: argparse.Namespace) -> int:
    """Execute the full conversion pipeline."""
    config = _effective_config(args)
    sources = _source_pairs(config)
    if not sources:
        msg = "No metadata sources given (pass them as arguments or in the config)"
        raise SystemExit(msg)

    preset_name = config["preset"]
    if preset_name not in PRESETS:
        msg = f"Unknown preset {preset_name!r} (choose from {', '.join(PRESETS)})"
        raise SystemExit(msg)

    recipe = load_recipe(config["recipe"])
    index = DocumentIndex.build(sources)

    out_dir = Path(config["output"]["directory"]).resolve()
    with emission_run(index) as root:
        ctx = in_directory(root.using(PRESETS[preset_name]), out_dir)
        ctx = to_file(ctx, config["output"]["file"])
        recipe(ctx, config)
        written = len(registered_targets(root))

    print(f"Generated {written} Markdown file(s) into: {out_dir}")
    return 0


def _effective_config(args: argparse.Namespace) -> dict[str, Any]:
    """Load the config file and apply command-line overrides."""
    config = load_config(args.config)
    if args.docs and len(args.metadata or []) != 1:
        raise SystemExit("--docs needs exactly one metadata argument")
    for metadata in args.metadata or []:
        config["sources"].append(
            {"metadata": str(metadata), "docs": str(args.docs) if args.docs else None}
        )
    if args.out_dir is not None:
        config["output"]["directory"] = str(args.out_dir)
    if args.out_file is not None:
        config["output"]["file"] = args.out_file
    if args.preset is not None:
        config["preset"] = args.preset
    if args.recipe is not None:
        config["recipe"] = args.recipe
    if args.include_non_public:
        config["reference"]["include_non_public"] = True
    return config


def _source_pairs(config: dict[str, Any]) -> list[SourcePair]:
    pairs = []
    for source in config["sources"]:
        docs = source.get("docs")
        pairs.append(SourcePair(Path(source["metadata"]), Path(docs) if docs else None))
    logger.debug("Converting %s source(s)", len(pairs))
    return pairs
