"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from xmldoc_emit.deep_merge import deep_merge
from xmldoc_emit.errors import LoadFailure

DEFAULT_RECIPE = "xmldoc_emit.api_reference:write_api_reference"

DEFAULT_CONFIG: dict[str, Any] = {
    "sources": [],
    "output": {
        "directory": ".",
        "file": "API.md",
    },
    "preset": "github",
    "reference": {
        "title": "API Reference",
        "header_level": 1,
        "include_non_public": False,
        "sections": ["properties", "methods", "fields"],
    },
    "recipe": DEFAULT_RECIPE,
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    Relative ``sources`` paths are resolved against the config file's folder.
    A missing file yields the defaults.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config
    p = Path(path)
    if not p.exists():
        return config
    try:
        user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise LoadFailure(p, f"invalid YAML: {exc}") from exc
    if not isinstance(user_config, dict):
        raise LoadFailure(p, "top level must be a mapping")
    user_config["sources"] = [
        _resolve_source(s, p.parent) for s in user_config.get("sources") or []
    ]
    return deep_merge(config, user_config)


def _resolve_source(source: Any, base: Path) -> dict[str, str | None]:
    if isinstance(source, str):
        source = {"metadata": source}
    if not isinstance(source, dict) or "metadata" not in source:
        raise LoadFailure(base, f"source entry needs a 'metadata' path: {source!r}")
    docs = source.get("docs")
    return {
        "metadata": str(base / source["metadata"]),
        "docs": str(base / docs) if docs else None,
    }
