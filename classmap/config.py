"""Configuration helpers for the class map resolver."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from classmap.core.cache_store import DEFAULT_CACHE_FILENAME
from classmap.core.extractor import DECLARATION_KEYWORDS


DEFAULT_EXTENSIONS: Dict[str, bool] = {
    ".php": True,
    ".php4": True,
    ".php5": True,
    ".mphp": True,
    ".phpm": True,
}


def _normalize_extensions(raw: Any) -> Dict[str, bool]:
    if raw is None:
        return dict(DEFAULT_EXTENSIONS)
    if isinstance(raw, (list, tuple)):
        raw = {ext: True for ext in raw}
    if not isinstance(raw, dict):
        raise ValueError("'extensions' must be a list or a mapping of suffix to bool")

    extensions = {}
    for ext, accepted in raw.items():
        ext = str(ext)
        if not ext.startswith("."):
            ext = "." + ext
        extensions[ext] = bool(accepted)
    return extensions


@dataclass
class ResolverConfig:
    """Everything the resolver needs at construction time."""

    root: Path
    rebuild_allowed: bool = True
    extensions: Dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_EXTENSIONS))
    cache_filename: str = DEFAULT_CACHE_FILENAME
    ignore: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=lambda: list(DECLARATION_KEYWORDS))

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Path) -> "ResolverConfig":
        root = Path(data.get("root", "."))
        if not root.is_absolute():
            root = (base_dir / root).resolve()

        return cls(
            root=root,
            rebuild_allowed=bool(data.get("rebuild_allowed", True)),
            extensions=_normalize_extensions(data.get("extensions")),
            cache_filename=data.get("cache_filename") or DEFAULT_CACHE_FILENAME,
            ignore=[str(p) for p in data.get("ignore") or []],
            keywords=[str(k).lower() for k in data.get("keywords") or DECLARATION_KEYWORDS],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the configuration to a basic dictionary (useful for debugging)."""
        return {
            "root": str(self.root),
            "rebuild_allowed": self.rebuild_allowed,
            "extensions": dict(self.extensions),
            "cache_filename": self.cache_filename,
            "ignore": list(self.ignore),
            "keywords": list(self.keywords),
        }


def load_config(path: Path | str) -> ResolverConfig:
    """
    Read a classmap configuration file.

    Parse errors and documents that are not a mapping raise ValueError so
    callers only have one failure type to handle.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"classmap configuration not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise ValueError(
            f"classmap configuration must be .yaml, .yml or .json, got '{suffix}'"
        )

    raw_text = config_path.read_text()
    try:
        if suffix == ".json":
            data = json.loads(raw_text or "{}")
        else:
            data = yaml.safe_load(raw_text) or {}
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Malformed classmap configuration {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"classmap configuration {config_path} must be a mapping of settings")
    return ResolverConfig.from_dict(data, config_path.parent.resolve())
