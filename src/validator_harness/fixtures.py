"""Filesystem locations the validator is launched from."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import ConfigurationError, get_harness_settings


@dataclass(frozen=True)
class FixturePaths:
    """Canonical fixtures root and the assets folder inside it."""

    root: Path
    assets: Path


def _canonicalize(path: Path, param_name: str) -> Path:
    try:
        return path.resolve(strict=True)
    except (FileNotFoundError, RuntimeError) as exc:
        raise ConfigurationError.missing_path(param_name, path) from exc


def resolve_fixture_paths(root: Optional[Path] = None, assets_subdir: Optional[str] = None) -> FixturePaths:
    """
    Resolve the fixtures root and its assets folder to absolute paths.

    Both locations must exist; they are resolved once and never change for
    the lifetime of a supervisor.

    Raises:
        ConfigurationError: If either directory is missing
    """
    settings = get_harness_settings()
    fixtures_root = Path(root) if root is not None else settings.fixtures_dir
    subdir = assets_subdir if assets_subdir is not None else settings.assets_subdir

    resolved_root = _canonicalize(fixtures_root, "VALIDATOR_FIXTURES_DIR")
    resolved_assets = _canonicalize(fixtures_root / subdir, "VALIDATOR_ASSETS_SUBDIR")
    return FixturePaths(root=resolved_root, assets=resolved_assets)


__all__ = ["FixturePaths", "resolve_fixture_paths"]
