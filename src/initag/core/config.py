from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from initag.core.models import Settings

# Python 3.11+ has tomllib; for 3.10 use tomli
try:
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


# Repo-local config (closest one in the parent chain wins)
DEFAULT_REPO_CONFIG_FILES = (".initag/config.toml",)

# Global config (applies on this machine for every run)
DEFAULT_GLOBAL_CONFIG_FILES = (
    "~/.config/initag/config.toml",
    "~/.initag/config.toml",
)


def _read_toml(path: Path) -> Dict[str, Any]:
    data = tomllib.loads(path.read_text(encoding="utf-8", errors="replace"))
    if not isinstance(data, dict):
        return {}
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge override into base (dict-only). Scalars are replaced.
    """
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)  # type: ignore[arg-type]
        else:
            out[k] = v
    return out


def find_repo_config(start_dir: Path) -> Optional[Path]:
    cur = start_dir.resolve()
    for parent in [cur, *cur.parents]:
        for rel in DEFAULT_REPO_CONFIG_FILES:
            p = parent / rel
            if p.is_file():
                return p
    return None


def find_global_config() -> Optional[Path]:
    for raw in DEFAULT_GLOBAL_CONFIG_FILES:
        p = Path(raw).expanduser()
        if p.is_file():
            return p
    return None


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    global_path: Optional[Path]
    repo_path: Optional[Path]


def load_settings(
    start_dir: Path,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> LoadedSettings:
    """
    Precedence (lowest -> highest):
      defaults (Settings) ->
      global config ->
      repo config (closest) ->
      cli_overrides
    """
    cli_overrides = cli_overrides or {}

    global_path = find_global_config()
    repo_path = find_repo_config(start_dir)

    merged: Dict[str, Any] = {}
    if global_path:
        merged = _deep_merge(merged, _read_toml(global_path))
    if repo_path:
        merged = _deep_merge(merged, _read_toml(repo_path))

    # CLI overrides use the same namespaced shape as the TOML files; None means "not given"
    overrides = {
        section: {k: v for k, v in values.items() if v is not None}
        for section, values in cli_overrides.items()
        if isinstance(values, dict)
    }
    merged = _deep_merge(merged, overrides)

    settings = Settings.model_validate(
        {k: v for k, v in merged.items() if k in Settings.model_fields and isinstance(v, dict)}
    )
    return LoadedSettings(settings=settings, global_path=global_path, repo_path=repo_path)
