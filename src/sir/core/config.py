from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from sir.core.models import ParseOptions

# Python 3.11+ has tomllib; for 3.9/3.10 use tomli
try:
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


CONFIG_ENV_VAR = "SIR_CONFIG"

# Project-local config, searched upward from the start directory
PROJECT_CONFIG_FILE = ".sir/config.toml"

# Machine-wide config, first existing one wins
GLOBAL_CONFIG_FILES = (
    "~/.config/sir/config.toml",
    "~/.sir/config.toml",
)

DEFAULT_CONFIG_TOML = """\
# sir parse defaults. Command-line flags override these.
[parse]
ignore_empty_values = false
override_duplicate_keys = false
disable_quotes = false
disable_hash_comments = false
disable_colon_assignment = false
disable_comment_anywhere = false
disable_case_sensitivity = false
disable_errors = false
disable_warnings = false
global_section_name = "global"
"""


def read_toml(path: Path) -> Dict[str, Any]:
    data = tomllib.loads(path.read_text(encoding="utf-8", errors="replace"))
    if not isinstance(data, dict):
        return {}
    return data


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge override into base (dict-only). Lists/scalars are replaced.
    """
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def find_project_config(start_dir: Path) -> Optional[Path]:
    """Closest `.sir/config.toml` in `start_dir` or any of its parents."""
    cur = start_dir.resolve()
    if cur.is_file():
        cur = cur.parent
    for parent in [cur, *cur.parents]:
        p = parent / PROJECT_CONFIG_FILE
        if p.is_file():
            return p
    return None


def find_global_config() -> Optional[Path]:
    """$SIR_CONFIG if set, else the first existing per-user config file."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        p = Path(env).expanduser()
        return p if p.is_file() else None
    for raw in GLOBAL_CONFIG_FILES:
        p = Path(raw).expanduser()
        if p.is_file():
            return p
    return None


@dataclass(frozen=True)
class LoadedConfig:
    options: ParseOptions
    global_path: Optional[Path]
    project_path: Optional[Path]

    @property
    def sources(self) -> List[Path]:
        return [p for p in (self.global_path, self.project_path) if p is not None]


def load_parse_options(
    start_dir: Path,
    cli_overrides: Optional[Mapping[str, Any]] = None,
) -> LoadedConfig:
    """
    Resolve the effective ParseOptions.

    Precedence (lowest -> highest):
      defaults (ParseOptions) ->
      global config ->
      project config (closest) ->
      cli_overrides (same shape as the TOML, i.e. {"parse": {...}})
    """
    global_path = find_global_config()
    project_path = find_project_config(start_dir)

    merged: Dict[str, Any] = {}
    for path in (global_path, project_path):
        if path is not None:
            merged = deep_merge(merged, read_toml(path))
    merged = deep_merge(merged, cli_overrides or {})

    table = merged.get("parse") or {}
    if not isinstance(table, dict):
        table = {}

    return LoadedConfig(
        options=ParseOptions.model_validate(table),
        global_path=global_path,
        project_path=project_path,
    )
