# src/mstodo_exporter/config.py

"""Settings for one export run.

Sources, lowest to highest precedence:
- built-in defaults,
- a JSON settings file (appsettings.json in the working directory, optional),
- MSTODO_* environment variables (+ optional .env),
- command line arguments (--key value, --key=value, key=value, /key value).

Keys are matched case-insensitively. A bare boolean flag (--archiveOutput) means true.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "MSTODO"
DEFAULT_SETTINGS_FILE = "appsettings.json"

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}

# public key -> (Settings attribute, kind)
_KEYS: dict[str, tuple[str, str]] = {
    "dbPath": ("db_path", "str"),
    "outputDir": ("output_dir", "str"),
    "clearOutputDirBeforeExport": ("clear_output_dir_before_export", "bool"),
    "archiveOutput": ("archive_output", "bool"),
    "removeOutputDirAfterArchive": ("remove_output_dir_after_archive", "bool"),
    "archiveOutputDirIfExistsBeforeExport": ("archive_output_dir_if_exists_before_export", "bool"),
    "nonInteractive": ("non_interactive", "bool"),
    "logLevel": ("log_level", "str"),
    "logFile": ("log_file", "str"),
}
_BY_LOWER = {k.lower(): k for k in _KEYS}

_DEFAULTS: dict[str, Any] = {
    "dbPath": "",
    "outputDir": "",
    "clearOutputDirBeforeExport": False,
    "archiveOutput": False,
    "removeOutputDirAfterArchive": False,
    "archiveOutputDirIfExistsBeforeExport": False,
    "nonInteractive": False,
    "logLevel": "INFO",
    "logFile": "",
}


def _k(key: str) -> str:
    """dbPath -> MSTODO_DB_PATH"""
    return f"{ENV_PREFIX}_{re.sub(r'(?<!^)(?=[A-Z])', '_', key).upper()}"


def _to_bool(key: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    s = str(raw).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ValueError(f"Invalid boolean value for '{key}': {raw!r}")


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Source / destination ----
    db_path: Path | None
    output_dir: Path | None

    # ---- Switches ----
    clear_output_dir_before_export: bool = False
    archive_output: bool = False
    remove_output_dir_after_archive: bool = False
    archive_output_dir_if_exists_before_export: bool = False
    non_interactive: bool = False

    # ---- Logging ----
    log_level: str = "INFO"
    log_file: Path | None = None

    def validate(self) -> None:
        """Raise ValueError with a user-facing message if the run cannot start."""
        if self.db_path is None or not self.db_path.is_file():
            raise ValueError(
                "Database file not found. Please check the 'dbPath' in appsettings.json "
                "or provide it as a command-line argument."
            )
        if self.output_dir is None:
            raise ValueError(
                "Output directory not specified. Please check the 'outputDir' in appsettings.json "
                "or provide it as a command-line argument."
            )

    @staticmethod
    def from_values(values: Mapping[str, Any]) -> "Settings":
        """Build Settings from raw values keyed by public key (dbPath, archiveOutput, ...)."""
        merged = dict(_DEFAULTS)
        merged.update(values)

        kwargs: dict[str, Any] = {}
        for key, (attr, kind) in _KEYS.items():
            raw = merged[key]
            if kind == "bool":
                kwargs[attr] = _to_bool(key, raw)
            else:
                kwargs[attr] = "" if raw is None else str(raw).strip()

        for attr in ("db_path", "output_dir", "log_file"):
            kwargs[attr] = Path(kwargs[attr]).expanduser() if kwargs[attr] else None
        kwargs["log_level"] = kwargs["log_level"].upper() or "INFO"
        return Settings(**kwargs)


# ---- sources ----

def _canonical(key: str) -> str | None:
    return _BY_LOWER.get(key.strip().lower())


def read_settings_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON object of settings. Unknown keys and nested sections are ignored."""
    path = Path(path)
    try:
        data = json.loads(path.read_text("utf-8-sig"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to read settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")

    out: dict[str, Any] = {}
    for key, value in data.items():
        name = _canonical(str(key))
        if name is not None and not isinstance(value, (dict, list)):
            out[name] = value
    return out


def read_env(environ: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in _KEYS:
        v = environ.get(_k(key))
        if v is not None and v.strip() != "":
            out[key] = v
    return out


def _normalize_argv(argv: Sequence[str]) -> list[str]:
    """Rewrite the accepted argument forms into canonical --key / --key=value tokens."""
    out: list[str] = []
    for tok in argv:
        body, sep, value = tok.partition("=")
        if body.startswith("--"):
            name = _canonical(body[2:])
        elif body.startswith("/"):
            name = _canonical(body[1:])
        elif sep:
            name = _canonical(body)
        else:
            name = None

        if name is None:
            out.append(tok)
        else:
            out.append(f"--{name}{sep}{value}")
    return out


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mstodo-export",
        allow_abbrev=False,
        description="Export To Do tasks from a SQLite database into Markdown files.",
    )
    ap.add_argument("--settings", help=f"JSON settings file (default: ./{DEFAULT_SETTINGS_FILE})")
    for key, (_attr, kind) in _KEYS.items():
        if kind == "bool":
            ap.add_argument(f"--{key}", nargs="?", const="true", default=None, metavar="BOOL")
        else:
            ap.add_argument(f"--{key}", default=None)
    return ap


def read_argv(argv: Sequence[str]) -> tuple[dict[str, Any], str | None]:
    # Unknown arguments are ignored, like unknown keys in the settings file.
    ns, extras = build_arg_parser().parse_known_args(_normalize_argv(argv))
    if extras:
        logger.debug("Ignoring unknown command line arguments: %s", extras)
    out = {key: getattr(ns, key) for key in _KEYS if getattr(ns, key) is not None}
    return out, ns.settings


def load_settings(
    argv: Sequence[str] = (),
    *,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Resolve Settings from every source.

    When `environ` is None the process environment is used and a local .env is loaded first
    (without overriding variables that are already set).
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        environ = os.environ

    cli_values, settings_arg = read_argv(argv)

    explicit = settings_arg or environ.get(f"{ENV_PREFIX}_SETTINGS_FILE") or ""
    file_values: dict[str, Any] = {}
    if explicit.strip():
        file_values = read_settings_file(Path(explicit).expanduser())
    elif Path(DEFAULT_SETTINGS_FILE).is_file():
        file_values = read_settings_file(DEFAULT_SETTINGS_FILE)

    values: dict[str, Any] = {}
    values.update(file_values)
    values.update(read_env(environ))
    values.update(cli_values)
    return Settings.from_values(values)
