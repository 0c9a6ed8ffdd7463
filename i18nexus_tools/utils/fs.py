# -*- coding: utf-8 -*-
"""Filesystem helpers: glob discovery, ignore globs, atomic writes and diffs."""
from __future__ import annotations

import difflib
import fnmatch
import glob
import hashlib
import logging
import os
import pathlib
import re
import tempfile
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_IGNORES = [
    "**/node_modules/**",
    "**/dist/**",
    "**/.git/**",
    "**/.next/**",
    "**/build/**",
    "**/coverage/**",
]

_BRACE_RE = re.compile(r"\{([^{}]*,[^{}]*)\}")


# ── Discovery ────────────────────────────────────────────────────────────────

def expand_braces(pattern: str) -> List[str]:
    """``src/**/*.{js,ts}`` -> ``["src/**/*.js", "src/**/*.ts"]`` (nested groups too)."""
    m = _BRACE_RE.search(pattern)
    if not m:
        return [pattern]
    out: List[str] = []
    for option in m.group(1).split(","):
        for expanded in expand_braces(pattern[: m.start()] + option + pattern[m.end():]):
            if expanded not in out:
                out.append(expanded)
    return out


def is_ignored(base: pathlib.Path, path: pathlib.Path, ignore_globs: List[str]) -> bool:
    if not ignore_globs:
        return False
    try:
        rel = str(path.resolve().relative_to(base.resolve())).replace("\\", "/")
    except ValueError:
        rel = str(path).replace("\\", "/")
    # "**/x/**" should also match "x/..." at the top level
    return any(
        fnmatch.fnmatch(rel, pat) or (pat.startswith("**/") and fnmatch.fnmatch(rel, pat[3:]))
        for pat in ignore_globs
    )


def discover_files(
    pattern: str,
    base: Optional[pathlib.Path] = None,
    ignore_globs: Optional[List[str]] = None,
) -> List[pathlib.Path]:
    """Files matching ``pattern`` (relative to ``base``), sorted and de-duplicated."""
    base = base or pathlib.Path.cwd()
    found = set()
    for pat in expand_braces(pattern):
        full = pat if os.path.isabs(pat) else str(base / pat)
        for name in glob.glob(full, recursive=True):
            p = pathlib.Path(name)
            if p.is_file():
                found.add(p)
    files = sorted(found)
    if ignore_globs:
        files = [p for p in files if not is_ignored(base, p, ignore_globs)]
    return files


# ── Writes ───────────────────────────────────────────────────────────────────

def atomic_write(path: pathlib.Path, data: str) -> None:
    """Atomically write ``data`` to ``path``.

    This function writes to a temporary file in the same directory, fsyncs,
    then replaces the target. If the target exists, its permissions are
    preserved when possible. Line endings are written exactly as given.
    """
    tmp_dir = path.parent
    tmp_dir.mkdir(parents=True, exist_ok=True)
    orig_mode = None
    try:
        orig_mode = path.stat().st_mode & 0o777
    except OSError:
        orig_mode = None

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile("w", delete=False, dir=tmp_dir, encoding="utf-8", newline="") as tf:
            tmp_name = tf.name
            tf.write(data)
            tf.flush()
            os.fsync(tf.fileno())
        os.replace(tmp_name, str(path))
        tmp_name = None
        if orig_mode is not None:
            try:
                os.chmod(str(path), orig_mode)
            except OSError:
                logger.debug("Failed to chmod %s", path)
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


def backup_path(path: pathlib.Path, text: str) -> pathlib.Path:
    digest = hashlib.sha1(text.encode("utf-8")).hexdigest()[:8]
    return path.with_name(f"{path.name}.{digest}.bak")


def unified_diff(a: str, b: str, path: pathlib.Path) -> str:
    return "".join(
        difflib.unified_diff(
            a.splitlines(keepends=True),
            b.splitlines(keepends=True),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
        )
    )


def read_source(path: pathlib.Path) -> str:
    """UTF-8 text with line endings untouched."""
    return path.read_bytes().decode("utf-8")
