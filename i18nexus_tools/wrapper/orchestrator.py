# -*- coding: utf-8 -*-
"""
File orchestrator for the translation wrapper.

Per file: read -> parse -> walk (classify + rewrite literals inside components)
-> inject bindings into modified components -> finalize imports/directive ->
print -> write (or only report, in dry-run). A failure in one file is logged
and the run moves on to the next file.

Usage
-----
from i18nexus_tools.utils.config import resolve_transform_config
from i18nexus_tools.wrapper.orchestrator import TranslationWrapper

wrapper = TranslationWrapper(resolve_transform_config(mode="client", dry_run=True))
result = wrapper.process_files()
result.processed_files  # ["src/App.tsx", ...]
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging
import os
import pathlib
import time
from typing import Any, List, Optional, Tuple

from ..errors import ParseFailure, WriteFailure
from ..perf import PerformanceMonitor, completion_report
from ..syntax.backends import get_backend
from ..syntax.tree import SKIP, Node, SyntaxTree, rewrite
from ..utils.config import TransformConfig
from ..utils.fs import atomic_write, backup_path, discover_files, read_source, unified_diff
from .classifier import (
    JSX_TEXT,
    STRING,
    TEMPLATE,
    Literal,
    is_excluded,
    is_translatable,
    jsx_text_value,
    string_value,
    template_parts,
)
from .components import ComponentContext, function_name, is_component_like, is_function, is_server_bound
from .constants import JSX_TEXT_TYPES, TYPE_CONTEXT_TYPES
from .finalizer import finalize_module
from .injector import CLIENT, SERVER, inject_binding
from .rewriter import rewrite_literal

logger = logging.getLogger(__name__)

_SKIPPED_SUBTREES = frozenset({"comment", "import_statement", "regex"}) | TYPE_CONTEXT_TYPES


@dataclasses.dataclass
class FileState:
    """Explicit accumulator for one pass over one file."""

    modified: bool = False
    components: List[ComponentContext] = dataclasses.field(default_factory=list)
    literals: int = 0


@dataclasses.dataclass
class TransformResult:
    code: str
    modified: bool
    components: List[ComponentContext]
    used_client: bool = False
    used_server: bool = False
    changes: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class RunResult:
    processed_files: List[str] = dataclasses.field(default_factory=list)
    failed_files: List[str] = dataclasses.field(default_factory=list)
    timings: List[Tuple[str, float]] = dataclasses.field(default_factory=list)
    diffs: List[str] = dataclasses.field(default_factory=list)
    total_ms: float = 0.0


class FileTransformer:
    """Walks one tree, rewriting literals and collecting component contexts."""

    def __init__(self, tree: SyntaxTree, config: TransformConfig) -> None:
        self.tree = tree
        self.config = config
        self.pattern = config.target_pattern
        self.state = FileState()

    # ── Walk ────────────────────────────────────────────────────────────────

    def visit(self, node: Node, ctx: Optional[ComponentContext]) -> Tuple[Any, Any]:
        if node.type in _SKIPPED_SUBTREES:
            return SKIP, ctx
        if is_function(node):
            name = function_name(node)
            if is_component_like(name):
                component = ComponentContext(
                    name=name,
                    node=node,
                    server_bound=is_server_bound(node, self.config.server_function),
                )
                self.state.components.append(component)
                return None, component
            return None, ctx
        if ctx is None:
            return None, ctx
        if node.type == "string":
            return self._visit_string(node, ctx), ctx
        if node.type == "template_string":
            return self._visit_template(node, ctx), ctx
        if node.type in JSX_TEXT_TYPES:
            return self._visit_jsx_text(node, ctx), ctx
        return None, ctx

    def _excluded(self, node: Node) -> bool:
        return is_excluded(node, self.tree.lines, self.config.translation_function)

    def _literal(self, kind: str, text: str, nodes: List[Node], ctx: ComponentContext, **kw: Any) -> Literal:
        first = nodes[0]
        return Literal(kind, text, nodes, row=first.start_row, column=first.start_col, context=ctx, **kw)

    def _apply(self, literal: Literal) -> Node:
        self.state.literals += 1
        logger.debug(
            "Wrapping %s at %s:%s in %s",
            literal.kind,
            (literal.row or 0) + 1,
            literal.column,
            literal.context.name if literal.context else "-",
        )
        return rewrite_literal(literal, self.state, self.config.translation_function)

    def _visit_string(self, node: Node, ctx: ComponentContext):
        value = string_value(node)
        if not is_translatable(value, self.pattern) or self._excluded(node):
            return SKIP
        return self._apply(self._literal(STRING, value, [node], ctx))

    def _visit_template(self, node: Node, ctx: ComponentContext):
        quasis, exprs = template_parts(node)
        if not is_translatable(quasis, self.pattern) or self._excluded(node):
            return None
        literal = self._literal(TEMPLATE, "".join(quasis), [node], ctx, quasis=quasis, expressions=exprs)
        return self._apply(literal)

    def _visit_jsx_text(self, node: Node, ctx: ComponentContext):
        prev = node.prev_sibling
        if prev is not None and prev.type in JSX_TEXT_TYPES:
            return SKIP
        run = [node]
        sib = node.next_sibling
        while sib is not None and sib.type in JSX_TEXT_TYPES:
            run.append(sib)
            sib = sib.next_sibling
        value = jsx_text_value(run)
        if not is_translatable(value, self.pattern) or self._excluded(node):
            return SKIP
        return self._apply(self._literal(JSX_TEXT, value, run, ctx))

    # ── Pass ────────────────────────────────────────────────────────────────

    def run(self) -> TransformResult:
        cfg = self.config
        rewrite(self.tree.root, self.visit, None)

        used_client = used_server = False
        injected: List[Node] = []
        for component in self.state.components:
            if not component.modified:
                continue
            strategy = inject_binding(
                self.tree,
                component,
                mode=cfg.mode,
                client_hook=cfg.client_hook,
                server_function=cfg.server_function,
                translation_function=cfg.translation_function,
                injected=injected,
            )
            if strategy is None:
                continue
            injected.append(component.node)
            used_client = used_client or strategy == CLIENT
            used_server = used_server or strategy == SERVER

        changes: List[str] = []
        if self.state.modified:
            changes = finalize_module(
                self.tree,
                used_client=used_client,
                used_server=used_server,
                client_hook=cfg.client_hook,
                server_function=cfg.server_function,
                import_source=cfg.translation_import_source,
                server_import_source=cfg.server_source,
                mode=cfg.mode,
                framework=cfg.framework,
            )
        return TransformResult(
            code=self.tree.print(),
            modified=self.state.modified,
            components=self.state.components,
            used_client=used_client,
            used_server=used_server,
            changes=changes,
        )


class TranslationWrapper:
    """Drives the transformation over every file matched by the source pattern."""

    def __init__(
        self,
        config: TransformConfig,
        backend=None,
        monitor: Optional[PerformanceMonitor] = None,
        base: Optional[pathlib.Path] = None,
    ) -> None:
        self.config = config
        self.backend = backend or get_backend(config.parser_type)
        self.monitor = monitor or PerformanceMonitor(
            enabled=config.enable_performance_monitoring,
            verbose=config.verbose_performance,
        )
        self.base = base or pathlib.Path.cwd()

    def transform_code(self, code: str, path: Optional[str] = None) -> TransformResult:
        with self.monitor.measure("parse", file=path):
            tree = self.backend.parse(code, path=path)
        with self.monitor.measure("transform", file=path) as meta:
            result = FileTransformer(tree, self.config).run()
            meta["modified"] = result.modified
        return result

    def _display(self, path: pathlib.Path) -> str:
        try:
            return os.path.relpath(str(path), str(self.base))
        except ValueError:
            return str(path)

    def process_file(self, path: pathlib.Path) -> Tuple[bool, Optional[str]]:
        """Transform one file. Returns ``(changed, diff)``; raises per-file errors."""
        cfg = self.config
        if path.is_symlink():
            logger.warning("Skipping symlink: %s", path)
            return False, None
        if cfg.max_file_size and path.stat().st_size > cfg.max_file_size:
            logger.warning("Skipping large file (> %d bytes): %s", cfg.max_file_size, path)
            return False, None

        code = read_source(path)
        result = self.transform_code(code, path=str(path))
        if not result.modified or result.code == code:
            return False, None

        diff = unified_diff(code, result.code, pathlib.Path(self._display(path))) if cfg.emit_diff else None
        if cfg.dry_run:
            return True, diff

        with self.monitor.measure("write", file=str(path)):
            try:
                if cfg.backup:
                    atomic_write(backup_path(path, code), code)
                atomic_write(path, result.code)
            except OSError as e:
                raise WriteFailure(str(path), str(e)) from e
        return True, diff

    def process_files(self) -> RunResult:
        cfg = self.config
        started = time.perf_counter()
        result = RunResult()
        files = discover_files(cfg.source_pattern, self.base, list(cfg.ignore_globs))
        if not files:
            logger.warning("No files found matching pattern: %s", cfg.source_pattern)
        logger.info("Found %d files matching %s", len(files), cfg.source_pattern)

        for path in files:
            shown = self._display(path)
            file_started = time.perf_counter()
            try:
                changed, diff = self.process_file(path)
            except (ParseFailure, WriteFailure, UnicodeDecodeError, OSError) as e:
                logger.error("Error processing %s: %s", shown, e)
                result.failed_files.append(shown)
                continue
            finally:
                result.timings.append((shown, (time.perf_counter() - file_started) * 1000.0))
            if changed:
                result.processed_files.append(shown)
                print(f"{'Would be modified' if cfg.dry_run else 'Modified'}: {shown}")
            if diff:
                result.diffs.append(diff)

        result.total_ms = (time.perf_counter() - started) * 1000.0
        self.monitor.flush()
        return result

    def report(self, result: RunResult) -> str:
        return completion_report(result.total_ms, result.timings, len(result.processed_files))


async def run_translation_wrapper(
    config: TransformConfig,
    backend=None,
    monitor: Optional[PerformanceMonitor] = None,
    base: Optional[pathlib.Path] = None,
) -> RunResult:
    """Run the whole batch off the event loop; files are still handled one at a time."""
    wrapper = TranslationWrapper(config, backend=backend, monitor=monitor, base=base)
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, wrapper.process_files)
    print(wrapper.report(result))
    return result
