"""Rewrite one Go test file from the legacy assertion library to the helper API.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from ..context import MigrationConfig
from ..diagnostics import Diagnostic, DiagnosticCollector
from ..golang.source import GoSourceFile
from .block_rewriter import BlockRewriter
from .call_classifier import CallClassifier
from .call_synthesizer import CallSynthesizer
from .import_transformer import ImportEditor
from .scope_initializer import ScopeInitializer
from .test_function_locator import locate_test_functions

logger = logging.getLogger(__name__)


@dataclass
class TransformReport:
    """What the rewrite of one file did."""

    source_file: str
    functions: int = 0
    conversions: int = 0
    declarations_inserted: int = 0
    imports_removed: list[str] = field(default_factory=list)
    imports_added: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def statistics(self) -> dict[str, Any]:
        return {
            "functions": self.functions,
            "conversions": self.conversions,
            "declarations_inserted": self.declarations_inserted,
            "imports_removed": len(self.imports_removed),
            "imports_added": len(self.imports_added),
            "diagnostics": len(self.diagnostics),
        }


class AssertionMigrationTransformer:
    """Register every edit needed to migrate ``source`` to the helper API.

    Edits are only registered; call :meth:`GoSourceFile.render` to obtain
    the new text.
    """

    def __init__(self, config: MigrationConfig | None = None) -> None:
        self.config = config or MigrationConfig()

    def transform(self, source: GoSourceFile) -> TransformReport:
        config = self.config
        imports = ImportEditor(source, config.legacy_import_prefix)
        aliases = set(config.legacy_aliases) | imports.legacy_aliases()
        aliases.discard(config.helper_name)

        diagnostics = DiagnosticCollector(source.source_file)
        rewriter = BlockRewriter(
            source,
            CallClassifier(source, config.helper_name, aliases),
            CallSynthesizer(config.helper_name),
            ScopeInitializer(config.helper_name, config.helper_constructor),
            diagnostics,
        )

        functions = locate_test_functions(source, config.testing_context_type)
        for function in functions:
            rewriter.rewrite_function(function)

        required: list[str] = []
        if rewriter.conversions or imports.legacy_specs:
            required.append(config.helper_import_path)
        if rewriter.requires_fmt:
            required.append("fmt")
        imports.apply(required, {config.helper_import_path: config.helper_name, "fmt": "fmt"})

        report = TransformReport(
            source_file=source.source_file,
            functions=len(functions),
            conversions=rewriter.conversions,
            declarations_inserted=rewriter.declarations_inserted,
            imports_removed=[spec.path for spec in imports.removed],
            imports_added=list(imports.added),
            diagnostics=diagnostics.diagnostics,
        )
        logger.debug(f"Transformed {source.source_file}: {report.statistics()}")
        return report
