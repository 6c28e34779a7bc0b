"""splurge_testify_to_is package.

This initializer is intentionally lightweight: submodules (and with them
the tree-sitter grammar) are imported lazily when a public name is first
accessed, for example ``from splurge_testify_to_is import main``.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

__version__ = "2025.0.1"
__author__ = "Jim Schilling"
__description__ = "Automated testify require/assert to ilius/is migration tool for Go tests"

# Public API names. Submodules are imported lazily when accessed.
__all__ = [
    "main",
    "MigrationOrchestrator",
    "PipelineContext",
    "MigrationConfig",
    "Result",
    "ResultStatus",
    "EventBus",
    "LoggingSubscriber",
    "Step",
    "Task",
    "Job",
    "Pipeline",
    "AssertionMigrationTransformer",
    "Diagnostic",
    "DiagnosticKind",
    # Exceptions
    "MigrationError",
    "ParseError",
    "TransformationError",
    "TransformationValidationError",
    "FormatError",
    "ValidationError",
    "ConfigurationError",
]


def __getattr__(name: str):
    """Lazily import submodules/attributes on demand to avoid circular imports."""
    import importlib

    mapping = {
        "main": "splurge_testify_to_is.main",
        "cli": "splurge_testify_to_is.cli",
        "MigrationOrchestrator": "splurge_testify_to_is.migration_orchestrator",
        "PipelineContext": "splurge_testify_to_is.context",
        "MigrationConfig": "splurge_testify_to_is.context",
        "EventBus": "splurge_testify_to_is.events",
        "LoggingSubscriber": "splurge_testify_to_is.events",
        "Result": "splurge_testify_to_is.result",
        "ResultStatus": "splurge_testify_to_is.result",
        "Job": "splurge_testify_to_is.pipeline",
        "Pipeline": "splurge_testify_to_is.pipeline",
        "Task": "splurge_testify_to_is.pipeline",
        "Step": "splurge_testify_to_is.pipeline",
        "CollectorJob": "splurge_testify_to_is.jobs",
        "FormatterJob": "splurge_testify_to_is.jobs",
        "OutputJob": "splurge_testify_to_is.jobs",
        "AssertionMigrationTransformer": "splurge_testify_to_is.transformers",
        "Diagnostic": "splurge_testify_to_is.diagnostics",
        "DiagnosticKind": "splurge_testify_to_is.diagnostics",
        # Exceptions
        "MigrationError": "splurge_testify_to_is.exceptions",
        "ParseError": "splurge_testify_to_is.exceptions",
        "TransformationError": "splurge_testify_to_is.exceptions",
        "TransformationValidationError": "splurge_testify_to_is.exceptions",
        "FormatError": "splurge_testify_to_is.exceptions",
        "ValidationError": "splurge_testify_to_is.exceptions",
        "ConfigurationError": "splurge_testify_to_is.exceptions",
    }

    if name not in mapping:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = importlib.import_module(mapping[name])

    # 'main' and 'cli' are the modules themselves
    if name in {"main", "cli"}:
        return module
    return getattr(module, name)


def __dir__():
    return sorted(list(globals().keys()) + __all__)
