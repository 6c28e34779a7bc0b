"""Source transformations for migrating legacy assertion calls.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .assertion_transformer import AssertionMigrationTransformer, TransformReport
from .call_classifier import CallClassification, CallClassifier, CallKind
from .call_synthesizer import MANUAL_MIGRATION, SYNTHESIS_RULES, CallSynthesizer, SynthesisRule, SynthesizedCall
from .import_transformer import ImportEditor, ImportSpec
from .scope_initializer import ScopeInitializer
from .test_function_locator import CandidateFunction, locate_test_functions

__all__ = [
    "AssertionMigrationTransformer",
    "CallClassification",
    "CallClassifier",
    "CallKind",
    "CallSynthesizer",
    "CandidateFunction",
    "ImportEditor",
    "ImportSpec",
    "MANUAL_MIGRATION",
    "SYNTHESIS_RULES",
    "ScopeInitializer",
    "SynthesisRule",
    "SynthesizedCall",
    "TransformReport",
    "locate_test_functions",
]
