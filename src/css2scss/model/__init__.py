"""Data model: flat rules, nesting trees and extracted variables."""

from css2scss.model.rule import (
    COMMENT_SELECTOR,
    KEYFRAMES_BLOCK,
    RAW_BLOCK,
    BEMInfo,
    BEMKind,
    Declaration,
    ParsedRule,
    RuleKind,
)
from css2scss.model.tree import MediaTree, NestedRule, flatten, resolve_fragment
from css2scss.model.variable import Category, ExtractedVariable, VariableCandidate

__all__ = [
    "COMMENT_SELECTOR",
    "KEYFRAMES_BLOCK",
    "RAW_BLOCK",
    "BEMInfo",
    "BEMKind",
    "Category",
    "Declaration",
    "ExtractedVariable",
    "MediaTree",
    "NestedRule",
    "ParsedRule",
    "RuleKind",
    "VariableCandidate",
    "flatten",
    "resolve_fragment",
]
