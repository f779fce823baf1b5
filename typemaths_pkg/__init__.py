"""TypeMaths package: parser combinators, expression grammar, calculus and numerical analysis."""

__all__ = [
    "api",
    "cli",
    "combinators",
    "config",
    "differential",
    "docgen",
    "expression",
    "generators",
    "handlers",
    "logging_config",
    "numerical_analysis",
    "parsing",
    "tokenizer",
    "types",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "differentiate",
    "derivative_at",
    "find_root",
    "validate_expression",
]
