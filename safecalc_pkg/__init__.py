"""SafeCalc package: safe expression evaluator and scientific math library."""

__all__ = [
    "config",
    "tokenizer",
    "parser",
    "mathlib",
    "calculus",
    "solver",
    "formatting",
    "operations",
    "types",
    "api",
    "cli",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "make_function",
    "calculate",
    "integrate_expr",
    "derivative",
    "sum_series",
    "product_series",
    "validate_expression",
    "format_result",
]
