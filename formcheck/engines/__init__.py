from formcheck.engines.validator import StringRuleOptions, ValidationEngine

__all__ = [
    "StringRuleOptions",
    "ValidationEngine",
]
