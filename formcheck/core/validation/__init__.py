"""Field Validation Building Blocks

Values, coercion, email checks and message texts used by the engine.

Usage:
    from formcheck.core.validation import ValueMap, coerce_int

    values = ValueMap({"age": "42"})
    match coerce_int("age", values["age"]):
        case Ok(age):
            values["age"] = age
        case Err(error):
            ...
"""
from . import messages
from .email import DnsMxResolver, MxResolver, domain_of, has_valid_grammar
from .values import (
    CoercionRule,
    Scalar,
    StringToFloat,
    StringToInt,
    ValueMap,
    coerce_float,
    coerce_int,
    is_blank,
    is_empty,
)

__all__ = [
    "messages",
    "DnsMxResolver",
    "MxResolver",
    "domain_of",
    "has_valid_grammar",
    "CoercionRule",
    "Scalar",
    "StringToFloat",
    "StringToInt",
    "ValueMap",
    "coerce_float",
    "coerce_int",
    "is_blank",
    "is_empty",
]
