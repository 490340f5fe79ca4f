"""
Field coercion policies and number readers.
"""

from .policy import CoercionPolicy, Number, coerce_field, parse_number, to_number, to_year

__all__ = [
    "CoercionPolicy",
    "Number",
    "coerce_field",
    "parse_number",
    "to_number",
    "to_year",
]
