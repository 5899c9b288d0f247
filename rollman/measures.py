"""
Length/weight measures: parsing and precision rules.

Rolls store measures as DecimalField(max_digits=9, decimal_places=3):
at most 6 digits before the point and 3 after it.
"""

from decimal import Decimal, InvalidOperation

from rollman.conf import rollman_settings
from rollman.exceptions import InvalidInput


def to_decimal(value) -> Decimal | None:
    """Coerce ints, strings and floats to Decimal. None if not a number."""
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None


def measure_problem(value: Decimal) -> str | None:
    """Describe what is wrong with a measure, or None if it is acceptable."""
    if not value.is_finite():
        return 'must be a finite number'
    if value <= 0:
        return 'must be greater than 0'

    max_int = rollman_settings.MAX_INTEGER_DIGITS
    max_frac = rollman_settings.MAX_DECIMAL_PLACES
    _, digits, exponent = value.as_tuple()
    fraction_digits = max(0, -exponent)
    integer_digits = max(0, len(digits) + exponent)
    if integer_digits > max_int or fraction_digits > max_frac:
        return f'at most {max_int} digits before and {max_frac} after the point'
    return None


def parse_measure(value, field: str) -> Decimal:
    """
    Validate a length or weight given at creation.

    Raises:
        InvalidInput: If missing, not a number, not positive or too precise
    """
    if value is None:
        raise InvalidInput(
            message=f'{field.capitalize()} is required',
            errors={field: 'required'},
        )

    number = to_decimal(value)
    if number is None:
        raise InvalidInput(
            message=f'{field.capitalize()} must be a number',
            errors={field: 'not a number'},
            value=str(value),
        )

    problem = measure_problem(number)
    if problem:
        raise InvalidInput(
            message=f'{field.capitalize()} {problem}',
            errors={field: problem},
            value=number,
        )
    return number
