"""Fixed-point integer arithmetic bounded to a 256-bit word.

All amounts, per-second rates and the cumulative-yield integral are plain
integers. Rates and the integral carry a scale of 1e18. Results that leave the
unsigned 256-bit range raise instead of wrapping.
"""

from .errors import ArithmeticOverflow

SCALE = 10 ** 18
SECONDS_PER_YEAR = 31_536_000

WORD_BITS = 256
MAX_WORD = 2 ** WORD_BITS - 1
MAX_WIDE = 2 ** (2 * WORD_BITS) - 1


def _check_word(value: int, op: str) -> int:
    if value < 0 or value > MAX_WORD:
        raise ArithmeticOverflow(op, value)
    return value


def checked_add(a: int, b: int) -> int:
    return _check_word(a + b, "add")


def checked_sub(a: int, b: int) -> int:
    return _check_word(a - b, "sub")


def checked_mul(a: int, b: int) -> int:
    return _check_word(a * b, "mul")


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    Compute floor(a * b / denominator) with a double-width intermediate.

    The product may exceed 256 bits as long as it fits in 512 bits; only the
    final quotient has to fit a word.

    Args:
        a: First factor (word)
        b: Second factor (word)
        denominator: Divisor, must be non-zero

    Returns:
        Floored quotient

    Raises:
        ArithmeticOverflow: If an operand, the product or the quotient is out of range
        ZeroDivisionError: If denominator is zero
    """
    _check_word(a, "mul_div")
    _check_word(b, "mul_div")
    if denominator == 0:
        raise ZeroDivisionError("mul_div denominator is zero")
    product = a * b
    if product > MAX_WIDE:
        raise ArithmeticOverflow("mul_div", product)
    return _check_word(product // denominator, "mul_div")


def annual_to_per_second(rate_per_year: int, seconds_per_year: int = SECONDS_PER_YEAR) -> int:
    """Convert a scaled annual rate to a scaled per-second rate (floor)."""
    _check_word(rate_per_year, "annual_to_per_second")
    return rate_per_year // seconds_per_year


def mul_sub_div(a: int, b: int, c: int, denominator: int) -> int:
    """
    Compute floor((a * b - c) / denominator) with a double-width intermediate.

    Raises:
        ArithmeticOverflow: If the product exceeds 512 bits, the difference is
            negative or the quotient does not fit a word
    """
    _check_word(a, "mul_sub_div")
    _check_word(b, "mul_sub_div")
    _check_word(c, "mul_sub_div")
    if denominator == 0:
        raise ZeroDivisionError("mul_sub_div denominator is zero")
    product = a * b
    if product > MAX_WIDE:
        raise ArithmeticOverflow("mul_sub_div", product)
    difference = product - c
    if difference < 0:
        raise ArithmeticOverflow("mul_sub_div", difference)
    return _check_word(difference // denominator, "mul_sub_div")
