"""Kubernetes resource quantities.

Parses quantity strings such as "500m", "2", "128Mi" or "1e3" and renders
them back in the compact canonical form kubectl prints.

Formats:
    DecimalSI       - no suffix or one of n, u, m, k, M, G, T, P, E
    BinarySI        - Ki, Mi, Gi, Ti, Pi, Ei
    DecimalExponent - e<exp> / E<exp>
"""

import re
from dataclasses import dataclass, field
from decimal import ROUND_CEILING, ROUND_UP, Context as DecimalContext, Decimal, DecimalException

DECIMAL_SI = "DecimalSI"
BINARY_SI = "BinarySI"
DECIMAL_EXPONENT = "DecimalExponent"

DECIMAL_SUFFIXES = {
    "n": -9,
    "u": -6,
    "m": -3,
    "": 0,
    "k": 3,
    "M": 6,
    "G": 9,
    "T": 12,
    "P": 15,
    "E": 18,
}
BINARY_SUFFIXES = {
    "Ki": 10,
    "Mi": 20,
    "Gi": 30,
    "Ti": 40,
    "Pi": 50,
    "Ei": 60,
}

_EXPONENT_TO_SUFFIX = {exp: suffix for suffix, exp in DECIMAL_SUFFIXES.items()}
_POWER_TO_BINARY = {power: suffix for suffix, power in BINARY_SUFFIXES.items()}

_QUANTITY_RE = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+))(.*)$")
_EXPONENT_RE = re.compile(r"^[eE]([+-]?\d+)$")

# Wide enough for exabyte amounts at nano precision
_DECIMAL_CONTEXT = DecimalContext(prec=80)
_NANO = Decimal("1e-9")


class QuantityError(ValueError):
    """Quantity string could not be parsed."""

    pass


@dataclass(frozen=True)
class Quantity:
    """An immutable resource amount with the format it was written in."""

    amount: Decimal
    format: str = field(default=DECIMAL_SI, compare=False)

    def is_zero(self) -> bool:
        """True if the amount is zero."""
        return self.amount == 0

    def milli_value(self) -> int:
        """Amount in milli-units, rounded up."""
        scaled = _DECIMAL_CONTEXT.multiply(self.amount, Decimal(1000))
        return int(scaled.to_integral_value(rounding=ROUND_CEILING))

    def value(self) -> int:
        """Amount in whole units, rounded up."""
        return int(self.amount.to_integral_value(rounding=ROUND_CEILING))

    def __str__(self) -> str:
        return format_quantity(self)


ZERO = Quantity(Decimal(0))


def parse_quantity(text) -> Quantity:
    """
    Parse a quantity string.

    Args:
        text: Quantity as written in a pod spec (e.g. "500m", "1Gi").
            Bare ints and floats are accepted as unit counts.

    Returns:
        Quantity rounded up to nano precision

    Raises:
        QuantityError: If text is not a valid quantity
    """
    if isinstance(text, bool) or not isinstance(text, (str, int, float)):
        raise QuantityError(f"invalid quantity: {text!r}")

    raw = str(text).strip()
    match = _QUANTITY_RE.match(raw)
    if not match:
        raise QuantityError(f"invalid quantity: {text!r}")

    number, suffix = match.groups()
    mantissa = Decimal(number)
    exp_match = _EXPONENT_RE.match(suffix)

    try:
        if suffix in BINARY_SUFFIXES:
            fmt = BINARY_SI
            amount = _DECIMAL_CONTEXT.multiply(mantissa, Decimal(2 ** BINARY_SUFFIXES[suffix]))
        elif suffix in DECIMAL_SUFFIXES:
            fmt = DECIMAL_SI
            amount = _DECIMAL_CONTEXT.scaleb(mantissa, DECIMAL_SUFFIXES[suffix])
        elif exp_match:
            fmt = DECIMAL_EXPONENT
            amount = _DECIMAL_CONTEXT.scaleb(mantissa, int(exp_match.group(1)))
        else:
            raise QuantityError(f"invalid quantity suffix {suffix!r} in {text!r}")

        amount = amount.quantize(_NANO, rounding=ROUND_UP, context=_DECIMAL_CONTEXT)
    except DecimalException as e:
        raise QuantityError(f"quantity out of range: {text!r}") from e
    return Quantity(amount, fmt)


def _decimal_parts(amount: Decimal) -> tuple[int, int]:
    """Split a non-zero amount into (mantissa, exponent) with exponent a multiple of 3."""
    sign, digits, exponent = amount.normalize(_DECIMAL_CONTEXT).as_tuple()
    mantissa = int("".join(str(d) for d in digits))

    target = (exponent // 3) * 3
    if target > 18:
        target = 18
    mantissa *= 10 ** (exponent - target)
    return (-mantissa if sign else mantissa), target


def _binary_parts(amount: Decimal) -> tuple[int, int]:
    """Split an integral amount into (mantissa, power) with power a multiple of 10."""
    mantissa = int(amount)
    power = 0
    while power < 60 and mantissa % 1024 == 0:
        mantissa //= 1024
        power += 10
    return mantissa, power


def format_quantity(quantity: Quantity) -> str:
    """
    Render a quantity in canonical compact form.

    Binary amounts that are not whole or sit strictly between -1024 and 1024
    fall back to decimal rendering so no precision is lost.
    """
    amount = quantity.amount
    if amount == 0:
        return "0"

    fmt = quantity.format
    if fmt == BINARY_SI:
        if -1024 < amount < 1024 or amount != amount.to_integral_value():
            fmt = DECIMAL_SI

    if fmt == BINARY_SI:
        mantissa, power = _binary_parts(amount)
        return f"{mantissa}{_POWER_TO_BINARY.get(power, '')}"

    mantissa, exponent = _decimal_parts(amount)
    if fmt == DECIMAL_EXPONENT:
        return f"{mantissa}e{exponent}" if exponent else str(mantissa)
    return f"{mantissa}{_EXPONENT_TO_SUFFIX[exponent]}"
