"""Spell out money amounts in English."""

from decimal import InvalidOperation

from invoice_engine.app.schemas.invoice import to_money

ONES = [
    "Zero", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]
SCALES = [
    (10**12, "Trillion"),
    (10**9, "Billion"),
    (10**6, "Million"),
    (10**3, "Thousand"),
]


def _below_thousand(number: int) -> str:
    words = []
    if number >= 100:
        words.append(f"{ONES[number // 100]} Hundred")
        number %= 100
    if number >= 20:
        tens = TENS[number // 10]
        words.append(f"{tens}-{ONES[number % 10]}" if number % 10 else tens)
    elif number > 0:
        words.append(ONES[number])
    return " ".join(words)


def integer_to_words(number: int) -> str:
    if number == 0:
        return ONES[0]
    parts = []
    for scale, name in SCALES:
        if number >= scale:
            parts.append(f"{integer_to_words(number // scale)} {name}")
            number %= scale
    if number:
        parts.append(_below_thousand(number))
    return " ".join(parts)


def amount_in_words(amount, currency: str = "USD") -> str:
    """e.g. ``130.50`` -> ``"One Hundred Thirty USD and Fifty Cents only"``."""
    try:
        value = to_money(amount)
    except (InvalidOperation, ValueError):
        return f"{amount} {currency} only"

    prefix = ""
    if value < 0:
        prefix = "Minus "
        value = -value
    whole = int(value)
    cents = int((value - whole) * 100)

    text = f"{prefix}{integer_to_words(whole)} {currency}"
    if cents:
        text += f" and {integer_to_words(cents)} {'Cent' if cents == 1 else 'Cents'}"
    return f"{text} only"
