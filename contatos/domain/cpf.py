"""Validation of the Brazilian individual taxpayer ID (CPF)."""
from __future__ import annotations

import re

CPF_PATTERN = re.compile(r"[0-9]{11}")


def _check_digit(digits: list[int], first_weight: int) -> int:
    total = sum(d * w for d, w in zip(digits, range(first_weight, 1, -1)))
    value = 11 - (total % 11)
    return 0 if value >= 10 else value


def is_valid_cpf(cpf: str | None) -> bool:
    """Return True when cpf is 11 digits whose two check digits match.

    Sequences of a single repeated digit ("00000000000", "11111111111", ...)
    satisfy the arithmetic but are not issued, so they are rejected.
    """
    if not cpf or not CPF_PATTERN.fullmatch(cpf):
        return False
    if len(set(cpf)) == 1:
        return False
    digits = [int(c) for c in cpf]
    first = _check_digit(digits[:9], 10)
    second = _check_digit(digits[:9] + [first], 11)
    return digits[9] == first and digits[10] == second
