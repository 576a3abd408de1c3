from __future__ import annotations

import random

import pytest

from contatos.domain.cpf import is_valid_cpf


def _reference_check_digits(nine: str) -> str:
    digits = [int(c) for c in nine]
    for weights_from in (10, 11):
        total = sum(d * w for d, w in zip(digits, range(weights_from, 1, -1)))
        rest = total % 11
        digits.append(0 if rest < 2 else 11 - rest)
    return "".join(str(d) for d in digits[9:])


@pytest.mark.parametrize("cpf", ["11144477735", "12345678909", "52998224725"])
def test_accepts_valid_cpfs(cpf):
    assert is_valid_cpf(cpf) is True


@pytest.mark.parametrize("cpf", ["12345678901", "11144477736", "12345678908"])
def test_rejects_wrong_check_digits(cpf):
    assert is_valid_cpf(cpf) is False


@pytest.mark.parametrize("digit", "0123456789")
def test_rejects_repeated_digits(digit):
    assert is_valid_cpf(digit * 11) is False


@pytest.mark.parametrize(
    "cpf",
    [None, "", "1114447773", "111444777350", "111.444.777-35", "1114447773a", " 11144477735", "١١١٤٤٤٧٧٧٣٥"],
)
def test_rejects_malformed_input(cpf):
    assert is_valid_cpf(cpf) is False


def test_agrees_with_reference_checksum():
    rng = random.Random(20240611)
    for _ in range(500):
        nine = "".join(rng.choice("0123456789") for _ in range(9))
        candidate = nine + _reference_check_digits(nine)
        expected = len(set(candidate)) > 1
        assert is_valid_cpf(candidate) is expected
        wrong_last = candidate[:10] + str((int(candidate[10]) + 1) % 10)
        assert is_valid_cpf(wrong_last) is False
