"""Business-rule validators shared by the API schemas and services."""

from __future__ import annotations

import re
from decimal import Decimal

_NON_DIGITS = re.compile(r"\D")


def only_digits(value: str) -> str:
	return _NON_DIGITS.sub("", value)


def _check_digit(digits: list[int], weights: list[int]) -> int:
	remainder = sum(d * w for d, w in zip(digits, weights)) % 11
	return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(value: str) -> bool:
	digits = [int(c) for c in only_digits(value)]
	if len(digits) != 11 or len(set(digits)) == 1:
		return False
	first = _check_digit(digits[:9], list(range(10, 1, -1)))
	second = _check_digit(digits[:10], list(range(11, 1, -1)))
	return digits[9] == first and digits[10] == second


def is_valid_cnpj(value: str) -> bool:
	digits = [int(c) for c in only_digits(value)]
	if len(digits) != 14 or len(set(digits)) == 1:
		return False
	first = _check_digit(digits[:12], [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2])
	second = _check_digit(digits[:13], [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2])
	return digits[12] == first and digits[13] == second


def normalize_document(value: str) -> str:
	"""Strip formatting from a CPF/CNPJ and validate its check digits."""
	digits = only_digits(value)
	if len(digits) == 11 and is_valid_cpf(digits):
		return digits
	if len(digits) == 14 and is_valid_cnpj(digits):
		return digits
	raise ValueError("document must be a valid CPF (11 digits) or CNPJ (14 digits)")


def validate_farm_areas(total: Decimal, arable: Decimal, vegetation: Decimal) -> None:
	if total <= 0:
		raise ValueError("total_area must be positive")
	if arable < 0 or vegetation < 0:
		raise ValueError("arable_area and vegetation_area must not be negative")
	if arable + vegetation > total:
		raise ValueError("arable_area + vegetation_area must not exceed total_area")
