from __future__ import annotations

from decimal import Decimal

import pytest

from agro.validators import is_valid_cnpj, is_valid_cpf, normalize_document, validate_farm_areas


def test_cpf_check_digits() -> None:
    assert is_valid_cpf("529.982.247-25")
    assert not is_valid_cpf("529.982.247-24")
    assert not is_valid_cpf("111.111.111-11")
    assert not is_valid_cpf("1234")


def test_cnpj_check_digits() -> None:
    assert is_valid_cnpj("11.222.333/0001-81")
    assert not is_valid_cnpj("11.222.333/0001-80")
    assert not is_valid_cnpj("00000000000000")


def test_normalize_document_strips_formatting() -> None:
    assert normalize_document("529.982.247-25") == "52998224725"
    assert normalize_document("11.222.333/0001-81") == "11222333000181"


def test_normalize_document_rejects_invalid_values() -> None:
    with pytest.raises(ValueError, match="valid CPF"):
        normalize_document("123.456.789-00")


def test_validate_farm_areas() -> None:
    validate_farm_areas(Decimal("100"), Decimal("60"), Decimal("40"))

    with pytest.raises(ValueError, match="must not exceed"):
        validate_farm_areas(Decimal("100"), Decimal("60"), Decimal("40.01"))
    with pytest.raises(ValueError, match="positive"):
        validate_farm_areas(Decimal("0"), Decimal("0"), Decimal("0"))
    with pytest.raises(ValueError, match="negative"):
        validate_farm_areas(Decimal("10"), Decimal("-1"), Decimal("0"))
