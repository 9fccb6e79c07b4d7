from decimal import Decimal

import pytest

from oas_contract_verify.failures import ParameterConstraints
from oas_contract_verify.model import SchemaType
from oas_contract_verify.policy import POLICIES, exact_match, relaxed_bounds


def _c(**kwargs) -> ParameterConstraints:
    kwargs.setdefault("type", SchemaType.INTEGER)
    kwargs.setdefault("is_required", False)
    return ParameterConstraints(**kwargs)


class TestExactMatch:
    def test_equal_constraints(self):
        assert exact_match(_c(maximum=Decimal(3)), _c(maximum=Decimal(3))) is True

    def test_larger_maximum_is_still_a_mismatch(self):
        assert exact_match(_c(maximum=Decimal(3)), _c(maximum=Decimal(4))) is False


class TestRelaxedBounds:
    @pytest.mark.parametrize(
        "contract,candidate",
        [
            (_c(), _c()),
            (_c(maximum=Decimal(10)), _c(maximum=Decimal(20))),
            (_c(maximum=Decimal(10)), _c()),
            (_c(max_length=5), _c(max_length=5)),
            (_c(max_length=5), _c()),
            (_c(max_items=3), _c(max_items=0)),
            (_c(max_items=3), _c(max_items=7)),
            (_c(is_required=True), _c(is_required=False)),
        ],
    )
    def test_accepts_looser_candidate(self, contract, candidate):
        assert relaxed_bounds(contract, candidate) is True

    @pytest.mark.parametrize(
        "contract,candidate",
        [
            (_c(type=SchemaType.INTEGER), _c(type=SchemaType.NUMBER)),
            (_c(maximum=Decimal(10)), _c(maximum=Decimal(5))),
            (_c(), _c(maximum=Decimal(5))),
            (_c(max_length=5), _c(max_length=4)),
            (_c(), _c(max_length=4)),
            (_c(max_items=0), _c(max_items=2)),
            (_c(max_items=3), _c(max_items=2)),
            (_c(is_required=False), _c(is_required=True)),
        ],
    )
    def test_rejects_tighter_candidate(self, contract, candidate):
        assert relaxed_bounds(contract, candidate) is False


def test_policy_registry():
    assert POLICIES["exact"] is exact_match
    assert POLICIES["relaxed"] is relaxed_bounds
