"""
core/ledger/snapshot.py 테스트

스냅샷 격리 및 불변식 점검
"""

import pytest

from core.constants import AmountLimits
from core.ledger.snapshot import LedgerSnapshot, audit_invariants
from core.ledger.token_ledger import TokenLedger


def make_snapshot(**overrides) -> LedgerSnapshot:
    data = {
        "name": "Spawn Token",
        "symbol": "SPN",
        "total_supply": 100,
        "max_supply": 200,
        "balances": {"owner": 60, "user1": 40},
        "allowances": {"owner": {"user1": 10}},
    }
    data.update(overrides)
    return LedgerSnapshot(**data)


class TestLedgerSnapshot:
    """LedgerSnapshot 테스트"""

    def test_snapshot_is_isolated_from_ledger(self) -> None:
        """스냅샷 이후의 변경은 스냅샷에 반영되지 않음"""
        ledger = TokenLedger("Spawn Token", "SPN", 1000)
        ledger.approve("owner", "user1", 100)
        snapshot = ledger.snapshot()

        ledger.transfer("owner", "user1", 200)
        ledger.approve("owner", "user1", 5)

        assert snapshot.balances == {"owner": 1000}
        assert snapshot.allowances == {"owner": {"user1": 100}}

    def test_snapshot_maps_are_read_only(self) -> None:
        """스냅샷의 잔고/허용량 매핑은 수정 불가, Ledger는 그대로"""
        ledger = TokenLedger("Spawn Token", "SPN", 1000)
        ledger.approve("owner", "user1", 100)
        snapshot = ledger.snapshot()

        with pytest.raises(TypeError):
            snapshot.balances["owner"] = 0  # type: ignore[index]
        with pytest.raises(TypeError):
            snapshot.allowances["owner"]["user1"] = 0  # type: ignore[index]
        with pytest.raises(TypeError):
            snapshot.allowances["user9"] = {}  # type: ignore[index]

        assert ledger.balance_of("owner") == 1000
        assert ledger.allowance("owner", "user1") == 100

    def test_constructor_copies_input_maps(self) -> None:
        """생성 시 전달한 딕셔너리를 이후 수정해도 스냅샷은 그대로"""
        balances = {"owner": 60, "user1": 40}
        allowances = {"owner": {"user1": 10}}
        snapshot = make_snapshot(balances=balances, allowances=allowances)

        balances["owner"] = 0
        allowances["owner"]["user1"] = 999

        assert snapshot.balances == {"owner": 60, "user1": 40}
        assert snapshot.allowances == {"owner": {"user1": 10}}

    def test_frozen(self) -> None:
        """불변성 확인"""
        snapshot = make_snapshot()

        with pytest.raises(AttributeError):
            snapshot.total_supply = 1  # type: ignore

    def test_to_dict(self) -> None:
        """직렬화"""
        data = make_snapshot().to_dict()

        assert data == {
            "name": "Spawn Token",
            "symbol": "SPN",
            "total_supply": 100,
            "max_supply": 200,
            "balances": {"owner": 60, "user1": 40},
            "allowances": {"owner": {"user1": 10}},
        }

    def test_balance_sum(self) -> None:
        assert make_snapshot().balance_sum == 100


class TestAuditInvariants:
    """audit_invariants 테스트"""

    def test_healthy(self) -> None:
        """정상 상태"""
        assert audit_invariants(make_snapshot()) == []

    def test_supply_mismatch(self) -> None:
        """총발행량과 잔고 합계 불일치"""
        violations = audit_invariants(make_snapshot(total_supply=150))

        assert len(violations) == 1
        assert "잔고 합계" in violations[0]

    def test_ceiling_breach(self) -> None:
        """최대 발행량 초과"""
        violations = audit_invariants(make_snapshot(max_supply=50))

        assert any("max_supply" in v for v in violations)

    def test_no_ceiling(self) -> None:
        """상한 없으면 상한 점검 생략"""
        assert audit_invariants(make_snapshot(max_supply=None)) == []

    def test_out_of_range_values(self) -> None:
        """음수 잔고, 범위 밖 허용량"""
        violations = audit_invariants(
            make_snapshot(
                total_supply=100,
                balances={"owner": 110, "user1": -10},
                allowances={"owner": {"user1": AmountLimits.U64_MAX + 1}},
            )
        )

        assert any("잔고 범위 오류" in v for v in violations)
        assert any("허용량 범위 오류" in v for v in violations)
