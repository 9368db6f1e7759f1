"""
u64 금액 연산 유틸리티

Python int는 무한 정밀도이므로 고정폭 정수의 범위 검사를 명시적으로 수행.
오버플로/언더플로는 절대 wrap 하지 않는다.
"""

from core.constants import AmountLimits
from core.ledger.errors import InvalidAmountError, LedgerError, SupplyOverflowError


def is_u64(value: object) -> bool:
    """u64 범위의 정수인지 확인 (bool 제외)"""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and AmountLimits.MIN_AMOUNT <= value <= AmountLimits.U64_MAX
    )


def require_amount(value: object, field: str = "amount") -> int:
    """금액 인자 검증

    Args:
        value: 검증할 값
        field: 오류 메시지에 표시할 인자 이름

    Returns:
        검증된 금액

    Raises:
        InvalidAmountError: 정수가 아니거나 [0, U64_MAX] 범위를 벗어난 경우
    """
    if not is_u64(value):
        raise InvalidAmountError(
            f"{field}은(는) 0 이상 {AmountLimits.U64_MAX} 이하의 정수여야 합니다: {value!r}"
        )
    return value  # type: ignore[return-value]


def checked_add(a: int, b: int) -> int:
    """오버플로 검사 덧셈

    Raises:
        SupplyOverflowError: 결과가 U64_MAX를 넘는 경우
    """
    result = a + b
    if result > AmountLimits.U64_MAX:
        raise SupplyOverflowError(f"u64 오버플로: {a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    """언더플로 검사 뺄셈

    Raises:
        LedgerError: 결과가 음수가 되는 경우
    """
    if b > a:
        raise LedgerError(f"u64 언더플로: {a} - {b}")
    return a - b
