"""
커밋먼트 검증 (CommitmentVerifier)
===================================

레코드의 포인트로부터 다이제스트를 다시 계산하여 저장된 다이제스트와 비교한다.

**검증 범위**:
  포인트 ↔ 다이제스트의 내부 일관성만 확인한다.
  포인트가 특정 (A, B, m, r)로부터 정직하게 계산되었음은 증명하지 않는다.
  그러려면 열기(opening) 프로토콜이 필요하다.

비밀 입력을 받지 않고 상태도 없다. 예외를 던지지 않고 bool만 반환한다.
"""

import numbers

from reveler.hashing import ENTRY_WIDTH, get_primitive, hash_point

ENTRY_BOUND = 1 << (8 * ENTRY_WIDTH)


def _read_record(record):
    """레코드에서 (포인트 튜플, 다이제스트 bytes)를 꺼낸다.

    포인트는 한 번만 순회하여 튜플로 고정한다. 직렬화할 수 없는 포인트나
    bytes가 아닌 다이제스트이면 None.
    """
    point = getattr(record, "point", None)
    digest = getattr(record, "digest", None)
    if not isinstance(digest, (bytes, bytearray)):
        return None
    if not hasattr(point, "__iter__") or isinstance(point, (str, bytes)):
        return None
    point = tuple(point)
    for value in point:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            return None
        if not 0 <= value < ENTRY_BOUND:
            return None
    return point, bytes(digest)


class CommitmentVerifier:
    """다이제스트 재계산 검증자.

    Args:
        primitive: HashPrimitive (None이면 설정의 기본값).
                   커밋할 때 사용한 것과 같아야 한다.
    """

    def __init__(self, primitive=None):
        self.primitive = primitive if primitive is not None else get_primitive()

    def verify(self, record):
        """record.digest == H(record.point) 이면 True.

        Args:
            record: CommitmentRecord 또는 point, digest 속성을 가진 객체

        Returns:
            bool

        예시:
            >>> record = computer.commit(A, B, m, r)
            >>> CommitmentVerifier().verify(record)  # True
        """
        parsed = _read_record(record)
        if parsed is None:
            return False
        point, digest = parsed
        return hash_point(point, self.primitive) == digest


def verify(record, primitive=None):
    """CommitmentVerifier(primitive).verify(record) 의 축약형."""
    return CommitmentVerifier(primitive).verify(record)
