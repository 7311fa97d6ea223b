"""
커밋먼트 다이제스트 어댑터
===========================

커밋먼트 포인트를 바이트로 직렬화하고 반복 해싱하여 다이제스트를 만든다.

**해시 프리미티브 인터페이스**:
  커밋먼트 로직은 특정 해시 함수에 의존하지 않는다.
  new / update / finalize 세 가지 기능과 고정 digest_size만 요구한다.
  hashlib 백엔드: blake2b(기본, 32바이트), blake2s, sha256, sha3_256, sha3_512

**직렬화 (비트 단위 고정)**:
  i = 0..N-1 순서로 point[i]를 8바이트 빅엔디안으로 이어 붙인다.
  다른 구현과 다이제스트가 호환되려면 이 형식을 정확히 따라야 한다.

**연쇄 해싱 (chained hashing)**:
  하나의 해시 상태에 계속 누적한다.

      state = H.new()
      state.update(serialized_point)      d₀ = finalize(state)
      state.update(d₀)                    d₁ = finalize(state)
      state.update(d₁)                    d₂ = finalize(state)
      state.update(d₂)                    d₃ = finalize(state)  ← 다이제스트

  각 라운드는 직전 다이제스트만 해싱하는 것이 아니라
  H(point ‖ d₀ ‖ d₁ ‖ ...) 처럼 누적 상태 전체를 해싱한다.
  finalize는 상태를 초기화하지 않는다.

사용 예시:
    >>> primitive = get_primitive("blake2b")
    >>> digest = hash_point([1, 2, 3], primitive)
    >>> len(digest)  # 32
"""

import hashlib
import logging

from reveler.config import DEFAULT_HASH
from reveler.errors import UnknownHashError

logger = logging.getLogger(__name__)

# 최초 해싱 이후 추가 라운드 수
EXTRA_ROUNDS = 3

# 포인트 원소 하나의 직렬화 폭 (바이트)
ENTRY_WIDTH = 8


# ─────────────────────────────────────────────────────────────────────
# 해시 프리미티브
# ─────────────────────────────────────────────────────────────────────

class HashPrimitive:
    """고정 폭 다이제스트를 내는 해시 프리미티브.

    속성:
        name: hashlib 알고리즘 이름
        digest_size: 다이제스트 바이트 수
    """

    def __init__(self, name, digest_size):
        self.name = name
        self.digest_size = digest_size

    def new(self):
        """빈 해시 상태를 만든다."""
        if self.name in ("blake2b", "blake2s"):
            return hashlib.new(self.name, digest_size=self.digest_size)
        return hashlib.new(self.name)

    def update(self, state, data):
        state.update(data)

    def finalize(self, state):
        """현재까지 누적된 입력의 다이제스트. 상태는 그대로 유지된다."""
        return state.digest()

    def __eq__(self, other):
        if not isinstance(other, HashPrimitive):
            return False
        return (self.name, self.digest_size) == (other.name, other.digest_size)

    def __hash__(self):
        return hash((self.name, self.digest_size))

    def __repr__(self):
        return f"HashPrimitive({self.name!r}, {self.digest_size})"


PRIMITIVES = {
    "blake2b": HashPrimitive("blake2b", 32),
    "blake2s": HashPrimitive("blake2s", 32),
    "sha256": HashPrimitive("sha256", 32),
    "sha3_256": HashPrimitive("sha3_256", 32),
    "sha3_512": HashPrimitive("sha3_512", 64),
}


def get_primitive(name=None):
    """이름으로 해시 프리미티브를 찾는다.

    Args:
        name: 프리미티브 이름. None이면 설정의 기본값(REVELER_HASH).

    Raises:
        UnknownHashError: 등록되지 않은 이름
    """
    if name is None:
        name = DEFAULT_HASH
    try:
        return PRIMITIVES[name]
    except KeyError:
        raise UnknownHashError(
            f"지원하지 않는 해시 프리미티브: {name} (가능: {', '.join(PRIMITIVES)})"
        ) from None


# ─────────────────────────────────────────────────────────────────────
# 직렬화와 다이제스트
# ─────────────────────────────────────────────────────────────────────

def serialize_point(point):
    """커밋먼트 포인트 → 바이트열 (원소당 8바이트 빅엔디안).

    Raises:
        OverflowError: 원소가 [0, 2^64) 밖일 때
    """
    out = bytearray()
    for value in point:
        out.extend(int(value).to_bytes(ENTRY_WIDTH, "big"))
    return bytes(out)


def hash_to_commitment(data, primitive=None):
    """데이터를 한 번 해싱한 뒤 같은 상태로 EXTRA_ROUNDS번 더 해싱한다.

    Args:
        data: 직렬화된 커밋먼트 포인트
        primitive: HashPrimitive (None이면 기본 프리미티브)

    Returns:
        bytes: primitive.digest_size 길이의 다이제스트
    """
    if primitive is None:
        primitive = get_primitive()
    state = primitive.new()
    primitive.update(state, data)
    result = primitive.finalize(state)

    for _ in range(EXTRA_ROUNDS):
        primitive.update(state, result)
        result = primitive.finalize(state)
    return result


def hash_point(point, primitive=None):
    """커밋먼트 포인트의 다이제스트."""
    data = serialize_point(point)
    logger.debug("hashing %d-byte point serialization", len(data))
    return hash_to_commitment(data, primitive)
