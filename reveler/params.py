"""
공개 파라미터와 난수 소스
==========================

커밋먼트에 쓰이는 상수와 파라미터 생성기를 정의한다.

**상수**:
  - Q = 65535 (2^16 - 1): 모든 행렬/벡터 원소와 커밋먼트 값의 모듈러스.
    소수가 아니므로 유한체 연산(역원 등)은 사용하지 않는다.
  - N = 256: 기본 차원. 모든 구성 요소는 임의의 N을 지원한다.

**난수 소스 (RandomSource)**:
  numpy.random.Generator를 감싼다. seed를 주면 결정론적이며
  테스트에서 동일한 행렬을 재현할 수 있다.
  seed가 없으면 OS 엔트로피로 초기화된다.

**파라미터 생성기 (ParameterGenerator)**:
  서로 독립적인 N×N 행렬 A, B와 길이 N 벡터(m, r)를 생성한다.

사용 예시:
    >>> gen = ParameterGenerator(RandomSource(seed=42))
    >>> A, B = gen.generate()
    >>> A.shape  # (256, 256)
"""

import numpy as np

from reveler.config import DEFAULT_N


# ─────────────────────────────────────────────────────────────────────
# 상수
# ─────────────────────────────────────────────────────────────────────

# 모듈러스 Q = u16::MAX
Q = (1 << 16) - 1

# 기본 차원 N
N = DEFAULT_N

U64_BOUND = 1 << 64


# ─────────────────────────────────────────────────────────────────────
# 난수 소스
# ─────────────────────────────────────────────────────────────────────

class RandomSource:
    """주입 가능한 균등 난수 소스.

    속성:
        generator: numpy.random.Generator 인스턴스

    예시:
        >>> rng = RandomSource(seed=7)
        >>> rng.below(Q)           # [0, Q) 범위 정수
        >>> rng.u64()              # [0, 2^64) 범위 정수
    """

    def __init__(self, seed=None, generator=None):
        if generator is None:
            generator = np.random.default_rng(seed)
        self.generator = generator

    def below(self, q):
        """[0, q) 범위의 균등 정수 하나."""
        return int(self.generator.integers(0, q))

    def u64(self):
        """[0, 2^64) 범위의 균등 정수 하나.

        파라미터 seed 등 64비트 식별자를 뽑을 때 사용한다.
        """
        return int(self.generator.integers(0, U64_BOUND, dtype=np.uint64))

    def vector(self, n, q):
        """길이 n, 원소가 [0, q)인 int64 벡터."""
        return self.generator.integers(0, q, size=n, dtype=np.int64)

    def matrix(self, n, q):
        """n×n, 원소가 [0, q)인 int64 행렬."""
        return self.generator.integers(0, q, size=(n, n), dtype=np.int64)


# ─────────────────────────────────────────────────────────────────────
# 파라미터 생성기
# ─────────────────────────────────────────────────────────────────────

class ParameterGenerator:
    """커밋먼트 행렬 A, B와 비밀 벡터를 생성한다.

    순수 샘플링이므로 실패 조건이 없다.

    Args:
        rng: RandomSource. None이면 seed 없는 새 소스를 만든다.
        n: 차원 N
        q: 모듈러스 Q
    """

    def __init__(self, rng=None, n=N, q=Q):
        self.rng = rng if rng is not None else RandomSource()
        self.n = n
        self.q = q

    @classmethod
    def from_seed(cls, seed, n=N, q=Q):
        """seed로 결정론적 생성기를 만든다.

        같은 seed, n, q는 항상 같은 A, B를 돌려준다.
        """
        return cls(RandomSource(seed=seed), n=n, q=q)

    def generate(self):
        """서로 독립적인 N×N 행렬 (A, B)를 반환한다.

        Returns:
            tuple: (A, B), 각각 shape (n, n)인 int64 ndarray

        예시:
            >>> A, B = ParameterGenerator.from_seed(1, n=4).generate()
            >>> A.shape, B.shape  # ((4, 4), (4, 4))
        """
        a = self.rng.matrix(self.n, self.q)
        b = self.rng.matrix(self.n, self.q)
        return a, b

    def random_vector(self):
        """메시지/랜덤니스 벡터 (길이 n, 원소 [0, q))."""
        return self.rng.vector(self.n, self.q)
