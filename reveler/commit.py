"""
커밋먼트 계산 (CommitmentComputer)
===================================

비밀 행렬 A, B와 벡터 m, r로부터 커밋먼트 포인트와 다이제스트를 계산한다.

**행별 계산** (i = 0, ..., N-1):
  1. mRes = convolve(A[i], m)
  2. rRes = convolve(B[i], r)
  3. point[i] = Σ_k (mRes[k] + rRes[k]) mod Q

  한 계수만 쓰지 않고 합성곱 출력 전체를 더하므로
  행과 메시지의 모든 상호작용이 행당 하나의 스칼라에 반영된다.

**병렬화 (분할 후 결합)**:
  ┌──────────────────────────────────────────────────────┐
  │  행 [0, N) → 크기 ceil(N/T)인 연속 구간 T개           │
  │  워커 t: A[s:e], B[s:e] 사본 + m, r (읽기 전용)       │
  │           → 자신의 구간 결과만 반환                    │
  │  join 후 구간을 인덱스 순서로 이어 붙여 point 구성     │
  └──────────────────────────────────────────────────────┘
  공유 가변 상태나 락이 없다. 워커 하나라도 실패하면
  commit 전체가 ComputeError로 실패한다 (부분 결과 없음).

**다이제스트**:
  point를 8바이트 빅엔디안으로 직렬화하고 연쇄 해싱한다 (hashing 모듈).

사용 예시:
    >>> computer = CommitmentComputer()
    >>> A, B = ParameterGenerator.from_seed(42).generate()
    >>> record = computer.commit(A, B, m, r)
    >>> verify(record)  # True
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from reveler.config import config
from reveler.errors import ComputeError
from reveler.fft import ConvolutionEngine
from reveler.hashing import get_primitive, hash_point
from reveler.params import N, Q, ParameterGenerator
from reveler.utils import as_residues, get_optimal_thread_count, partition_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitmentRecord:
    """공개 커밋먼트: (포인트, 다이제스트) 쌍.

    생성 후 변경되지 않는다. 검증자만 소비한다.

    속성:
        point: 길이 N 정수 튜플, 원소는 [0, Q)
        digest: 포인트의 연쇄 해시
    """
    point: tuple
    digest: bytes

    def __len__(self):
        return len(self.point)


class CommitmentComputer:
    """행 단위 병렬 커밋먼트 계산기.

    Args:
        n: 차원 N
        q: 모듈러스 Q
        primitive: HashPrimitive (None이면 설정의 기본값)
        thread_count: 워커 수. None이면 설정값, 그것도 없으면 휴리스틱.
        engine: ConvolutionEngine (None이면 (n, q)로 생성)
    """

    def __init__(self, n=N, q=Q, primitive=None, thread_count=None, engine=None):
        self.n = n
        self.q = q
        self.primitive = primitive if primitive is not None else get_primitive()
        self.thread_count = thread_count
        self.engine = engine if engine is not None else ConvolutionEngine(n, q)

    # ─── 워커 수 ───

    def _workers(self):
        if self.thread_count is not None:
            return self.thread_count
        if config.thread_count is not None:
            return config.thread_count
        return get_optimal_thread_count(self.n)

    # ─── 계산 ───

    def _compute_chunk(self, a_rows, b_rows, m, r):
        """한 워커의 구간 계산. 구간 길이만큼의 정수 리스트를 반환한다."""
        chunk = []
        for a_row, b_row in zip(a_rows, b_rows):
            m_res = self.engine.convolve(a_row, m)
            r_res = self.engine.convolve(b_row, r)
            chunk.append(int((m_res.sum() + r_res.sum()) % self.q))
        return chunk

    def commitment_point(self, a, b, m, r):
        """커밋먼트 포인트만 계산한다.

        Returns:
            tuple[int]: 길이 n, 원소 [0, q)

        Raises:
            DimensionMismatch: 입력 크기가 n과 다를 때 (작업 분할 전에 검사)
            InvalidEntry: 정수가 아니거나 int64 범위를 벗어난 원소 (범위 밖 정수는 mod q로 줄임)
            ComputeError: 워커가 실패했거나 스레드를 시작하지 못했을 때
        """
        a = as_residues(a, (self.n, self.n), self.q, "A")
        b = as_residues(b, (self.n, self.n), self.q, "B")
        m = as_residues(m, (self.n,), self.q, "m")
        r = as_residues(r, (self.n,), self.q, "r")

        ranges = partition_rows(self.n, self._workers())
        logger.debug("committing n=%d rows across %d workers", self.n, len(ranges))

        chunks = []
        with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
            futures = []
            for start, end in ranges:
                try:
                    future = pool.submit(
                        self._compute_chunk,
                        a[start:end].copy(), b[start:end].copy(),
                        m.copy(), r.copy(),
                    )
                except RuntimeError as exc:
                    raise ComputeError(f"워커 스레드를 시작하지 못했습니다: {exc}") from exc
                futures.append(((start, end), future))

            for (start, end), future in futures:
                try:
                    chunk = future.result()
                except Exception as exc:
                    raise ComputeError(
                        f"행 [{start}, {end}) 계산 실패: {exc}", row_range=(start, end)
                    ) from exc
                if len(chunk) != end - start:
                    raise ComputeError(
                        f"행 [{start}, {end}) 결과 길이 불일치: {len(chunk)}",
                        row_range=(start, end),
                    )
                chunks.append(chunk)

        point = []
        for chunk in chunks:
            point.extend(chunk)
        return tuple(point)

    def commit(self, a, b, m, r):
        """커밋먼트 레코드를 계산한다.

        Args:
            a: N×N 행렬 A
            b: N×N 행렬 B
            m: 메시지 벡터 (길이 N)
            r: 랜덤니스 벡터 (길이 N)

        Returns:
            CommitmentRecord: (point, digest)

        Raises:
            DimensionMismatch: 입력 크기가 N과 다를 때
            InvalidEntry: 정수가 아닌 원소
            ComputeError: 워커 실패 (레코드는 생성되지 않음)
        """
        point = self.commitment_point(a, b, m, r)
        digest = hash_point(point, self.primitive)
        return CommitmentRecord(point=point, digest=digest)


def commit(a, b, m, r, n=N, q=Q, primitive=None, thread_count=None):
    """CommitmentComputer(n, q, ...).commit(a, b, m, r) 의 축약형."""
    computer = CommitmentComputer(n=n, q=q, primitive=primitive, thread_count=thread_count)
    return computer.commit(a, b, m, r)


def random_commitment(rng=None, n=N, q=Q, primitive=None, thread_count=None):
    """무작위 A, B, m, r로 커밋먼트를 만든다.

    Args:
        rng: RandomSource (None이면 seed 없는 새 소스)

    Returns:
        CommitmentRecord
    """
    gen = ParameterGenerator(rng, n=n, q=q)
    a, b = gen.generate()
    m = gen.random_vector()
    r = gen.random_vector()
    return commit(a, b, m, r, n=n, q=q, primitive=primitive, thread_count=thread_count)
