"""
FFT 기반 순환 합성곱 (Circular Convolution)
=============================================

커밋먼트 계산의 핵심 연산인 길이 N 순환 합성곱을 모듈러 Q 위에서 계산한다.

**순환 합성곱이란?**
  인덱스가 N을 법으로 순환하는 합성곱이다.
      result[k] = ( Σ_{j=0}^{N-1} u[j] · v[(k - j) mod N] ) mod Q
  다항식 관점에서는 (x^N - 1)을 법으로 하는 다항식 곱셈과 같다.

**변환 영역 곱셈**:
  0. u, v의 각 원소를 [0, Q)로 줄임 (합동인 입력은 같은 결과)
  1. u, v를 복소수 FFT로 변환 (길이 N, zero-padding 없음 → 순환)
  2. 원소별 복소수 곱
  3. 역 FFT (1/N 스케일 포함)
  4. 실수부를 가장 가까운 정수로 반올림
  5. 음수 반올림 오차를 고려하여 ((x mod Q) + Q) mod Q 로 정규화
  직접 계산 O(N²) 대신 O(N log N)이다.

**정확성 경계**:
  배정밀도(double) 경로의 누적 오차가 0.5 미만이어야 반올림으로 정확한
  정수를 복원할 수 있다. 정확한 결과의 최대 크기는 N·(Q-1)² 이므로
  N 또는 Q가 커지면 이 조건이 깨지고 결과는 *조용히* 틀린다.
  엔진은 호출 단위로 이를 감지할 수 없다. error_bound()로 사전 경계를,
  max_rounding_error()로 실측 오차를 확인한다.
  (N=256, Q=65535: 경계 ≈ 3.3e-3)

사용 예시:
    >>> engine = ConvolutionEngine(n=4, q=17)
    >>> engine.convolve([5, 9, 13, 2], [1, 0, 0, 0])  # [5, 9, 13, 2]
"""

import logging
import math

import numpy as np

from reveler.errors import DimensionMismatch
from reveler.params import N, Q, RandomSource
from reveler.utils import as_residues

logger = logging.getLogger(__name__)

# float64 단위 반올림 오차 (2^-53)
UNIT_ROUNDOFF = 2.0 ** -53


def error_bound(n, q):
    """(n, q)에서 FFT 합성곱의 최악 반올림 오차 추정치.

    정확한 결과의 최대 크기 n·(q-1)² 에 단위 오차와 FFT 단계 수에
    비례하는 계수를 곱한다.

    Args:
        n: 벡터 길이
        q: 모듈러스

    Returns:
        float: 오차 상한 추정치. 0.5 미만이어야 결과가 정확하다.
    """
    magnitude = n * (q - 1) ** 2
    stages = math.ceil(math.log2(n)) if n > 1 else 0
    return magnitude * UNIT_ROUNDOFF * (3 * stages + 3)


def circular_convolve_exact(u, v, q):
    """O(N²) 정수 순환 합성곱 (기준 구현).

    파이썬 정수로 계산하므로 오버플로나 반올림 오차가 없다.
    FFT 경로의 정확성을 검증할 때 사용한다.

    Args:
        u, v: 같은 길이의 정수 시퀀스
        q: 모듈러스

    Returns:
        list[int]: 원소가 [0, q)인 합성곱 결과
    """
    n = len(u)
    if len(v) != n:
        raise DimensionMismatch(f"길이가 다릅니다: {n} != {len(v)}")
    u = [int(x) for x in u]
    v = [int(x) for x in v]
    result = []
    for k in range(n):
        acc = 0
        for j in range(n):
            acc += u[j] * v[(k - j) % n]
        result.append(acc % q)
    return result


class ConvolutionEngine:
    """길이 n 순환 합성곱 mod q 엔진.

    상태가 없으므로 여러 워커 스레드가 하나의 엔진을 공유해도 된다.
    numpy FFT는 계산 중 GIL을 해제한다.

    속성:
        n: 벡터 길이 N
        q: 모듈러스 Q
    """

    def __init__(self, n=N, q=Q):
        if n < 1:
            raise DimensionMismatch(f"n은 1 이상이어야 합니다: {n}")
        self.n = n
        self.q = q
        if not self.is_exact:
            logger.warning(
                "FFT rounding bound %.3g >= 0.5 for n=%d q=%d; "
                "convolution results may be silently wrong",
                error_bound(n, q), n, q,
            )

    @property
    def is_exact(self):
        """사전 오차 경계가 0.5 미만이면 True."""
        return error_bound(self.n, self.q) < 0.5

    def _inverse_real(self, u, v):
        """역변환 후 반올림 전의 실수부."""
        spectrum = np.fft.fft(u) * np.fft.fft(v)
        # numpy의 ifft는 1/N 스케일을 포함한다
        return np.fft.ifft(spectrum).real

    def convolve(self, u, v):
        """u와 v의 순환 합성곱 mod q.

        Args:
            u: 길이 n 정수 벡터 (행렬의 한 행)
            v: 길이 n 정수 벡터 (메시지 또는 랜덤니스)

        Returns:
            ndarray: 원소가 [0, q)인 int64 벡터

        Raises:
            DimensionMismatch: u 또는 v의 길이가 n이 아닐 때
            InvalidEntry: 정수가 아니거나 int64 범위를 벗어난 원소

        예시 (n=4, q=17):
            >>> engine.convolve([1, 2, 0, 0], [0, 1, 0, 0])  # [0, 1, 2, 0]
        """
        u = as_residues(u, (self.n,), self.q, "u")
        v = as_residues(v, (self.n,), self.q, "v")
        rounded = np.rint(self._inverse_real(u, v)).astype(np.int64)
        return (rounded % self.q + self.q) % self.q

    def max_rounding_error(self, trials, rng=None):
        """무작위 입력에서 역변환 결과와 가장 가까운 정수 사이의 최대 거리.

        이 값이 0.5 미만이면 해당 시행들에서 반올림이 정확한 정수를
        복원한 것이다. 사전 경계(error_bound)와 별개로 실측 검증에 쓴다.

        Args:
            trials: 시행 횟수
            rng: RandomSource (None이면 seed 없는 새 소스)

        Returns:
            float: 관측된 최대 오차
        """
        rng = rng if rng is not None else RandomSource()
        worst = 0.0
        for _ in range(trials):
            u = rng.vector(self.n, self.q)
            v = rng.vector(self.n, self.q)
            values = self._inverse_real(u, v)
            worst = max(worst, float(np.max(np.abs(values - np.rint(values)))))
        return worst
