"""
reveler 공유 유틸리티
=====================

워커 풀 크기 결정과 행 분할을 담당한다.

**스레드 수 휴리스틱**:
  - N > 1000: min(CPU 수 × 2, 16)
  - 그 외:    min(CPU 수, 8)
  CPU 수는 풀 크기를 정하는 데만 쓰인다.

**입력 정규화**:
  as_residues는 행렬/벡터를 int64 배열로 바꾸고 mod q로 줄인다.
  정수가 아니거나 int64에 담기지 않는 원소는 거부한다.

**행 분할**:
  N개의 행을 크기 ceil(N / threads)인 연속·서로소 구간으로 나눈다.
  빈 구간은 만들지 않으므로 threads > N이어도 구간 수는 N 이하이다.

  예 (N=10, threads=4 → chunk=3):
      [(0, 3), (3, 6), (6, 9), (9, 10)]
"""

import os

import numpy as np

from reveler.errors import DimensionMismatch, InvalidEntry


def get_optimal_thread_count(n, cpu_count=None):
    """차원 n과 CPU 수로 워커 스레드 수를 정한다.

    Args:
        n: 행 수 (차원 N)
        cpu_count: CPU 코어 수 (None이면 os.cpu_count())

    Returns:
        int: 1 이상의 스레드 수
    """
    if cpu_count is None:
        cpu_count = os.cpu_count() or 1
    if n > 1000:
        return max(1, min(cpu_count * 2, 16))
    return max(1, min(cpu_count, 8))


def chunk_size(n, thread_count):
    """ceil(n / thread_count)"""
    return (n + thread_count - 1) // thread_count


def partition_rows(n, thread_count):
    """[0, n) 을 연속된 서로소 구간 리스트로 나눈다.

    Args:
        n: 행 수
        thread_count: 워커 수 (1 이상)

    Returns:
        list[tuple[int, int]]: 인덱스 순서의 (start, end) 구간. 빈 구간 없음.

    예시:
        >>> partition_rows(4, 2)   # [(0, 2), (2, 4)]
        >>> partition_rows(3, 8)   # [(0, 1), (1, 2), (2, 3)]
    """
    if thread_count < 1:
        raise ValueError(f"thread_count는 1 이상이어야 합니다: {thread_count}")
    size = chunk_size(n, thread_count)
    ranges = []
    for start in range(0, n, size):
        ranges.append((start, min(start + size, n)))
    return ranges


def as_residues(values, shape, q, name):
    """정수 배열로 변환하고 각 원소를 [0, q)로 정규화한다.

    크기 검사를 원소 검사보다 먼저 한다. q를 법으로 합동인 입력은
    같은 배열이 된다.

    Args:
        values: 리스트 또는 ndarray
        shape: 기대하는 shape 튜플
        q: 모듈러스
        name: 오류 메시지용 이름

    Returns:
        ndarray: 원소가 [0, q)인 int64 배열

    Raises:
        DimensionMismatch: shape가 다르거나 행 길이가 들쭉날쭉할 때
        InvalidEntry: 정수가 아니거나 int64 범위를 벗어난 원소
    """
    try:
        arr = np.asarray(values)
    except ValueError as exc:
        raise DimensionMismatch(f"{name}의 shape가 {shape}이어야 합니다") from exc
    except OverflowError as exc:
        raise InvalidEntry(f"{name}에 int64 범위를 벗어난 원소가 있습니다") from exc
    if arr.shape != shape:
        raise DimensionMismatch(f"{name}의 shape가 {shape}이어야 합니다: shape={arr.shape}")
    if arr.dtype.kind not in "iu":
        raise InvalidEntry(
            f"{name}의 원소는 int64 범위의 정수여야 합니다: dtype={arr.dtype}"
        )
    # uint64는 int64로 바꾸기 전에 줄여야 값이 보존된다
    return (arr % q).astype(np.int64)
