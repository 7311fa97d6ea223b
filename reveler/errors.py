"""
커밋먼트 계산 예외 계층
========================

commit 호출자에게 노출되는 모든 실패는 CommitError의 하위 클래스이다.

  CommitError
  ├── ComputeError       : 워커가 자신의 행 구간을 계산하지 못함
  ├── DimensionMismatch  : A, B, m, r의 크기가 N과 맞지 않음 (ValueError)
  ├── InvalidEntry       : 정수가 아니거나 int64 범위를 벗어난 원소 (ValueError)
  └── UnknownHashError   : 지원하지 않는 해시 프리미티브 이름 (ValueError)

검증(verify)은 예외를 던지지 않고 bool만 반환한다.
"""


class CommitError(Exception):
    """reveler 커밋먼트 계산 실패의 기본 클래스."""


class ComputeError(CommitError):
    """워커 스레드가 결과를 만들지 못했을 때 발생한다.

    일부 구간만 실패해도 commit 전체가 실패한다.
    빈 구간이나 0으로 채운 구간으로 대체하지 않는다.

    속성:
        row_range: 실패한 워커의 (start, end) 행 구간. 스레드 생성 실패 등
                   특정 구간에 속하지 않는 경우 None.
    """

    def __init__(self, message, row_range=None):
        super().__init__(message)
        self.row_range = row_range


class DimensionMismatch(CommitError, ValueError):
    """입력 행렬/벡터의 크기가 차원 N과 다를 때 발생한다."""


class InvalidEntry(CommitError, ValueError):
    """행렬/벡터 원소가 정수가 아니거나 int64로 표현할 수 없을 때 발생한다."""


class UnknownHashError(CommitError, ValueError):
    """등록되지 않은 해시 프리미티브 이름."""
