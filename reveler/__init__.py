"""
reveler: FFT 순환 합성곱 기반 커밋먼트
========================================

모듈:
  - params:   상수 N, Q / RandomSource / ParameterGenerator
  - fft:      ConvolutionEngine (순환 합성곱 mod Q)
  - hashing:  해시 프리미티브 어댑터, 포인트 직렬화, 연쇄 해싱
  - commit:   CommitmentComputer, CommitmentRecord
  - verifier: CommitmentVerifier
  - errors:   CommitError, ComputeError, DimensionMismatch

사용 예시:
    >>> from reveler import ParameterGenerator, RandomSource, CommitmentComputer, verify
    >>> gen = ParameterGenerator(RandomSource(seed=1))
    >>> A, B = gen.generate()
    >>> m, r = gen.random_vector(), gen.random_vector()
    >>> record = CommitmentComputer().commit(A, B, m, r)
    >>> verify(record)  # True
"""

from reveler.params import N, Q, RandomSource, ParameterGenerator
from reveler.fft import ConvolutionEngine
from reveler.hashing import HashPrimitive, get_primitive
from reveler.commit import CommitmentComputer, CommitmentRecord, random_commitment
from reveler.verifier import CommitmentVerifier, verify
from reveler.errors import CommitError, ComputeError, DimensionMismatch, InvalidEntry, UnknownHashError

__all__ = [
    'N', 'Q', 'RandomSource', 'ParameterGenerator',
    'ConvolutionEngine',
    'HashPrimitive', 'get_primitive',
    'CommitmentComputer', 'CommitmentRecord', 'random_commitment',
    'CommitmentVerifier', 'verify',
    'CommitError', 'ComputeError', 'DimensionMismatch', 'InvalidEntry', 'UnknownHashError',
]
