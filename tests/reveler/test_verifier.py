"""
CommitmentVerifier tests: soundness, tamper sensitivity, malformed records.
"""

from types import SimpleNamespace

import pytest

from reveler.commit import CommitmentComputer, CommitmentRecord
from reveler.hashing import get_primitive
from reveler.params import ParameterGenerator
from reveler.verifier import CommitmentVerifier, verify


def _record(seed, n=32):
    gen = ParameterGenerator.from_seed(seed, n=n)
    a, b = gen.generate()
    return CommitmentComputer(n=n, thread_count=2).commit(
        a, b, gen.random_vector(), gen.random_vector()
    )


@pytest.fixture(scope="module", params=[1, 17, 2024])
def record(request):
    return _record(request.param)


def _flip(record, index, bit):
    point = list(record.point)
    point[index] ^= 1 << bit
    return CommitmentRecord(point=tuple(point), digest=record.digest)


class TestSoundness:
    def test_valid_record(self, record):
        assert verify(record) is True

    def test_verifier_class(self, record):
        assert CommitmentVerifier().verify(record)

    def test_stateless_repeatable(self, record):
        verifier = CommitmentVerifier()
        assert verifier.verify(record) and verifier.verify(record)

    def test_default_dimension(self):
        gen = ParameterGenerator.from_seed(3)
        a, b = gen.generate()
        rec = CommitmentComputer().commit(a, b, gen.random_vector(), gen.random_vector())
        assert verify(rec)


class TestTamper:
    @pytest.mark.parametrize("index", [0, 7, 31])
    @pytest.mark.parametrize("bit", [0, 1, 8, 15, 16, 63])
    def test_single_bit_flip(self, record, index, bit):
        assert verify(_flip(record, index, bit)) is False

    def test_every_position_low_bit(self, record):
        for i in range(len(record.point)):
            assert not verify(_flip(record, i, 0))

    def test_digest_bit_flip(self, record):
        digest = bytearray(record.digest)
        digest[0] ^= 0x01
        assert not verify(CommitmentRecord(point=record.point, digest=bytes(digest)))

    def test_swapped_entries(self, record):
        point = list(record.point)
        if point[0] == point[1]:
            pytest.skip("equal entries")
        point[0], point[1] = point[1], point[0]
        assert not verify(CommitmentRecord(point=tuple(point), digest=record.digest))

    def test_truncated_point(self, record):
        assert not verify(CommitmentRecord(point=record.point[:-1], digest=record.digest))

    def test_wrong_primitive(self, record):
        assert not verify(record, get_primitive("sha3_256"))


class TestMalformed:
    def test_negative_entry(self, record):
        point = (-1,) + record.point[1:]
        assert verify(CommitmentRecord(point=point, digest=record.digest)) is False

    def test_entry_too_wide(self, record):
        point = (1 << 64,) + record.point[1:]
        assert verify(CommitmentRecord(point=point, digest=record.digest)) is False

    def test_non_integer_entry(self, record):
        point = ("x",) + record.point[1:]
        assert verify(CommitmentRecord(point=point, digest=record.digest)) is False

    def test_digest_not_bytes(self, record):
        assert verify(CommitmentRecord(point=record.point, digest=record.digest.hex())) is False

    def test_point_not_iterable(self, record):
        assert verify(CommitmentRecord(point=5, digest=record.digest)) is False

    def test_missing_fields(self):
        assert verify(SimpleNamespace()) is False

    def test_duck_typed_record(self, record):
        assert verify(SimpleNamespace(point=list(record.point), digest=record.digest))

    def test_one_shot_iterator_point(self, record):
        assert verify(SimpleNamespace(point=iter(record.point), digest=record.digest))

    def test_one_shot_generator_tampered(self, record):
        tampered = (x ^ 1 if i == 0 else x for i, x in enumerate(record.point))
        assert verify(SimpleNamespace(point=tampered, digest=record.digest)) is False
