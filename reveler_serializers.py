"""
reveler 데이터 직렬화/역직렬화 헬퍼
====================================

TinyDB와 JSON 응답에 담을 수 있는 형태로 커밋먼트 객체를 변환한다.
CommitmentRecord, 정수 벡터, 다이제스트(hex).
"""

from reveler.commit import CommitmentRecord


# ─── digest ───

def serialize_digest(digest):
    """bytes → hex str"""
    return bytes(digest).hex()


def deserialize_digest(s):
    """hex str → bytes"""
    return bytes.fromhex(s)


# ─── int vector ───

def serialize_vector(vec):
    """ndarray / list[int] → list[int]"""
    return [int(v) for v in vec]


def deserialize_vector(data):
    """list[int] → list[int] (JSON 값 검사 포함)"""
    if not isinstance(data, list):
        raise ValueError("벡터는 정수 리스트여야 합니다")
    for v in data:
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"정수가 아닌 원소: {v!r}")
    return list(data)


# ─── CommitmentRecord ───

def serialize_record(record):
    """CommitmentRecord → {"point": [...], "digest": hex}"""
    return {
        "point": serialize_vector(record.point),
        "digest": serialize_digest(record.digest),
    }


def deserialize_record(data):
    """{"point": [...], "digest": hex} → CommitmentRecord

    Raises:
        ValueError: 필드가 없거나 형식이 잘못된 경우
    """
    if not isinstance(data, dict) or "point" not in data or "digest" not in data:
        raise ValueError("point와 digest 필드가 필요합니다")
    if not isinstance(data["digest"], str):
        raise ValueError("digest는 hex 문자열이어야 합니다")
    return CommitmentRecord(
        point=tuple(deserialize_vector(data["point"])),
        digest=deserialize_digest(data["digest"]),
    )


def digest_short(digest):
    """로그용 축약 표현"""
    h = serialize_digest(digest)
    return h[:8] + "..." + h[-8:]
