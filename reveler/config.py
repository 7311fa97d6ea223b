"""
reveler 설정
=============

환경 변수에서 기본값을 읽는다. 값이 없으면 아래 기본값을 사용한다.

  REVELER_N           차원 N (기본 256)
  REVELER_THREADS     워커 스레드 수 (0이면 CPU 수 기반 휴리스틱)
  REVELER_HASH        해시 프리미티브 이름 (기본 blake2b)
  REVELER_DB          TinyDB 파일 경로 (":memory:"이면 MemoryStorage)
  REVELER_SECRET_KEY  Flask secret key
"""

import os

DEFAULT_N = int(os.getenv('REVELER_N', 256))
DEFAULT_THREADS = int(os.getenv('REVELER_THREADS', 0))
DEFAULT_HASH = os.getenv('REVELER_HASH', 'blake2b')
DEFAULT_DB_PATH = os.getenv('REVELER_DB', 'db.json')
DEFAULT_SECRET_KEY = os.getenv('REVELER_SECRET_KEY', 'key')

MEMORY_DB = ':memory:'


class Config:
    """설정 클래스"""

    def __init__(self):
        self.n = DEFAULT_N
        self.threads = DEFAULT_THREADS
        self.hash_name = DEFAULT_HASH
        self.db_path = DEFAULT_DB_PATH
        self.secret_key = DEFAULT_SECRET_KEY

    @property
    def thread_count(self):
        """명시된 스레드 수. 0 이하이면 None (휴리스틱 사용)."""
        return self.threads if self.threads > 0 else None

    @property
    def in_memory(self):
        return self.db_path == MEMORY_DB

    def to_dict(self):
        return {
            'n': self.n,
            'threads': self.threads,
            'hash_name': self.hash_name,
            'db_path': self.db_path,
        }


config = Config()
