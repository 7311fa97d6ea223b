"""
reveler Flask Blueprint: 커밋먼트 엔드포인트
===============================================

  POST /reveler/params          파라미터 seed 생성 및 저장
  POST /reveler/commit          커밋먼트 계산 및 레코드 저장
  GET  /reveler/records/<id>    저장된 레코드 조회
  POST /reveler/verify          포인트 ↔ 다이제스트 검증
  POST /reveler/records/clear   저장된 레코드 삭제

행렬 A, B(각 N² 원소)는 저장하지 않고 u64 seed만 저장하여 필요할 때 재생성한다.
비밀 벡터 m, r은 저장하지 않는다.
"""

from flask import Blueprint, current_app, jsonify, request

from reveler.commit import CommitmentComputer
from reveler.errors import ComputeError, DimensionMismatch
from reveler.hashing import get_primitive
from reveler.params import ParameterGenerator, RandomSource, U64_BOUND
from reveler.verifier import CommitmentVerifier

from reveler_serializers import (
    serialize_record, deserialize_record,
    deserialize_vector, digest_short,
)

reveler_bp = Blueprint('reveler', __name__, url_prefix='/reveler')

# DB는 app.py에서 주입
DB = None


def init_reveler_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def params_table():
    return DB.table("params")


def records_table():
    return DB.table("records")


def db_get_record(record_id):
    """id로 레코드 문서를 조회한다."""
    return records_table().get(doc_id=record_id)


# ─── 요청 헬퍼 ───

def settings():
    return current_app.config["REVELER"]


def json_body():
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValueError("요청 본문은 JSON 객체여야 합니다")
    return body


def parse_seed(value):
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < U64_BOUND:
        raise ValueError(f"seed는 [0, 2^64) 범위의 정수여야 합니다: {value!r}")
    return value


@reveler_bp.errorhandler(ValueError)
def handle_bad_request(exc):
    return jsonify({"error": str(exc)}), 400


@reveler_bp.errorhandler(DimensionMismatch)
def handle_dimension_mismatch(exc):
    return jsonify({"error": str(exc), "kind": "DimensionMismatch"}), 400


@reveler_bp.errorhandler(ComputeError)
def handle_compute_error(exc):
    current_app.logger.error("commitment computation failed: %s", exc)
    return jsonify({"error": str(exc), "kind": "ComputeError"}), 500


# ──────────────────────────────────────────────────────────────
# 파라미터
# ──────────────────────────────────────────────────────────────

@reveler_bp.route("/params", methods=["POST"])
def create_params():
    """새 파라미터 seed를 뽑아 저장한다."""
    seed = RandomSource().u64()
    params_table().insert({"seed": str(seed), "n": settings().n})
    return jsonify({"seed": seed, "n": settings().n})


# ──────────────────────────────────────────────────────────────
# 커밋 / 검증
# ──────────────────────────────────────────────────────────────

@reveler_bp.route("/commit", methods=["POST"])
def commit_route():
    """seed로 A, B를 재생성하고 m, r(없으면 무작위)에 커밋한다."""
    body = json_body()
    cfg = settings()

    if body.get("seed") is None:
        seed = RandomSource().u64()
    else:
        seed = parse_seed(body["seed"])

    a, b = ParameterGenerator.from_seed(seed, n=cfg.n).generate()

    # 비밀 벡터는 공개 seed와 무관한 소스에서 뽑는다
    secret = ParameterGenerator(n=cfg.n)
    m = deserialize_vector(body["m"]) if body.get("m") is not None else secret.random_vector()
    r = deserialize_vector(body["r"]) if body.get("r") is not None else secret.random_vector()

    computer = CommitmentComputer(
        n=cfg.n,
        primitive=get_primitive(cfg.hash_name),
        thread_count=cfg.thread_count,
    )
    record = computer.commit(a, b, m, r)

    data = serialize_record(record)
    record_id = records_table().insert({"seed": str(seed), "record": data})
    current_app.logger.info("stored record %d digest=%s", record_id, digest_short(record.digest))

    return jsonify({"id": record_id, "seed": seed, **data})


@reveler_bp.route("/records/<int:record_id>")
def get_record(record_id):
    """저장된 레코드를 반환한다."""
    doc = db_get_record(record_id)
    if doc is None:
        return jsonify({"error": f"레코드가 없습니다: {record_id}"}), 404
    return jsonify({"id": record_id, "seed": int(doc["seed"]), **doc["record"]})


@reveler_bp.route("/records/clear", methods=["POST"])
def clear_records():
    DB.drop_table("records")
    return jsonify({"cleared": True})


@reveler_bp.route("/verify", methods=["POST"])
def verify_route():
    """{point, digest} → {valid}. 형식이 잘못된 레코드도 valid=false로 응답한다."""
    try:
        record = deserialize_record(request.get_json(silent=True))
    except ValueError:
        return jsonify({"valid": False})
    verifier = CommitmentVerifier(get_primitive(settings().hash_name))
    return jsonify({"valid": verifier.verify(record)})
