from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from reveler.config import Config
from reveler.params import Q

from reveler_routes import reveler_bp, init_reveler_bp


def open_db(cfg):
    if cfg.in_memory:
        return TinyDB(storage=MemoryStorage)  # Memory DB
    return TinyDB(cfg.db_path)                # Storage DB


def create_app(cfg=None):
    cfg = cfg if cfg is not None else Config()

    app = Flask(__name__)
    app.secret_key = cfg.secret_key
    app.config["REVELER"] = cfg

    init_reveler_bp(open_db(cfg))
    app.register_blueprint(reveler_bp)

    @app.route("/")
    def main():
        return jsonify({"n": cfg.n, "q": Q, "hash": cfg.hash_name})

    app.logger.info("reveler app configured: %s", cfg.to_dict())
    return app


if __name__ == "__main__":
    create_app().run(debug=True)
