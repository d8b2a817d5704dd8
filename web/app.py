from __future__ import annotations

from flask import Flask, jsonify, request
import logging
import random
import sys
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from toweroops import Game, MoveResult, Storage

logger = logging.getLogger(__name__)


def _parse_coords(payload: Dict[str, Any]) -> Tuple[int, int]:
    col = payload.get("col")
    row = payload.get("row")
    # bool is an int subclass; floats would be silently truncated by int()
    for value in (col, row):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError("Missing or invalid col/row")
    return col, row


def create_app(storage: Optional[Storage] = None, rng: Optional[random.Random] = None) -> Flask:
    """Build the JSON API around a single live game.

    The game is owned by this app; requests are serialized with one lock
    because the game has no synchronization of its own.
    """
    app = Flask(__name__)

    storage = storage or Storage()
    settings = storage.load_settings()
    game = Game(
        ai_level=settings.ai_level,
        statistics=storage.load_statistics(),
        rng=rng,
        persist_statistics=storage.save_statistics,
    )
    lock = threading.Lock()
    app.config["GAME"] = game
    app.config["STORAGE"] = storage

    def ai_reply() -> Optional[list]:
        col, row = game.compute_ai_move()
        if game.make_move(col, row, is_player=False) is MoveResult.INVALID:
            logger.error("AI produced an illegal move (%d, %d)", col, row)
            return None
        return [col, row]

    def settings_payload() -> Dict[str, Any]:
        current = storage.load_settings()
        current.ai_level = game.ai_level
        data = current.to_dict()
        data["statistics"] = game.statistics.to_dict()
        return data

    @app.get("/api/state")
    def api_state():
        with lock:
            return jsonify(game.snapshot())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        with lock:
            if game.is_running() and game.moves_made > 0:
                # Abandoning a started round counts as a loss
                if not data.get("confirm_surrender"):
                    return jsonify({"error": "Round in progress; confirm_surrender required"}), 409
                game.surrender()
            game.new_game()

            ai_move = None
            if data.get("computer_begins"):
                ai_move = ai_reply()

            snap = game.snapshot()
            snap["ai_move"] = ai_move
            return jsonify(snap)

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        try:
            col, row = _parse_coords(payload)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        with lock:
            result = game.make_move(col, row, is_player=True)
            if result is MoveResult.INVALID:
                return jsonify({"error": f"Illegal move: ({col}, {row})"}), 400

            ai_move = None
            if result is MoveResult.CONTINUE:
                ai_move = ai_reply()

            snap = game.snapshot()
            snap["ai_move"] = ai_move
            return jsonify(snap)

    @app.post("/api/computer-begins")
    def api_computer_begins():
        with lock:
            if not game.is_running() or game.moves_made != 0:
                return jsonify({"error": "The computer can only open a fresh round"}), 409
            ai_move = ai_reply()
            snap = game.snapshot()
            snap["ai_move"] = ai_move
            return jsonify(snap)

    @app.post("/api/hint")
    def api_hint():
        with lock:
            if game.get_tip() is None:
                return jsonify({"error": "Round is over"}), 409
            return jsonify(game.snapshot())

    @app.post("/api/surrender")
    def api_surrender():
        with lock:
            if not game.surrender():
                return jsonify({"error": "Round is over"}), 409
            return jsonify(game.snapshot())

    @app.post("/api/hover")
    def api_hover():
        payload = request.get_json(silent=True) or {}
        with lock:
            if payload.get("col") is None or payload.get("row") is None:
                game.clear_hover()
            else:
                try:
                    col, row = _parse_coords(payload)
                except ValueError as exc:
                    return jsonify({"error": str(exc)}), 400
                game.update_hover(col, row)
            return jsonify({"hovered": list(game.hovered) if game.hovered else None})

    @app.get("/api/settings")
    def api_get_settings():
        with lock:
            return jsonify(settings_payload())

    @app.post("/api/settings")
    def api_update_settings():
        payload = request.get_json(silent=True) or {}
        with lock:
            current = storage.load_settings()
            level = game.ai_level
            speed = current.animation_speed
            try:
                if "ai_level" in payload:
                    level = int(payload["ai_level"])
                if "animation_speed" in payload:
                    speed = float(payload["animation_speed"])
            except (TypeError, ValueError):
                return jsonify({"error": "Invalid settings value"}), 400

            game.set_ai_level(level)
            current.animation_speed = speed
            if payload.get("reset_statistics"):
                game.reset_statistics()

            current.ai_level = game.ai_level
            try:
                storage.save_settings(current)
            except OSError as exc:
                logger.warning("Could not save settings: %s", exc)
            return jsonify(settings_payload())

    @app.get("/api/statistics")
    def api_statistics():
        with lock:
            return jsonify(game.statistics.to_dict())

    @app.post("/api/statistics/reset")
    def api_reset_statistics():
        with lock:
            game.reset_statistics()
            return jsonify(game.statistics.to_dict())

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(host="127.0.0.1", port=5000, debug=True)
