from __future__ import annotations

import tempfile
from pathlib import Path

from toweroops import Storage
from web import create_app


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        app = create_app(storage=Storage(Path(tmp)))
        client = app.test_client()

        # new game
        resp = client.post("/api/new", json={})
        assert resp.status_code == 200, resp.data
        data = resp.get_json()
        assert "board" in data and "legal_moves" in data

        # make a move and have AI reply
        col, row = data["legal_moves"][0]
        resp = client.post("/api/move", json={"col": col, "row": row})
        assert resp.status_code == 200, resp.data
        data = resp.get_json()
        assert "ai_move" in data
        print("Smoke OK. AI replied:", data["ai_move"])


if __name__ == "__main__":
    main()
