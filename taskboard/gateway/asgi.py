from __future__ import annotations

from taskboard.config import build_board, load_config

from .app import create_app

app = create_app(build_board(load_config()))
