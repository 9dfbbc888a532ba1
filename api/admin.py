from __future__ import annotations

import logging

from flask import Blueprint

from models import storage
from models.user import User
from api.decorators import admin_platform_required
from api.metrics import get_hit_counter

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_PAGE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {count} times!</p>
  </body>
</html>
"""


@bp.get("/metrics")
def metrics():
    """
    File server hit count
    ---
    tags: [Admin]
    produces:
      - text/html
    responses:
      200: { description: HTML page }
    """
    page = METRICS_PAGE.format(count=get_hit_counter().value())
    return page, 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
@admin_platform_required()
def reset():
    """
    Delete all users (and, by cascade, their chirps and refresh tokens) and zero the hit counter. dev platform only.
    ---
    tags: [Admin]
    responses:
      200: { description: Reset done }
      403: { description: Not a dev platform }
    """
    deleted = storage.delete_all(User)
    get_hit_counter().reset()
    logger.warning("admin reset: deleted %d users", deleted)
    return "Hits counter reset to 0\n", 200, {"Content-Type": "text/plain; charset=utf-8"}
