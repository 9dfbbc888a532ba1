"""Static files under /app/, counted by the application's HitCounter."""
from flask import Blueprint, current_app, send_from_directory

from api.metrics import get_hit_counter

bp = Blueprint("fileserver", __name__)


@bp.before_request
def count_hit():
    get_hit_counter().increment()


@bp.get("/")
@bp.get("/<path:filename>")
def serve(filename: str = "index.html"):
    return send_from_directory(current_app.config["FILESERVER_ROOT"], filename)
