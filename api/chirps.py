from __future__ import annotations

import uuid

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.chirp import Chirp
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from security.guards import require_owner
from api.decorators import jwt_required

bp = Blueprint("chirps", __name__)

create_schema = ChirpCreateSchema()
out_schema = ChirpOutSchema()
out_list_schema = ChirpOutSchema(many=True)


def parse_uuid(value: str, name: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        abort(400, description=f"invalid {name}")


def parse_sort(default="asc"):
    sort = request.args.get("sort", default).lower()
    if sort not in ("asc", "desc"):
        abort(400, description="Unsupported sort order. Allowed: asc, desc")
    return (Chirp.created_at.desc() if sort == "desc" else Chirp.created_at.asc(),)


def get_chirp_or_404(chirp_id: str) -> Chirp:
    chirp = storage.get(Chirp, parse_uuid(chirp_id, "chirp ID"))
    if not chirp:
        abort(404, description="chirp not found")
    return chirp


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the current user
    ---
    tags: [Chirps]
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201: { description: Created }
      401: { description: Unauthorized }
      422: { description: Validation error }
    """
    data = create_schema.load(request.get_json(silent=True) or {})
    chirp = Chirp(body=data["body"], user_id=str(g.current_user_id))
    storage.new(chirp)
    storage.save()
    return jsonify(out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps (optionally by author, sorted by creation time)
    ---
    tags: [Chirps]
    parameters:
      - in: query
        name: author_id
        type: string
      - in: query
        name: sort
        type: string
        default: asc
        description: "Allowed: asc or desc"
    responses:
      200: { description: OK }
    """
    session = storage.get_session()
    order_by = parse_sort()

    query = session.query(Chirp)
    author_id = request.args.get("author_id")
    if author_id:
        query = query.filter(Chirp.user_id == parse_uuid(author_id, "author_id"))

    rows = query.order_by(*order_by, Chirp.id).all()
    return jsonify(out_list_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get a chirp by id
    ---
    tags: [Chirps]
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200: { description: OK }
      400: { description: Malformed id }
      404: { description: Not found }
    """
    return jsonify(out_schema.dump(get_chirp_or_404(chirp_id))), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete one of your own chirps
    ---
    tags: [Chirps]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      403: { description: Not the author }
      404: { description: Not found }
    """
    chirp = get_chirp_or_404(chirp_id)
    require_owner(chirp.user_id, g.current_user_id)

    storage.delete(chirp)
    storage.save()
    return ("", 204)
