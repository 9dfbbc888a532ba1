"""Billing provider (Polka) webhooks."""
from __future__ import annotations

import logging

from flask import Blueprint, request, abort

from models import storage
from models.user import User
from models.schemas.polka import PolkaWebhookSchema, USER_UPGRADED
from api.decorators import api_key_required

logger = logging.getLogger(__name__)

bp = Blueprint("polka", __name__)

webhook_schema = PolkaWebhookSchema()


@bp.post("/polka/webhooks")
@api_key_required("POLKA_KEY")
def polka_webhook():
    """
    Receive a billing event
    ---
    tags: [Webhooks]
    parameters:
      - in: header
        name: Authorization
        type: string
        required: true
        description: "ApiKey <key>"
      - in: body
        name: body
        schema:
          type: object
          properties:
            event: { type: string }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204: { description: Processed or ignored }
      401: { description: Invalid API key }
      404: { description: User not found }
    """
    data = webhook_schema.load(request.get_json(silent=True) or {})
    if data["event"] != USER_UPGRADED:
        return ("", 204)

    user = storage.get(User, str(data["data"]["user_id"]))
    if not user:
        abort(404, description="User not found")

    user.is_chirpy_red = True
    storage.new(user)
    storage.save()
    logger.info("user %s upgraded to Chirpy Red", user.id)
    return ("", 204)
