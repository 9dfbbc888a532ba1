from marshmallow import Schema, fields, validate

from models.chirp import MAX_CHIRP_LENGTH


class ChirpCreateSchema(Schema):
    body = fields.String(
        required=True,
        validate=validate.Length(min=1, max=MAX_CHIRP_LENGTH, error="Chirp must be 1-{max} characters long."),
    )


class ChirpOutSchema(Schema):
    id = fields.String()
    body = fields.String()
    user_id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
