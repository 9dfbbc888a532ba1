from marshmallow import Schema, fields, validates_schema, ValidationError, EXCLUDE

USER_UPGRADED = "user.upgraded"


class PolkaDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(required=True)


class PolkaWebhookSchema(Schema):
    """Billing provider event; only `user.upgraded` changes state."""

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(PolkaDataSchema)

    @validates_schema
    def _upgrade_needs_user(self, data, **kwargs):
        if data.get("event") == USER_UPGRADED and "data" not in data:
            raise ValidationError("data.user_id is required for user.upgraded", field_name="data")
