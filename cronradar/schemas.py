"""
Marshmallow schemas for the monitor sync (registration) payload.

Schemas:
- MonitorDefinitionSchema: one monitor entry {key, name, schedule, gracePeriod}
- SyncRequestSchema: request body for POST /api/sync
"""

from marshmallow import Schema, fields, validate, ValidationError

from .config import DEFAULT_GRACE_PERIOD


class MonitorDefinitionSchema(Schema):
    """A monitor as expected by the sync endpoint."""
    key = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Monitor key cannot be empty")
    )
    name = fields.Str(required=True)
    schedule = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Schedule cannot be empty")
    )
    grace_period = fields.Integer(
        data_key='gracePeriod',
        load_default=DEFAULT_GRACE_PERIOD,
        dump_default=DEFAULT_GRACE_PERIOD,
        validate=validate.Range(min=1, error="Grace period must be a positive number of seconds")
    )


class SyncRequestSchema(Schema):
    """Body of a registration request, one or more monitors from a single source."""
    source = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Source cannot be empty")
    )
    monitors = fields.List(
        fields.Nested(MonitorDefinitionSchema),
        required=True,
        validate=validate.Length(min=1, error="At least one monitor is required")
    )


def build_sync_payload(source: str, monitors: list) -> dict:
    """
    Serialize and validate a sync request.

    Args:
        source: Source tag for the whole batch
        monitors: List of dicts with key, name, schedule and grace_period

    Returns:
        JSON-ready dict

    Raises:
        ValidationError: If the payload is invalid
    """
    schema = SyncRequestSchema()
    payload = schema.dump({'source': source, 'monitors': monitors})

    errors = schema.validate(payload)
    if errors:
        raise ValidationError(errors)

    return payload
