from marshmallow import Schema, fields, validate, validates_schema, ValidationError

from models.schemas.common import RequestSchema


class MeasurementItemSchema(RequestSchema):
    """A measurement nested under a customer being created."""

    type = fields.String(required=True, validate=validate.Length(min=1, max=50))
    data = fields.Dict(keys=fields.String(), required=True)
    notes = fields.String(allow_none=True, load_default=None)


class MeasurementCreateSchema(MeasurementItemSchema):
    customer_id = fields.String(required=True, data_key="customerId", validate=validate.Length(min=1))


class MeasurementUpdateSchema(RequestSchema):
    data = fields.Dict(keys=fields.String())
    notes = fields.String(allow_none=True)

    @validates_schema
    def _require_a_field(self, data, **kwargs):
        if not data:
            raise ValidationError("At least one of data or notes must be provided.")


class MeasurementOutSchema(Schema):
    id = fields.String()
    customer_id = fields.String(data_key="customerId")
    type = fields.String()
    data = fields.Dict()
    notes = fields.String(allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
