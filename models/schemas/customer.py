from marshmallow import Schema, fields, validate, validates_schema, pre_load, ValidationError

from models.schemas.common import RequestSchema
from models.schemas.measurement import MeasurementItemSchema, MeasurementOutSchema

GENDERS = ("male", "female", "other")


class CustomerBaseSchema(RequestSchema):
    email = fields.Email(allow_none=True, validate=validate.Length(max=120))
    phone = fields.String(allow_none=True, validate=validate.Length(max=20))
    gender = fields.String(allow_none=True, validate=validate.OneOf(GENDERS))
    address = fields.String(allow_none=True)

    @pre_load
    def _normalize_gender(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("gender"), str):
            data = dict(data)
            data["gender"] = data["gender"].strip().lower()
        return data


class CustomerCreateSchema(CustomerBaseSchema):
    full_name = fields.String(
        required=True,
        data_key="fullName",
        validate=validate.Length(min=1, max=100),
    )


class CustomerUpdateSchema(CustomerBaseSchema):
    # All optional, but validate if present
    full_name = fields.String(data_key="fullName", validate=validate.Length(min=1, max=100))

    @validates_schema
    def _require_a_field(self, data, **kwargs):
        if not data:
            raise ValidationError("At least one field must be provided.")


class CustomerWithMeasurementsSchema(CustomerCreateSchema):
    measurements = fields.List(fields.Nested(MeasurementItemSchema), load_default=list)


class CustomerOutSchema(Schema):
    id = fields.String()
    user_id = fields.String(data_key="userId")
    full_name = fields.String(data_key="fullName")
    email = fields.String(allow_none=True)
    phone = fields.String(allow_none=True)
    gender = fields.String(allow_none=True)
    address = fields.String(allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class CustomerDetailSchema(Schema):
    """A customer together with its measurements."""

    customer = fields.Method("get_customer")
    measurements = fields.Method("get_measurements")

    def get_customer(self, obj):
        return CustomerOutSchema().dump(obj)

    def get_measurements(self, obj):
        return MeasurementOutSchema(many=True).dump(obj.measurements)
