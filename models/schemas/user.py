from marshmallow import Schema, fields, validate

from models.schemas.common import RequestSchema


class UserRegisterSchema(RequestSchema):
    full_name = fields.String(required=True, data_key="fullName", validate=validate.Length(min=3, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=120))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=6, max=64))
    phone = fields.String(load_default=None, allow_none=True, validate=validate.Length(min=10, max=15))


class UserLoginSchema(RequestSchema):
    email = fields.Email(required=True, validate=validate.Length(max=120))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=6, max=64))


class RefreshTokenSchema(RequestSchema):
    """Body of /refresh and /logout."""

    refresh_token = fields.String(
        required=True,
        data_key="refreshToken",
        validate=validate.Length(min=1, error="Refresh token required"),
    )


class UserOutSchema(Schema):
    id = fields.String()
    full_name = fields.String(data_key="fullName")
    email = fields.String()
    phone = fields.String(allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
