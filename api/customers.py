from __future__ import annotations

from typing import Tuple

from flask import Blueprint, request, jsonify, abort, g

from models.schemas.customer import (
    CustomerCreateSchema,
    CustomerUpdateSchema,
    CustomerWithMeasurementsSchema,
    CustomerOutSchema,
    CustomerDetailSchema,
)
from models.schemas.measurement import MeasurementOutSchema
from utils.decorators import customer_service, jwt_required

bp = Blueprint("customers", __name__)

create_schema = CustomerCreateSchema()
update_schema = CustomerUpdateSchema()
with_measurements_schema = CustomerWithMeasurementsSchema()
out_schema = CustomerOutSchema()
out_list_schema = CustomerOutSchema(many=True, only=("id", "full_name", "phone"))
detail_schema = CustomerDetailSchema()
measurements_out_schema = MeasurementOutSchema(many=True)

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def parse_pagination() -> Tuple[int, int]:
    try:
        page = int(request.args.get("page", "1"))
        limit = int(request.args.get("limit", str(DEFAULT_LIMIT)))
        page = max(page, 1)
        limit = max(1, min(limit, MAX_LIMIT))
        return page, limit
    except ValueError:
        abort(400, description="page and limit must be integers")


@bp.get("/customers")
@jwt_required()
def list_customers():
    """
    List the caller's customers (supports pagination and search over name/phone)
    ---
    tags: [Customers]
    security:
      - Bearer: []
    parameters:
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 10
      - in: query
        name: search
        type: string
        description: Case-insensitive match on full name or phone
    responses:
      200: { description: OK }
      400: { description: Invalid page or limit }
      401: { description: Unauthorized }
    """
    page, limit = parse_pagination()
    result = customer_service().list_customers(
        g.current_identity.user_id, page=page, limit=limit, search=request.args.get("search")
    )
    return jsonify(
        {
            "success": True,
            "customers": out_list_schema.dump(result.items),
            "pagination": {
                "page": result.page,
                "limit": result.limit,
                "total": result.total,
                "totalPages": result.total_pages,
            },
        }
    ), 200


@bp.post("/customers")
@jwt_required()
def create_customer():
    """
    Create a customer
    ---
    tags: [Customers]
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
          required: [fullName]
          properties:
            fullName: { type: string, maxLength: 100, example: John Doe }
            email: { type: string, example: john@example.com }
            phone: { type: string, example: "9876543210" }
            gender: { type: string, enum: [male, female, other] }
            address: { type: string, example: 123 Main Street }
    responses:
      201: { description: Created }
      400: { description: Validation error }
      404: { description: Owning user no longer exists }
      401: { description: Unauthorized }
    """
    data = create_schema.load(request.get_json(silent=True) or {})
    customer = customer_service().create_customer(g.current_identity.user_id, data)
    return jsonify({"success": True, "customer": out_schema.dump(customer)}), 201


@bp.post("/customers/with-measurements")
@jwt_required()
def create_customer_with_measurements():
    """
    Create a customer along with their measurements
    ---
    tags: [Customers]
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
          required: [fullName]
          properties:
            fullName: { type: string }
            email: { type: string }
            phone: { type: string }
            gender: { type: string }
            address: { type: string }
            measurements:
              type: array
              items:
                type: object
                properties:
                  type: { type: string, example: shirt }
                  data: { type: object, example: { chest: 38, length: 28 } }
                  notes: { type: string }
    responses:
      201: { description: Customer and measurements created }
      400: { description: Validation error }
      404: { description: Owning user no longer exists }
      401: { description: Unauthorized }
    """
    data = with_measurements_schema.load(request.get_json(silent=True) or {})
    measurements = data.pop("measurements", [])
    customer = customer_service().create_customer_with_measurements(
        g.current_identity.user_id, data, measurements
    )
    return jsonify(
        {
            "success": True,
            "customer": out_schema.dump(customer),
            "measurements": measurements_out_schema.dump(customer.measurements),
        }
    ), 201


@bp.get("/customers/<customer_id>")
@jwt_required()
def get_customer(customer_id: str):
    """
    Get a single customer with measurements
    ---
    tags: [Customers]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: customer_id
        type: string
        required: true
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
      403: { description: Customer belongs to another user }
      404: { description: Not found }
    """
    customer = customer_service().get_customer(g.current_identity.user_id, customer_id)
    return jsonify({"success": True, **detail_schema.dump(customer)}), 200


@bp.put("/customers/<customer_id>")
@jwt_required()
def update_customer(customer_id: str):
    """
    Update a customer (partial)
    ---
    tags: [Customers]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: customer_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            fullName: { type: string, maxLength: 100 }
            email: { type: string }
            phone: { type: string }
            gender: { type: string }
            address: { type: string }
    responses:
      200: { description: OK }
      400: { description: Validation error }
      401: { description: Unauthorized }
      403: { description: Customer belongs to another user }
      404: { description: Not found }
    """
    data = update_schema.load(request.get_json(silent=True) or {})
    customer = customer_service().update_customer(g.current_identity.user_id, customer_id, data)
    return jsonify({"success": True, "customer": out_schema.dump(customer)}), 200


@bp.delete("/customers/<customer_id>")
@jwt_required()
def delete_customer(customer_id: str):
    """
    Delete a customer and its measurements
    ---
    tags: [Customers]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: customer_id
        type: string
        required: true
    responses:
      200: { description: Deleted }
      401: { description: Unauthorized }
      403: { description: Customer belongs to another user }
      404: { description: Not found }
    """
    customer_service().delete_customer(g.current_identity.user_id, customer_id)
    return jsonify({"success": True, "message": "Customer deleted successfully"}), 200
