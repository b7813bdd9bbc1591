from __future__ import annotations

from flask import Blueprint, request, jsonify, g

from models.schemas.measurement import (
    MeasurementCreateSchema,
    MeasurementUpdateSchema,
    MeasurementOutSchema,
)
from utils.decorators import customer_service, jwt_required

bp = Blueprint("measurements", __name__)

create_schema = MeasurementCreateSchema()
update_schema = MeasurementUpdateSchema()
out_schema = MeasurementOutSchema()


@bp.post("/customers/measurements")
@jwt_required()
def add_measurement():
    """
    Add a measurement for one of the caller's customers
    ---
    tags: [Measurements]
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
          required: [customerId, type, data]
          properties:
            customerId: { type: string }
            type: { type: string, example: shirt }
            data: { type: object, example: { chest: 40, sleeve: 24 } }
            notes: { type: string }
    responses:
      201: { description: Created }
      400: { description: Validation error }
      401: { description: Unauthorized }
      403: { description: Customer belongs to another user }
      404: { description: Customer not found }
    """
    data = create_schema.load(request.get_json(silent=True) or {})
    measurement = customer_service().add_measurement(
        g.current_identity.user_id,
        data["customer_id"],
        data["type"],
        data["data"],
        data.get("notes"),
    )
    return jsonify({"success": True, "measurement": out_schema.dump(measurement)}), 201


@bp.get("/customers/measurements/<measurement_id>")
@jwt_required()
def get_measurement(measurement_id: str):
    """
    Get a measurement by id
    ---
    tags: [Measurements]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: measurement_id
        type: string
        required: true
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
      403: { description: Measurement belongs to another user's customer }
      404: { description: Not found }
    """
    measurement = customer_service().get_measurement(g.current_identity.user_id, measurement_id)
    return jsonify({"success": True, "measurement": out_schema.dump(measurement)}), 200


@bp.put("/customers/measurements/<measurement_id>")
@jwt_required()
def update_measurement(measurement_id: str):
    """
    Update a measurement's data and/or notes
    ---
    tags: [Measurements]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: measurement_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            data: { type: object }
            notes: { type: string }
    responses:
      200: { description: OK }
      400: { description: Validation error }
      401: { description: Unauthorized }
      403: { description: Measurement belongs to another user's customer }
      404: { description: Not found }
    """
    data = update_schema.load(request.get_json(silent=True) or {})
    measurement = customer_service().update_measurement(g.current_identity.user_id, measurement_id, data)
    return jsonify({"success": True, "measurement": out_schema.dump(measurement)}), 200


@bp.delete("/customers/measurements/<measurement_id>")
@jwt_required()
def delete_measurement(measurement_id: str):
    """
    Delete a measurement
    ---
    tags: [Measurements]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: measurement_id
        type: string
        required: true
    responses:
      200: { description: Deleted }
      401: { description: Unauthorized }
      403: { description: Measurement belongs to another user's customer }
      404: { description: Not found }
    """
    customer_service().delete_measurement(g.current_identity.user_id, measurement_id)
    return jsonify({"success": True, "message": "Measurement deleted successfully"}), 200
