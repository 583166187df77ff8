# Overview: Flask API routes for cashier management (admin only).

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_admin
from ..errors import DuplicateEmail, NotFoundError, StoreError, ValidationError
from ..services import cashier_service


cashiers_bp = Blueprint("cashiers", __name__, url_prefix="/cashiers")


@cashiers_bp.get("")
@require_admin
def list_cashiers_route():
    """List cashiers, newest first. secret hashes are never included."""
    try:
        cashiers = cashier_service.list_cashiers()
    except StoreError:
        current_app.logger.exception("Failed to list cashiers")
        return jsonify({"message": "Internal server error"}), 500
    return jsonify([c.to_dict() for c in cashiers]), 200


@cashiers_bp.post("")
@require_admin
def create_cashier_route():
    """
    Create a cashier account.

    Request body:
    - name: str (required)
    - email: str (required, valid address, unique among cashiers)
    - secret: str (required; "password" accepted as alias)
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        cashier = cashier_service.create_cashier(
            name=data.get("name"),
            email=data.get("email"),
            secret=data.get("secret", data.get("password")),
        )
        return jsonify({
            "cashier": cashier.to_dict(),
            "message": "Cashier registered successfully",
        }), 201

    except ValidationError as e:
        return jsonify({"message": e.message}), e.status_code
    except DuplicateEmail as e:
        return jsonify({"message": e.message}), e.status_code
    except StoreError:
        current_app.logger.exception("Failed to create cashier")
        return jsonify({"message": "Internal server error"}), 500
    except Exception:
        current_app.logger.exception("Failed to create cashier")
        return jsonify({"message": "Internal server error"}), 500


@cashiers_bp.delete("/<int:cashier_id>")
@require_admin
def delete_cashier_route(cashier_id: int):
    """Delete a cashier. Their recorded transactions are kept."""
    try:
        cashier_service.delete_cashier(cashier_id)
        return jsonify({"message": "Cashier removed successfully"}), 200
    except NotFoundError as e:
        return jsonify({"message": e.message}), e.status_code
    except StoreError:
        current_app.logger.exception("Failed to delete cashier %s", cashier_id)
        return jsonify({"message": "Internal server error"}), 500
