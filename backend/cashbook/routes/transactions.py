# Overview: Flask API routes for ledger operations; parses input and returns JSON responses.

# backend/cashbook/routes/transactions.py
"""
Transaction Ledger API Routes

ACCESS:
- GET    /transactions                     admin (all owners)
- GET    /transactions/summary             admin
- GET    /transactions/<owner_id>          owner or admin
- GET    /transactions/<owner_id>/summary  owner or admin
- POST   /transactions                     any authenticated subject
- DELETE /transactions/<id>                any authenticated subject

OWNERSHIP ON CREATE:
- A cashier records for themselves. Omitting ownerId means "me";
  naming another ownerId is 403.
- An admin records on someone's behalf and must name ownerId.
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_admin, require_auth, ensure_owner_or_admin
from ..errors import Forbidden, NotFoundError, StoreError, ValidationError
from ..services import balance_service, cashier_service, ledger_service
from ..validation import parse_positive_id


transactions_bp = Blueprint("transactions", __name__, url_prefix="/transactions")


def _kind_filter():
    """Optional ?kind= filter; raises ValidationError on unknown kinds."""
    raw = request.args.get("kind")
    if raw is None or not raw.strip():
        return None
    return ledger_service.parse_kind(raw)


@transactions_bp.get("")
@require_admin
def list_all_route():
    try:
        rows = ledger_service.list_all(kind=_kind_filter())
        return jsonify([r.to_dict() for r in rows]), 200
    except ValidationError as e:
        return jsonify({"message": e.message}), e.status_code
    except StoreError:
        current_app.logger.exception("Failed to list transactions")
        return jsonify({"message": "Internal server error"}), 500


@transactions_bp.get("/summary")
@require_admin
def global_summary_route():
    """Dashboard totals across all owners plus the current cashier count."""
    try:
        summary = balance_service.summarize(ledger_service.list_all())
        cashier_count = cashier_service.count_cashiers()
        return jsonify({
            "summary": summary.to_dict(),
            "cashierCount": cashier_count,
        }), 200
    except StoreError:
        current_app.logger.exception("Failed to summarize ledger")
        return jsonify({"message": "Internal server error"}), 500


@transactions_bp.get("/<int:owner_id>")
@require_auth
def list_by_owner_route(owner_id: int):
    try:
        ensure_owner_or_admin(owner_id)
        rows = ledger_service.list_by_owner(owner_id, kind=_kind_filter())
        return jsonify([r.to_dict() for r in rows]), 200
    except Forbidden as e:
        return jsonify({"message": e.message}), e.status_code
    except ValidationError as e:
        return jsonify({"message": e.message}), e.status_code
    except StoreError:
        current_app.logger.exception("Failed to list transactions for owner %s", owner_id)
        return jsonify({"message": "Internal server error"}), 500


@transactions_bp.get("/<int:owner_id>/summary")
@require_auth
def owner_summary_route(owner_id: int):
    try:
        ensure_owner_or_admin(owner_id)
        summary = balance_service.summarize(ledger_service.list_by_owner(owner_id))
        return jsonify({"ownerId": owner_id, "summary": summary.to_dict()}), 200
    except Forbidden as e:
        return jsonify({"message": e.message}), e.status_code
    except StoreError:
        current_app.logger.exception("Failed to summarize owner %s", owner_id)
        return jsonify({"message": "Internal server error"}), 500


@transactions_bp.post("")
@require_auth
def record_transaction_route():
    """
    Record a ledger entry.

    Request body:
    {
        "ownerId": 3,            // optional for cashiers (defaults to caller), required for admins
        "ownerName": "Ada",      // required
        "amount": 19.99,         // required, > 0, at most 2 decimals
        "kind": "sale",          // sale | refund | void | income | expense
        "description": "..."     // optional
    }

    Failures:
    - 400 malformed body or field (nothing is stored)
    - 400 admin caller without ownerId
    - 403 cashier naming an ownerId other than their own
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        identity = g.identity
        owner_id = data.get("ownerId")
        if identity.is_admin:
            if owner_id is None:
                raise ValidationError("ownerId is required when recording as admin")
        elif owner_id is None:
            owner_id = identity.subject_id
        else:
            # Compare after parsing so "3" and 3 mean the same owner
            if parse_positive_id("ownerId", owner_id) != identity.subject_id:
                raise Forbidden("Access forbidden. Cashiers may only record their own transactions.")

        tx = ledger_service.record_transaction(
            owner_id=owner_id,
            owner_name=data.get("ownerName"),
            amount=data.get("amount"),
            kind=data.get("kind"),
            description=data.get("description"),
        )
        return jsonify(tx.to_dict()), 201

    except ValidationError as e:
        return jsonify({"message": e.message}), e.status_code
    except Forbidden as e:
        return jsonify({"message": e.message}), e.status_code
    except StoreError:
        current_app.logger.exception("Failed to record transaction")
        return jsonify({"message": "Internal server error"}), 500
    except Exception:
        current_app.logger.exception("Failed to record transaction")
        return jsonify({"message": "Internal server error"}), 500


@transactions_bp.delete("/<int:transaction_id>")
@require_auth
def delete_transaction_route(transaction_id: int):
    try:
        ledger_service.remove_transaction(transaction_id)
        return jsonify({"message": "Transaction deleted successfully"}), 200
    except NotFoundError as e:
        return jsonify({"message": e.message}), e.status_code
    except StoreError:
        current_app.logger.exception("Failed to delete transaction %s", transaction_id)
        return jsonify({"message": "Internal server error"}), 500
