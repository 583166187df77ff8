# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/cashbook/routes/auth.py
"""
Authentication API routes

- Login per role: POST /auth/login/admin, POST /auth/login/cashier
- Wrong secret and unknown email answer the same 400 body
- Tokens are stateless; there is no logout endpoint (clients discard them)
- Admin self-registration is disabled; use `flask admins create`
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_auth
from ..errors import InvalidCredentials, StoreError, ValidationError
from ..extensions import db
from ..models import Account, Role
from ..services import auth_service, session_service
from ..time_utils import to_utc_z


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.post("/login/<role>")
def login_route(role: str):
    """
    Authenticate an admin or cashier and issue a session token.

    Request body:
    {
        "email": "ada@x.com",
        "secret": "..."        // "password" is accepted as an alias
    }

    Returns token, expiry and identity summary on success.
    Token must be sent as "Authorization: Bearer <token>" on protected routes.
    """
    role_enum = Role.parse(role)
    if role_enum is None:
        return jsonify({"message": f"Unknown role: {role}"}), 404

    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        email = data.get("email")
        secret = data.get("secret", data.get("password"))

        account = auth_service.authenticate(role_enum, email, secret)
        issued = session_service.issue_token(account)

        return jsonify({
            "token": issued.token,
            "expiresAt": to_utc_z(issued.expires_at),
            "identity": {
                "id": account.id,
                "role": account.role,
                "name": account.name,
                "email": account.email,
            },
            "message": "Login successful",
        }), 200

    except InvalidCredentials as e:
        return jsonify({"message": e.message}), e.status_code
    except ValidationError as e:
        return jsonify({"message": e.message}), e.status_code
    except StoreError:
        current_app.logger.exception("Store failure during login")
        return jsonify({"message": "Internal server error"}), 500
    except Exception:
        current_app.logger.exception("Failed to login")
        return jsonify({"message": "Internal server error"}), 500


@auth_bp.get("/me")
@require_auth
def me_route():
    """
    Return the identity carried by the caller's token.

    The name/email lookup is best effort: a deleted cashier's still-valid
    token keeps working until expiry and reports no profile.
    """
    identity = g.identity
    try:
        account = db.session.get(Account, identity.subject_id)
    except Exception:
        current_app.logger.exception("Failed to load account for identity")
        return jsonify({"message": "Internal server error"}), 500

    body = identity.to_dict()
    if account is not None and account.role == identity.role.value:
        body["name"] = account.name
        body["email"] = account.email
    return jsonify({"identity": body}), 200
