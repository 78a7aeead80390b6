from flask import current_app, jsonify, request
from flask_login import login_user, logout_user, current_user
from sqlalchemy.exc import IntegrityError

from quizportal import db
from quizportal.config import config
from quizportal.auth import auth_bp
from quizportal.auth.models import User
from quizportal.auth.utils import (
    hash_password,
    is_valid_email,
    validate_password,
    verify_password,
)
from quizportal.common.decorators import api_login_required
from quizportal.security import SecurityLogger


@auth_bp.route("/", methods=["GET"])
def auth_root():
    """Simple health/info endpoint for auth API."""
    base_path = config.AUTH_API_PREFIX
    return jsonify(
        {
            "status": "ok",
            "message": "Auth API is running",
            "endpoints": [
                f"{base_path}/signup",
                f"{base_path}/login",
                f"{base_path}/logout",
                f"{base_path}/me",
            ],
        }
    ), 200


@auth_bp.route("/signup", methods=["POST"])
def signup():
    """Create a student account and log it in."""
    data = request.get_json(silent=True) or {}
    full_name = str(data.get("name") or data.get("full_name") or "").strip()
    email = str(data.get("email") or "").strip().lower()
    password = str(data.get("password") or "")

    if not full_name or not email or not password:
        return jsonify({"success": False, "error": "Name, email and password are required"}), 400

    if not is_valid_email(email):
        return jsonify({"success": False, "error": "Please provide a valid email address"}), 400

    ok, error = validate_password(password)
    if not ok:
        return jsonify({"success": False, "error": error}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"success": False, "error": "User with this email already exists"}), 409

    user = User(
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        user_type=config.DEFAULT_USER_TYPE,
    )
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup for the same address
        db.session.rollback()
        return jsonify({"success": False, "error": "User with this email already exists"}), 409

    login_user(user)
    current_app.logger.info(f"New account created: {email} ({user.user_type})")
    return jsonify({
        "success": True,
        "message": "Account created successfully",
        "role": user.user_type,
        "user": user.to_dict(),
    }), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    email = str(data.get("email") or "").strip().lower()
    password = str(data.get("password") or "")
    remember = bool(data.get("remember", False))

    if not email or not password:
        return jsonify({"success": False, "error": "Email and password are required"}), 400

    if not is_valid_email(email):
        return jsonify({"success": False, "error": "Please provide a valid email address"}), 400

    user = User.query.filter_by(email=email).first()
    if not user or not verify_password(password, user.password_hash):
        SecurityLogger.log_failed_login(email)
        return jsonify({"success": False, "error": "Invalid email or password"}), 401

    login_user(user, remember=remember)
    SecurityLogger.log_successful_login(user.id, user.email)

    return jsonify({
        "success": True,
        "role": user.user_type,
        "user": user.to_dict(),
    }), 200


@auth_bp.route("/logout", methods=["POST"])
def logout_route():
    """Logout route."""
    logout_user()
    return jsonify({"success": True, "message": "Logged out"}), 200


@auth_bp.route("/me", methods=["GET"])
@api_login_required
def me():
    return jsonify({"success": True, "user": current_user.to_dict()}), 200
