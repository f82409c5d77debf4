# app.py — SkillSync Flask entrypoint (Render + Gunicorn friendly)

import os
import logging
from flask import Flask, request, jsonify
from flask_sqlalchemy import SQLAlchemy
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

# ---------- App base ----------
app = Flask(__name__)
app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

# Cookies / session
app.config["SESSION_COOKIE_HTTPONLY"] = True
app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
app.config["SESSION_COOKIE_SECURE"] = os.environ.get("FLASK_ENV") == "production"
app.secret_key = os.environ.get("SESSION_SECRET", "dev-secret-key-change-in-production")

# Logging
logging.basicConfig(level=logging.INFO)
log = logging.getLogger("skillsync")

# ---------- Database ----------
db_url = (
    os.environ.get("DATABASE_URL")
    or os.environ.get("SQLALCHEMY_DATABASE_URI")
    or "sqlite:///skillsync.db"
)
app.config["SQLALCHEMY_DATABASE_URI"] = db_url
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
db = SQLAlchemy(app)
log.info(f"DB: using {db_url.split('://',1)[0]}://***")

# ---------- HEAD short-circuit for "/" ----------
@app.before_request
def short_circuit_head_on_root():
    if request.method == "HEAD" and request.path == "/":
        return ("", 200)

# ---------- Health check ----------
@app.route("/healthz", methods=["GET", "HEAD"])
def healthz():
    return ("", 200)

# ---------- Routes and tables ----------
import models  # noqa: E402,F401  (tables must be known before create_all)
import routes  # noqa: E402,F401

with app.app_context():
    try:
        db.create_all()
        log.info("DB tables created/verified.")
    except Exception as e:
        log.error(f"DB init failed: {e}")
        raise

# ---------- Global error handler ----------
@app.errorhandler(Exception)
def handle_uncaught(e):
    if isinstance(e, HTTPException):
        return e
    log.exception("Unhandled error")
    return jsonify({"error": "Internal Server Error"}), 500
