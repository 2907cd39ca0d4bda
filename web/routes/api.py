#!/usr/bin/env python3
"""
REST API Routes
JSON endpoints for the play designer, authenticated by the session cookie
"""

import logging

from flask import Blueprint, current_app, request
from flask_login import current_user, login_user, logout_user
from flask_restx import Api, Resource, abort, fields

from core import accounts, templates
from web import cache, limiter
from web.decorators import SecuredResource, current_team, handle_service_errors
from web.routes.playbooks import ns as ns_playbooks
from web.routes.plays import ns as ns_plays
from web.routes.users import ns as ns_users

# Create blueprint
api_bp = Blueprint("api", __name__)
logger = logging.getLogger(__name__)

# Initialize API with documentation
api = Api(
    api_bp,
    version="1.0",
    title="Team Playbook API",
    description="Playbooks, plays and animation frames for the play designer",
    doc="/docs",
)

# Namespaces
ns_auth = api.namespace("auth", description="Session login and registration")
ns_templates = api.namespace("templates", description="Formation templates")
api.add_namespace(ns_playbooks)
api.add_namespace(ns_plays)
api.add_namespace(ns_users)

# Models for documentation
login_model = api.model(
    "Login",
    {
        "email": fields.String(required=True),
        "password": fields.String(required=True),
    },
)

register_model = api.model(
    "Register",
    {
        "firstName": fields.String(required=True),
        "lastName": fields.String(required=True),
        "email": fields.String(required=True),
        "password": fields.String(required=True),
        "role": fields.String(required=True, enum=["COACH", "PLAYER", "EQUIPMENT_MANAGER", "FAMILY"]),
        "teamId": fields.Integer(description="Join this team on creation"),
    },
)


def _login_limit():
    return current_app.config["LOGIN_RATE_LIMIT"]


@ns_auth.route("/register")
class Register(Resource):
    method_decorators = [handle_service_errors]

    @ns_auth.expect(register_model)
    def post(self):
        """Create an account"""
        user = accounts.register_user(request.get_json(silent=True))
        return {"user": user.to_dict()}, 201


@ns_auth.route("/login")
class Login(Resource):
    method_decorators = [handle_service_errors]
    decorators = [limiter.limit(_login_limit)]

    @ns_auth.expect(login_model)
    def post(self):
        """Start a session"""
        data = request.get_json(silent=True) or {}
        user = accounts.authenticate(data.get("email"), data.get("password"))
        if user is None:
            abort(401, "Invalid email or password")
        login_user(user, remember=bool(data.get("remember")))
        logger.info("API login for %s", user.email)
        return {"user": user.to_dict()}


@ns_auth.route("/logout")
class Logout(SecuredResource):
    def post(self):
        logout_user()
        return {"success": True}


@ns_auth.route("/me")
class CurrentUser(SecuredResource):
    def get(self):
        """Session identity and the team it resolves to"""
        team = current_team()
        data = current_user.to_dict()
        data["userId"] = current_user.id
        data["team"] = team.to_dict() if team else None
        return {"user": data}


@ns_templates.route("")
class TemplateList(SecuredResource):
    @ns_templates.doc("list_templates", params={"category": "OFFENSIVE | DEFENSIVE | SET_PIECE"})
    @cache.cached(query_string=True)
    def get(self):
        """Formation templates for a new play's first frame"""
        return {"templates": templates.list_templates(request.args.get("category"))}


@api.route("/health")
class HealthCheck(Resource):
    def get(self):
        return {"status": "healthy"}
