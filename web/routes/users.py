"""
User administration endpoints, ADMIN only
"""

from flask import request
from flask_login import current_user
from flask_restx import Namespace, fields

from core import accounts
from core.models import USER_ROLES
from web.decorators import (
    SecuredResource,
    api_login_required,
    handle_service_errors,
    roles_required,
)

ns = Namespace("users", description="Account administration")

user_input = ns.model(
    "UserInput",
    {
        "firstName": fields.String,
        "lastName": fields.String,
        "email": fields.String,
        "password": fields.String(description="At least 8 characters"),
        "role": fields.String(enum=list(USER_ROLES)),
        "teamId": fields.Integer(description="Team to join (create only)"),
    },
)


class AdminResource(SecuredResource):
    method_decorators = [roles_required("ADMIN"), handle_service_errors, api_login_required]


@ns.route("")
class UserList(AdminResource):
    def get(self):
        """Every account, newest first"""
        return {"users": [user.to_dict() for user in accounts.list_users()]}

    @ns.expect(user_input)
    def post(self):
        """Create an account with any role"""
        user = accounts.create_user(request.get_json(silent=True))
        return {"user": user.to_dict()}, 201


@ns.route("/<int:user_id>")
class UserDetail(AdminResource):
    def get(self, user_id):
        return {"user": accounts.get_user(user_id).to_dict()}

    @ns.expect(user_input)
    def put(self, user_id):
        """Change name, email, role or password"""
        user = accounts.update_user(accounts.get_user(user_id), request.get_json(silent=True))
        return {"user": user.to_dict()}

    def delete(self, user_id):
        accounts.delete_user(accounts.get_user(user_id), current_user._get_current_object())
        return {"success": True}
