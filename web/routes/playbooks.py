"""
Playbook endpoints
"""

from flask import request
from flask_restx import Namespace, fields

from core import services
from core.models import EDITOR_ROLES
from web.decorators import SecuredResource, current_team, roles_required

ns = Namespace("playbooks", description="Named collections of plays")

playbook_input = ns.model(
    "PlaybookInput",
    {
        "name": fields.String(required=True, description="Playbook name"),
        "description": fields.String(description="Free text"),
    },
)


@ns.route("")
class PlaybookList(SecuredResource):
    @ns.doc("list_playbooks")
    def get(self):
        """Team playbooks with nested plays and every tag in use"""
        playbooks, tags = services.list_playbooks(current_team())
        return {
            "playbooks": [pb.to_dict(include_plays=True) for pb in playbooks],
            "availableTags": tags,
        }

    @ns.expect(playbook_input)
    @roles_required(*EDITOR_ROLES)
    def post(self):
        playbook = services.create_playbook(current_team(), request.get_json(silent=True))
        return {"playbook": playbook.to_dict(include_plays=True)}, 201


@ns.route("/<int:playbook_id>")
class PlaybookDetail(SecuredResource):
    def get(self, playbook_id):
        """Playbook with nested plays, each with its frames"""
        playbook = services.get_playbook(playbook_id, current_team())
        return {"playbook": playbook.to_dict(include_plays=True)}

    @ns.expect(playbook_input)
    @roles_required(*EDITOR_ROLES)
    def put(self, playbook_id):
        playbook = services.get_playbook(playbook_id, current_team())
        playbook = services.update_playbook(playbook, request.get_json(silent=True))
        return {"playbook": playbook.to_dict(include_plays=True)}

    @roles_required(*EDITOR_ROLES)
    def delete(self, playbook_id):
        """Delete a playbook; its plays are kept and detached"""
        services.delete_playbook(services.get_playbook(playbook_id, current_team()))
        return {"success": True}
