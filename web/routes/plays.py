"""
Play and frame endpoints
"""

from flask import request
from flask_login import current_user
from flask_restx import Namespace, fields

from core import services
from core.models import EDITOR_ROLES
from core.validators import DataValidator
from web.decorators import SecuredResource, current_team, roles_required

ns = Namespace("plays", description="Plays and their animation frames")

frame_input = ns.model(
    "FrameInput",
    {
        "id": fields.Integer(description="Frame ID (bulk updates)"),
        "frameNumber": fields.Integer(description="Position in the animation"),
        "duration": fields.Float(description="Seconds", default=1.0),
        "positions": fields.List(fields.Raw, description="Player markers"),
        "lines": fields.List(fields.Raw, description="Connector lines"),
        "annotations": fields.List(fields.Raw, description="Text and drawings"),
        "ballPosition": fields.Raw(description="{x, y} or null"),
        "version": fields.Integer(description="Play version the edit is based on"),
    },
)

play_input = ns.model(
    "PlayInput",
    {
        "name": fields.String(required=True),
        "description": fields.String,
        "category": fields.String(enum=["OFFENSIVE", "DEFENSIVE", "SET_PIECE"]),
        "tags": fields.List(fields.String),
        "isPublished": fields.Boolean,
        "playbookId": fields.Integer,
        "templateId": fields.String(description="Formation template for frame 0"),
        "initialFrame": fields.Nested(frame_input),
        "frames": fields.List(fields.Nested(frame_input), description="Full frame list (update only)"),
        "version": fields.Integer,
    },
)

reorder_input = ns.model(
    "FrameReorder",
    {
        "frames": fields.List(fields.Nested(frame_input), required=True),
        "version": fields.Integer,
    },
)

duplicate_input = ns.model("PlayDuplicate", {"newName": fields.String})


def _team_play(play_id):
    return services.get_play(play_id, current_team())


@ns.route("")
class PlayList(SecuredResource):
    @ns.doc("list_plays", params={
        "playbookId": "Only plays of this playbook",
        "category": "OFFENSIVE | DEFENSIVE | SET_PIECE",
        "tag": "Exact tag",
        "search": "Name substring or tag",
    })
    def get(self):
        """List the team's plays, newest first"""
        playbook_id = DataValidator.optional_int(request.args.get("playbookId"), "playbookId")
        plays = services.list_plays(
            current_team(),
            playbook_id=playbook_id,
            category=request.args.get("category"),
            tag=request.args.get("tag"),
            search=request.args.get("search"),
        )
        return {"plays": [play.to_dict() for play in plays]}

    @ns.expect(play_input)
    @roles_required(*EDITOR_ROLES)
    def post(self):
        """Create a play with its first frame"""
        play = services.create_play(
            current_team(), current_user._get_current_object(), request.get_json(silent=True)
        )
        return {"play": play.to_dict()}, 201


@ns.route("/<int:play_id>")
class PlayDetail(SecuredResource):
    def get(self, play_id):
        """Play with all frames"""
        return {"play": _team_play(play_id).to_dict()}

    @ns.expect(play_input)
    @roles_required(*EDITOR_ROLES)
    def put(self, play_id):
        """Update metadata and optionally replace the frame list"""
        play = services.update_play(_team_play(play_id), request.get_json(silent=True))
        return {"play": play.to_dict()}

    @roles_required(*EDITOR_ROLES)
    def delete(self, play_id):
        """Delete a play and its frames"""
        services.delete_play(_team_play(play_id))
        return {"success": True}


@ns.route("/<int:play_id>/duplicate")
class PlayDuplicate(SecuredResource):
    @ns.expect(duplicate_input)
    @roles_required(*EDITOR_ROLES)
    def post(self, play_id):
        """Copy a play and its frames into a new unpublished play"""
        data = request.get_json(silent=True) or {}
        DataValidator.require_payload(data)
        new_name = data.get("newName")
        play = services.duplicate_play(
            play_id, current_team(), current_user._get_current_object(), new_name
        )
        return {"play": play.to_dict()}, 201


@ns.route("/<int:play_id>/frames")
class FrameList(SecuredResource):
    def get(self, play_id):
        """Frames ordered by frame number"""
        frames = services.list_frames(_team_play(play_id))
        return {"frames": [frame.to_dict() for frame in frames]}

    @ns.expect(frame_input)
    @roles_required(*EDITOR_ROLES)
    def post(self, play_id):
        """Append a frame, or insert it at frameNumber"""
        frame = services.add_frame(_team_play(play_id), request.get_json(silent=True))
        return {"frame": frame.to_dict()}, 201

    @ns.expect(reorder_input)
    @roles_required(*EDITOR_ROLES)
    def put(self, play_id):
        """Reorder and update every frame of the play atomically"""
        data = DataValidator.require_payload(request.get_json(silent=True))
        play = _team_play(play_id)
        frames = services.reorder_frames(
            play, data.get("frames"), DataValidator.validate_version(data)
        )
        return {"frames": [frame.to_dict() for frame in frames], "version": play.version}


@ns.route("/<int:play_id>/frames/<int:frame_id>")
class FrameDetail(SecuredResource):
    def get(self, play_id, frame_id):
        frame = services.get_frame(_team_play(play_id), frame_id)
        return {"frame": frame.to_dict()}

    @ns.expect(frame_input)
    @roles_required(*EDITOR_ROLES)
    def put(self, play_id, frame_id):
        play = _team_play(play_id)
        frame = services.update_frame(
            play, services.get_frame(play, frame_id), request.get_json(silent=True)
        )
        return {"frame": frame.to_dict()}

    @ns.doc(params={"version": "Play version the delete is based on"})
    @roles_required(*EDITOR_ROLES)
    def delete(self, play_id, frame_id):
        """Delete a frame and renumber the rest"""
        play = _team_play(play_id)
        version = DataValidator.optional_int(request.args.get("version"), "version")
        remaining = services.delete_frame(play, services.get_frame(play, frame_id), version)
        return {
            "success": True,
            "frames": [frame.to_dict() for frame in remaining],
            "version": play.version,
        }
