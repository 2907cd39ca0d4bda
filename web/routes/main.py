from flask import Blueprint, abort, render_template, request
from flask_login import current_user, login_required

from core import services
from core.accounts import resolve_team
from core.exceptions import NotFoundError
from core.models import PLAY_CATEGORIES

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
@login_required
def index():
    """Dashboard: the team's playbooks and plays"""
    team = resolve_team(current_user)
    category = request.args.get("category")
    if category not in PLAY_CATEGORIES:
        category = None

    playbooks, tags = services.list_playbooks(team)
    plays = services.list_plays(team, category=category, search=request.args.get("q"))

    return render_template(
        "index.html",
        team=team,
        playbooks=playbooks,
        plays=plays,
        tags=tags,
        categories=PLAY_CATEGORIES,
        current_category=category,
        stats={
            "playbooks": len(playbooks),
            "plays": len(plays),
            "published": sum(1 for p in plays if p.is_published),
        },
    )


@main_bp.route("/plays/<int:play_id>")
@login_required
def play_detail(play_id):
    """Read-only view of a play and its frames"""
    try:
        play = services.get_play(play_id, resolve_team(current_user))
    except NotFoundError:
        abort(404)
    return render_template("plays/view.html", play=play, frames=play.ordered_frames())


@main_bp.route("/playbooks/<int:playbook_id>")
@login_required
def playbook_detail(playbook_id):
    try:
        playbook = services.get_playbook(playbook_id, resolve_team(current_user))
    except NotFoundError:
        abort(404)
    return render_template("playbooks/view.html", playbook=playbook)
