#!/usr/bin/env python3
"""
Seed a demo team with a coach, a playbook per category and one play per
formation template. Safe to run twice: existing plays are skipped by name.
"""

import os

from core.models import Frame, Play, Playbook, Team, TeamMember, User, db
from core.templates import FORMATION_TEMPLATES, template_frame

DEMO_TEAM = "Demo Team"
DEMO_COACH = {
    "email": "coach@example.com",
    "first_name": "Demo",
    "last_name": "Coach",
    "role": "COACH",
}

PLAYBOOKS_DATA = {
    "OFFENSIVE": ("Attack", "Build-up and attacking formations"),
    "DEFENSIVE": ("Defense", "Pressing and goal protection"),
    "SET_PIECE": ("Set Pieces", "Restarts: kickoffs, corners and penalties"),
}

TAGS_BY_CATEGORY = {
    "OFFENSIVE": ["attack"],
    "DEFENSIVE": ["defense"],
    "SET_PIECE": ["restart"],
}


def _demo_team():
    team = Team.query.filter_by(name=DEMO_TEAM).first()
    if team is None:
        team = Team(name=DEMO_TEAM)
        db.session.add(team)
    coach = User.query.filter_by(email=DEMO_COACH["email"]).first()
    if coach is None:
        coach = User(**DEMO_COACH)
        coach.set_password(os.getenv("DEMO_PASSWORD", "coach12345"))
        db.session.add(coach)
        db.session.add(TeamMember(user=coach, team=team))
    db.session.flush()
    return team, coach


def seed_plays():
    """Populate the demo team; returns the number of plays created"""
    team, coach = _demo_team()

    playbooks = {}
    for category, (name, description) in PLAYBOOKS_DATA.items():
        playbook = Playbook.query.filter_by(team_id=team.id, name=name).first()
        if playbook is None:
            playbook = Playbook(name=name, description=description, team_id=team.id)
            db.session.add(playbook)
        playbooks[category] = playbook

    created = 0
    for template in FORMATION_TEMPLATES:
        if Play.query.filter_by(team_id=team.id, name=template["name"]).first():
            continue
        play = Play(
            name=template["name"],
            description=template["description"],
            category=template["category"],
            tags=list(TAGS_BY_CATEGORY[template["category"]]),
            is_published=True,
            team_id=team.id,
            created_by=coach,
            playbook=playbooks[template["category"]],
        )
        play.frames.append(Frame(frame_number=0, duration=1.0, **template_frame(template["id"])))
        db.session.add(play)
        created += 1

    db.session.commit()
    return created
