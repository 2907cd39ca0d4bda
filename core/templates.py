#!/usr/bin/env python3
"""
Formation templates for seeding the first frame of a new play.
Coordinates are on the 900x500 field canvas used by the play designer.
"""

from core.exceptions import NotFoundError, ValidationError
from core.models import PLAY_CATEGORIES

CANVAS_WIDTH = 900
CANVAS_HEIGHT = 500
CENTER_X = CANVAS_WIDTH / 2
CENTER_Y = CANVAS_HEIGHT / 2

ROLES = ["G", "S", "W", "C"]


def role_from_number(number):
    return ROLES[(number - 1) % len(ROLES)]


def team_position(marker_id, x, y, jersey_number, rotation=0):
    return {
        "id": marker_id,
        "x": x,
        "y": y,
        "jerseyNumber": jersey_number,
        "role": role_from_number(jersey_number),
        "displayMode": "letter",
        "isOpponent": False,
        "rotation": rotation,
        "hasBall": False,
    }


def opponent_position(marker_id, x, y, jersey_number, rotation=180):
    position = team_position(marker_id, x, y, jersey_number, rotation)
    position["isOpponent"] = True
    return position


FORMATION_TEMPLATES = [
    # === OFFENSIVE ===
    {
        "id": "2-1-1-offense",
        "name": "2-1-1 Formation",
        "description": "Two defenders, one midfielder, one striker",
        "category": "OFFENSIVE",
        "positions": [
            team_position("p1", 120, 180, 1),
            team_position("p2", 250, 150, 2),
            team_position("p3", 250, 310, 3),
            team_position("p4", 450, 230, 4),
        ],
        "ballPosition": {"x": 100, "y": 230},
    },
    {
        "id": "1-2-1-offense",
        "name": "1-2-1 Diamond",
        "description": "Diamond formation with midfield control",
        "category": "OFFENSIVE",
        "positions": [
            team_position("p1", 120, 230, 1),
            team_position("p2", 300, 140, 2, 30),
            team_position("p3", 300, 320, 3, -30),
            team_position("p4", 480, 230, 4),
        ],
        "ballPosition": {"x": 100, "y": 230},
    },
    {
        "id": "3-1-attack",
        "name": "3-1 Attack",
        "description": "Three players forward, keeper stays back",
        "category": "OFFENSIVE",
        "positions": [
            team_position("p1", 120, 230, 1),
            team_position("p2", 400, 120, 2, 30),
            team_position("p3", 400, 340, 3, -30),
            team_position("p4", 550, 230, 4),
        ],
        "ballPosition": {"x": 530, "y": 230},
    },
    {
        "id": "box-formation",
        "name": "Box Formation",
        "description": "Square formation for ball control",
        "category": "OFFENSIVE",
        "positions": [
            team_position("p1", 180, 150, 1),
            team_position("p2", 180, 310, 2),
            team_position("p3", 380, 150, 3),
            team_position("p4", 380, 310, 4),
        ],
        "ballPosition": {"x": 280, "y": 230},
    },
    {
        "id": "overload-left",
        "name": "Overload Left",
        "description": "Stack players on the left side to create space",
        "category": "OFFENSIVE",
        "positions": [
            team_position("p1", 120, 230, 1),
            team_position("p2", 350, 100, 2, 45),
            team_position("p3", 350, 200, 3, 30),
            team_position("p4", 500, 150, 4),
        ],
        "ballPosition": {"x": 330, "y": 150},
    },
    # === DEFENSIVE ===
    {
        "id": "zone-defense",
        "name": "Zone Defense",
        "description": "Protect the goal area with zone coverage",
        "category": "DEFENSIVE",
        "positions": [
            team_position("p1", 750, 230, 1, 180),
            team_position("p2", 620, 140, 2, 180),
            team_position("p3", 620, 320, 3, 180),
            team_position("p4", 500, 230, 4, 180),
        ],
    },
    {
        "id": "man-marking",
        "name": "Man-to-Man Marking",
        "description": "Each outfield player marks an opponent",
        "category": "DEFENSIVE",
        "positions": [
            team_position("p1", 780, 230, 1, 180),
            team_position("p2", 450, 140, 2, 180),
            team_position("p3", 450, 320, 3, 180),
            team_position("p4", 550, 230, 4, 180),
            opponent_position("o1", 400, 140, 1),
            opponent_position("o2", 400, 320, 2),
            opponent_position("o3", 500, 230, 3),
            opponent_position("o4", 300, 230, 4),
        ],
    },
    {
        "id": "high-press",
        "name": "High Press",
        "description": "Aggressive pressing high up the field",
        "category": "DEFENSIVE",
        "positions": [
            team_position("p1", 700, 230, 1, 180),
            team_position("p2", 350, 150, 2, 180),
            team_position("p3", 350, 310, 3, 180),
            team_position("p4", 450, 230, 4, 180),
        ],
    },
    {
        "id": "low-block",
        "name": "Low Block",
        "description": "Compact defensive shape near own goal",
        "category": "DEFENSIVE",
        "positions": [
            team_position("p1", 800, 230, 1, 180),
            team_position("p2", 680, 140, 2, 180),
            team_position("p3", 680, 320, 3, 180),
            team_position("p4", 680, 230, 4, 180),
        ],
    },
    # === SET PIECES ===
    {
        "id": "kickoff-offense",
        "name": "Kickoff (Attacking)",
        "description": "Standard kickoff formation",
        "category": "SET_PIECE",
        "positions": [
            team_position("p1", 120, 230, 1),
            team_position("p2", 380, 180, 2),
            team_position("p3", 380, 280, 3),
            team_position("p4", 430, 230, 4),
        ],
        "ballPosition": {"x": CENTER_X - 12, "y": CENTER_Y - 12},
    },
    {
        "id": "goal-kick",
        "name": "Goal Kick",
        "description": "Restart from goal kick",
        "category": "SET_PIECE",
        "positions": [
            team_position("p1", 100, 230, 1),
            team_position("p2", 250, 150, 2),
            team_position("p3", 250, 310, 3),
            team_position("p4", 400, 230, 4),
        ],
        "ballPosition": {"x": 80, "y": 230},
    },
    {
        "id": "corner-attack",
        "name": "Corner Kick Attack",
        "description": "Attacking corner kick setup",
        "category": "SET_PIECE",
        "positions": [
            team_position("p1", 200, 230, 1),
            team_position("p2", 700, 180, 2),
            team_position("p3", 700, 280, 3),
            team_position("p4", 850, 50, 4, -45),
        ],
        "ballPosition": {"x": 870, "y": 30},
    },
    {
        "id": "penalty-kick",
        "name": "Penalty Kick",
        "description": "Penalty kick setup",
        "category": "SET_PIECE",
        "positions": [
            team_position("p1", 200, 230, 1),
            team_position("p2", 600, 150, 2),
            team_position("p3", 600, 310, 3),
            team_position("p4", 720, 230, 4),
        ],
        "ballPosition": {"x": 700, "y": 230},
    },
]


def list_templates(category=None):
    if category is None:
        return list(FORMATION_TEMPLATES)
    if category not in PLAY_CATEGORIES:
        raise ValidationError(f"Invalid category: {category}")
    return [t for t in FORMATION_TEMPLATES if t["category"] == category]


def get_template(template_id):
    for template in FORMATION_TEMPLATES:
        if template["id"] == template_id:
            return template
    raise NotFoundError(f"Template {template_id} not found")


def template_frame(template_id):
    """Initial frame content (model attribute names) for a template"""
    template = get_template(template_id)
    return {
        "positions": [dict(p) for p in template["positions"]],
        "lines": [],
        "annotations": [],
        "ball_position": dict(template["ballPosition"]) if template.get("ballPosition") else None,
    }
