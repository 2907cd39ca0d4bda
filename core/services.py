"""
Play, frame and playbook operations.

Each public function is one unit of work: it validates, mutates the session
and commits once. Nothing is written when a check fails; the uncommitted
session is discarded with the request.
"""

import copy
import logging

from flask import current_app
from sqlalchemy.orm.exc import StaleDataError

from core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.models import Frame, Play, Playbook, db
from core.templates import template_frame
from core.utils import clamp, sequence_order, utcnow
from core.validators import DataValidator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _commit():
    try:
        db.session.commit()
    except StaleDataError as exc:
        db.session.rollback()
        logger.warning("Concurrent play update rejected: %s", exc)
        raise ConflictError("Play was modified by another request. Reload and retry.") from exc


def _check_version(play, expected_version):
    if expected_version is not None and expected_version != play.version:
        logger.warning(
            "Stale write on play %s: expected version %s, current %s",
            play.id, expected_version, play.version,
        )
        raise ConflictError(
            f"Play is at version {play.version}, request was based on version {expected_version}"
        )


def _touch(play):
    # Forces an UPDATE of the play row, which checks and bumps its version
    play.updated_at = utcnow()


def _max_frames():
    return current_app.config.get("MAX_FRAMES_PER_PLAY", 200)


def _name_limit():
    return current_app.config.get("MAX_NAME_LENGTH", 200)


def _tag_limit():
    return current_app.config.get("MAX_TAGS_PER_PLAY", 30)


def _new_frame(number, content):
    return Frame(
        frame_number=number,
        duration=content.get("duration", current_app.config.get("DEFAULT_FRAME_DURATION", 1.0)),
        positions=content.get("positions", []),
        lines=content.get("lines", []),
        annotations=content.get("annotations", []),
        ball_position=content.get("ball_position"),
    )


def _apply_content(frame, content):
    for field in Frame.CONTENT_FIELDS:
        if field in content:
            setattr(frame, field, content[field])


def _team_playbook(playbook_id, team_id):
    playbook = db.session.get(Playbook, playbook_id)
    if playbook is None or playbook.team_id != team_id:
        raise NotFoundError("Playbook not found")
    return playbook


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def get_play(play_id, team):
    """Play of the caller's team; other teams' plays read as missing"""
    play = db.session.get(Play, play_id)
    if play is None or team is None or play.team_id != team.id:
        raise NotFoundError("Play not found")
    return play


def get_playbook(playbook_id, team):
    if team is None:
        raise NotFoundError("Playbook not found")
    return _team_playbook(playbook_id, team.id)


def get_frame(play, frame_id):
    frame = db.session.get(Frame, frame_id)
    if frame is None or frame.play_id != play.id:
        raise NotFoundError("Frame not found")
    return frame


# ---------------------------------------------------------------------------
# Plays
# ---------------------------------------------------------------------------

def list_plays(team, playbook_id=None, category=None, tag=None, search=None):
    if team is None:
        return []

    query = Play.query.filter_by(team_id=team.id)
    if playbook_id is not None:
        query = query.filter_by(playbook_id=playbook_id)
    if category:
        query = query.filter_by(category=DataValidator.validate_category(category))
    plays = query.order_by(Play.updated_at.desc(), Play.id.desc()).all()

    # Tags are a JSON list, filtered here to stay portable across backends
    if tag:
        wanted = tag.strip().lower()
        plays = [p for p in plays if wanted in (p.tags or [])]
    if search:
        term = search.strip().lower()
        plays = [p for p in plays if term in p.name.lower() or term in (p.tags or [])]
    return plays


def create_play(team, user, data):
    if team is None:
        raise PermissionDeniedError("No team found. Please create a team first.")

    data = DataValidator.require_payload(data)
    name = DataValidator.require_name(data.get("name"), "Play name", _name_limit())
    category = DataValidator.validate_category(data.get("category") or "OFFENSIVE")
    tags = DataValidator.validate_tags(data.get("tags") or [], _tag_limit())
    description = DataValidator.optional_text(data.get("description"))
    is_published = False
    if "isPublished" in data:
        is_published = DataValidator.validate_bool(data["isPublished"], "isPublished")

    playbook = None
    playbook_id = DataValidator.optional_int(data.get("playbookId"), "playbookId")
    if playbook_id is not None:
        playbook = _team_playbook(playbook_id, team.id)

    initial = data.get("initialFrame")
    if initial is not None:
        if not isinstance(initial, dict):
            raise ValidationError("initialFrame must be an object")
        content = DataValidator.validate_frame_content(initial)
    elif data.get("templateId"):
        content = template_frame(data["templateId"])
    else:
        content = {}

    play = Play(
        name=name,
        description=description,
        category=category,
        tags=tags,
        is_published=is_published,
        team_id=team.id,
        created_by=user,
        playbook=playbook,
    )
    play.frames.append(_new_frame(0, content))
    db.session.add(play)
    _commit()

    logger.info("Created play %s '%s' for team %s", play.id, play.name, team.id)
    return play


def update_play(play, data):
    """
    Partial metadata update. A ``frames`` list, when given, becomes the
    play's complete frame sequence in list order.
    """
    data = DataValidator.require_payload(data)
    _check_version(play, DataValidator.validate_version(data))

    # Lookups run before the play is dirtied so no stale UPDATE is autoflushed
    playbook = None
    if "playbookId" in data:
        playbook_id = DataValidator.optional_int(data["playbookId"], "playbookId")
        if playbook_id is not None:
            playbook = _team_playbook(playbook_id, play.team_id)
    entries = None
    if data.get("frames") is not None:
        entries = DataValidator.validate_frame_list(data["frames"])

    with db.session.no_autoflush:
        if "name" in data:
            play.name = DataValidator.require_name(data["name"], "Play name", _name_limit())
        if "description" in data:
            play.description = DataValidator.optional_text(data["description"])
        if "category" in data:
            play.category = DataValidator.validate_category(data["category"])
        if "tags" in data:
            play.tags = DataValidator.validate_tags(data["tags"], _tag_limit())
        if "isPublished" in data:
            play.is_published = DataValidator.validate_bool(data["isPublished"], "isPublished")
        if "playbookId" in data:
            play.playbook = playbook
        if entries is not None:
            sync_frames(play, entries)
        _touch(play)

    _commit()
    logger.info("Updated play %s (version %s)", play.id, play.version)
    return play


def sync_frames(play, entries):
    """
    Make the play's frames match ``entries``: update frames named by id,
    create the rest, drop existing frames that are not named. Numbers are
    reassigned 0..N-1 in the submitted order.
    """
    if len(entries) > _max_frames():
        raise ValidationError(f"A play can have at most {_max_frames()} frames")

    existing = {frame.id: frame for frame in play.frames}
    kept = set()
    for number, entry in enumerate(sequence_order(entries)):
        frame = existing.get(entry["id"])
        if frame is None or frame.id in kept:
            play.frames.append(_new_frame(number, entry))
            continue
        kept.add(frame.id)
        _apply_content(frame, entry)
        frame.frame_number = number

    for frame in list(play.frames):
        if frame.id is not None and frame.id not in kept:
            play.frames.remove(frame)


def delete_play(play):
    play_id, name = play.id, play.name
    db.session.delete(play)
    _commit()
    logger.info("Deleted play %s '%s'", play_id, name)


def duplicate_play(play_id, team, user, new_name=None):
    """
    Copy a play and all of its frames into a new, unpublished play owned by
    ``user``. Frame content is deep-copied so the copy is independent.
    """
    source = get_play(play_id, team)

    if new_name:
        name = DataValidator.require_name(new_name, "newName", _name_limit())
    else:
        name = f"{source.name} (Copy)"[:_name_limit()]

    duplicate = Play(
        name=name,
        description=source.description,
        category=source.category,
        tags=list(source.tags or []),
        is_published=False,
        team_id=source.team_id,
        created_by=user,
        playbook_id=source.playbook_id,
    )
    for frame in source.ordered_frames():
        duplicate.frames.append(
            Frame(frame_number=frame.frame_number, **copy.deepcopy(frame.content()))
        )
    db.session.add(duplicate)
    _commit()

    logger.info("Duplicated play %s into %s '%s'", source.id, duplicate.id, duplicate.name)
    return duplicate


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

def list_frames(play):
    return play.ordered_frames()


def add_frame(play, data):
    """Insert a frame at ``frameNumber`` (clamped) or append it"""
    data = DataValidator.require_payload(data)
    _check_version(play, DataValidator.validate_version(data))
    entry = DataValidator.validate_frame_entry(data)

    frames = play.ordered_frames()
    if len(frames) >= _max_frames():
        raise ValidationError(f"A play can have at most {_max_frames()} frames")

    position = len(frames)
    if entry["frame_number"] is not None:
        position = clamp(entry["frame_number"], 0, len(frames))
    for index, frame in enumerate(frames):
        frame.frame_number = index if index < position else index + 1

    frame = _new_frame(position, entry)
    play.frames.append(frame)
    _touch(play)
    _commit()

    logger.info("Added frame %s at position %s to play %s", frame.id, position, play.id)
    return frame


def update_frame(play, frame, data):
    data = DataValidator.require_payload(data)
    _check_version(play, DataValidator.validate_version(data))
    _apply_content(frame, DataValidator.validate_frame_content(data))
    _touch(play)
    _commit()
    return frame


def delete_frame(play, frame, expected_version=None):
    """Delete one frame and close the gap so numbers stay 0..N-2"""
    _check_version(play, expected_version)
    frame_id = frame.id

    play.frames.remove(frame)
    for index, remaining in enumerate(play.ordered_frames()):
        remaining.frame_number = index
    _touch(play)
    _commit()

    logger.info("Deleted frame %s from play %s", frame_id, play.id)
    return play.ordered_frames()


def reorder_frames(play, frames, expected_version=None):
    """
    Bulk update of a play's complete frame list in one transaction.

    Every frame of the play must be named exactly once. Frames are ordered
    by their submitted ``frameNumber`` (list position when absent) and
    renumbered 0..N-1; content keys present in an entry are applied too.
    """
    entries = DataValidator.validate_frame_list(frames, require_id=True)
    ids = [entry["id"] for entry in entries]
    if len(set(ids)) != len(ids):
        raise ValidationError("Frame list contains duplicate ids")

    current = {frame.id: frame for frame in play.frames}
    for frame_id in ids:
        if frame_id in current:
            continue
        if db.session.get(Frame, frame_id) is None:
            raise NotFoundError(f"Frame {frame_id} not found")
        raise ValidationError(f"Frame {frame_id} does not belong to play {play.id}")
    if set(ids) != set(current):
        raise ValidationError("Frame list must include every frame of the play exactly once")

    _check_version(play, expected_version)

    for number, entry in enumerate(sequence_order(entries)):
        frame = current[entry["id"]]
        _apply_content(frame, entry)
        frame.frame_number = number
    _touch(play)
    _commit()

    logger.info("Reordered %s frames of play %s (version %s)", len(ids), play.id, play.version)
    return play.ordered_frames()


# ---------------------------------------------------------------------------
# Playbooks
# ---------------------------------------------------------------------------

def list_playbooks(team):
    """Team playbooks plus the sorted set of tags used by their plays"""
    if team is None:
        return [], []
    playbooks = (
        Playbook.query.filter_by(team_id=team.id)
        .order_by(Playbook.updated_at.desc(), Playbook.id.desc())
        .all()
    )
    tags = sorted({tag for pb in playbooks for play in pb.plays for tag in (play.tags or [])})
    return playbooks, tags


def create_playbook(team, data):
    if team is None:
        raise PermissionDeniedError("No team found. Please create a team first.")
    data = DataValidator.require_payload(data)
    playbook = Playbook(
        name=DataValidator.require_name(data.get("name"), "Playbook name", _name_limit()),
        description=DataValidator.optional_text(data.get("description")),
        team_id=team.id,
    )
    db.session.add(playbook)
    db.session.commit()
    logger.info("Created playbook %s '%s' for team %s", playbook.id, playbook.name, team.id)
    return playbook


def update_playbook(playbook, data):
    data = DataValidator.require_payload(data)
    if "name" in data:
        playbook.name = DataValidator.require_name(data["name"], "Playbook name", _name_limit())
    if "description" in data:
        playbook.description = DataValidator.optional_text(data["description"])
    db.session.commit()
    return playbook


def delete_playbook(playbook):
    """Delete a playbook; its plays stay with the team, detached"""
    playbook_id = playbook.id
    detached = len(playbook.plays)
    db.session.delete(playbook)
    _commit()
    logger.info("Deleted playbook %s, detached %s plays", playbook_id, detached)
