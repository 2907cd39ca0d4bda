from flask_bcrypt import Bcrypt
from flask_login import UserMixin
from flask_sqlalchemy import SQLAlchemy

from core.utils import full_name, isoformat, utcnow

db = SQLAlchemy()
bcrypt = Bcrypt()

PLAY_CATEGORIES = ("OFFENSIVE", "DEFENSIVE", "SET_PIECE")
USER_ROLES = ("ADMIN", "COACH", "PLAYER", "EQUIPMENT_MANAGER", "FAMILY")
EDITOR_ROLES = ("ADMIN", "COACH")


class User(UserMixin, db.Model):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    first_name = db.Column(db.String(80), nullable=False)
    last_name = db.Column(db.String(80), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="PLAYER")
    created_at = db.Column(db.DateTime, default=utcnow)

    memberships = db.relationship(
        "TeamMember", back_populates="user", cascade="all, delete-orphan"
    )

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def name(self):
        return full_name(self.first_name, self.last_name)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "name": self.name,
            "role": self.role,
            "createdAt": isoformat(self.created_at),
        }


class Team(db.Model):
    __tablename__ = "teams"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    members = db.relationship(
        "TeamMember", back_populates="team", cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {"id": self.id, "name": self.name}


class TeamMember(db.Model):
    __tablename__ = "team_members"
    __table_args__ = (db.UniqueConstraint("user_id", "team_id", name="uq_team_member"),)
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    team_id = db.Column(db.Integer, db.ForeignKey("teams.id"), nullable=False)
    joined_at = db.Column(db.DateTime, default=utcnow)

    user = db.relationship("User", back_populates="memberships")
    team = db.relationship("Team", back_populates="members")


class Playbook(db.Model):
    __tablename__ = "playbooks"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    team_id = db.Column(db.Integer, db.ForeignKey("teams.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # No delete cascade: removing a playbook nulls plays.playbook_id
    plays = db.relationship("Play", back_populates="playbook", order_by="Play.updated_at.desc()")

    def to_dict(self, include_plays=False):
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "teamId": self.team_id,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_plays:
            data["plays"] = [play.to_dict() for play in self.plays]
        return data


class Play(db.Model):
    __tablename__ = "plays"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(db.String(20), nullable=False, default="OFFENSIVE")
    tags = db.Column(db.JSON, nullable=False, default=list)
    is_published = db.Column(db.Boolean, nullable=False, default=False)
    team_id = db.Column(db.Integer, db.ForeignKey("teams.id"), nullable=False, index=True)
    created_by_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    playbook_id = db.Column(db.Integer, db.ForeignKey("playbooks.id"), nullable=True, index=True)
    version = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    created_by = db.relationship("User")
    playbook = db.relationship("Playbook", back_populates="plays")
    frames = db.relationship(
        "Frame",
        back_populates="play",
        order_by="Frame.frame_number",
        cascade="all, delete-orphan",
    )

    # Every UPDATE of a play row checks and bumps version
    __mapper_args__ = {"version_id_col": version}

    @property
    def author_name(self):
        return self.created_by.name if self.created_by else None

    def ordered_frames(self):
        return sorted(self.frames, key=lambda f: (f.frame_number, f.id or 0))

    def to_dict(self, include_frames=True):
        frames = self.ordered_frames()
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags or []),
            "isPublished": self.is_published,
            "teamId": self.team_id,
            "authorId": self.created_by_id,
            "authorName": self.author_name,
            "playbookId": self.playbook_id,
            "playbookName": self.playbook.name if self.playbook else None,
            "version": self.version,
            "frameCount": len(frames),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_frames:
            data["frames"] = [frame.to_dict() for frame in frames]
        return data


class Frame(db.Model):
    __tablename__ = "frames"
    id = db.Column(db.Integer, primary_key=True)
    play_id = db.Column(db.Integer, db.ForeignKey("plays.id"), nullable=False, index=True)
    # Not unique: renumbering inside a transaction passes through duplicates
    frame_number = db.Column(db.Integer, nullable=False, default=0)
    duration = db.Column(db.Float, nullable=False, default=1.0)
    positions = db.Column(db.JSON, nullable=False, default=list)
    lines = db.Column(db.JSON, nullable=False, default=list)
    annotations = db.Column(db.JSON, nullable=False, default=list)
    ball_position = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    play = db.relationship("Play", back_populates="frames")

    CONTENT_FIELDS = ("duration", "positions", "lines", "annotations", "ball_position")

    def content(self):
        return {field: getattr(self, field) for field in self.CONTENT_FIELDS}

    def to_dict(self):
        return {
            "id": self.id,
            "playId": self.play_id,
            "frameNumber": self.frame_number,
            "duration": self.duration,
            "positions": self.positions,
            "lines": self.lines,
            "annotations": self.annotations,
            "ballPosition": self.ball_position,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
