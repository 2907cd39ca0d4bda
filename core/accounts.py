"""
User, team and membership management
"""

import logging

from core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.models import EDITOR_ROLES, Play, Team, TeamMember, User, db
from core.validators import DataValidator

logger = logging.getLogger(__name__)


def resolve_team(user):
    """
    Team a user works in: their first membership, or for coaches and
    admins without one, the first team in the store.
    """
    if user is None:
        return None
    membership = TeamMember.query.filter_by(user_id=user.id).order_by(TeamMember.id).first()
    if membership:
        return membership.team
    if user.role in EDITOR_ROLES:
        return Team.query.order_by(Team.id).first()
    return None


def register_user(data, allow_admin=False):
    DataValidator.require_payload(data)
    DataValidator.validate_registration(data)
    role = DataValidator.validate_role(data["role"])
    if role == "ADMIN" and not allow_admin:
        raise PermissionDeniedError("Administrator accounts cannot be self-registered")

    email = data["email"].strip().lower()
    if User.query.filter_by(email=email).first():
        raise ConflictError("User with this email already exists")

    user = User(
        email=email,
        first_name=data["firstName"].strip(),
        last_name=data["lastName"].strip(),
        role=role,
    )
    user.set_password(data["password"])
    db.session.add(user)

    team_id = DataValidator.optional_int(data.get("teamId"), "teamId")
    if team_id is not None:
        team = db.session.get(Team, team_id)
        if team is None:
            raise NotFoundError("Team not found")
        db.session.add(TeamMember(user=user, team=team))

    db.session.commit()
    logger.info("Registered user %s (%s)", user.email, user.role)
    return user


def authenticate(email, password):
    if not isinstance(email, str) or not isinstance(password, str):
        return None
    user = User.query.filter_by(email=email.strip().lower()).first()
    if user and user.check_password(password):
        return user
    logger.info("Failed login for %s", email)
    return None


def create_team(name):
    team = Team(name=DataValidator.require_name(name, "Team name"))
    db.session.add(team)
    db.session.commit()
    logger.info("Created team %s '%s'", team.id, team.name)
    return team


def add_member(user, team):
    """Idempotent: returns the existing membership when there is one"""
    membership = TeamMember.query.filter_by(user_id=user.id, team_id=team.id).first()
    if membership:
        return membership
    membership = TeamMember(user=user, team=team)
    db.session.add(membership)
    db.session.commit()
    logger.info("Added %s to team %s", user.email, team.id)
    return membership


# ---------------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------------

def list_users():
    return User.query.order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(data):
    """Account created by an administrator; any role, admins included"""
    return register_user(data, allow_admin=True)


def update_user(user, data):
    """Partial update of name, email, role and password"""
    data = DataValidator.require_payload(data)

    if "email" in data:
        email = DataValidator.require_name(data["email"], "Email", 120).lower()
        if "@" not in email:
            raise ValidationError("Invalid email address")
        if email != user.email and User.query.filter_by(email=email).first():
            raise ConflictError("Email already in use")
        user.email = email
    if "firstName" in data:
        user.first_name = DataValidator.require_name(data["firstName"], "First name", 80)
    if "lastName" in data:
        user.last_name = DataValidator.require_name(data["lastName"], "Last name", 80)
    if "role" in data:
        user.role = DataValidator.validate_role(data["role"])
    if data.get("password") is not None:
        password = data["password"]
        if not isinstance(password, str) or len(password) < 8:
            raise ValidationError("Password must be at least 8 characters")
        user.set_password(password)

    db.session.commit()
    logger.info("Updated user %s (%s)", user.email, user.role)
    return user


def delete_user(user, acting_user):
    """Remove an account and its memberships; refused while it authors plays"""
    if user.id == acting_user.id:
        raise ValidationError("Cannot delete your own account")
    authored = Play.query.filter_by(created_by_id=user.id).count()
    if authored:
        raise ConflictError(f"User authored {authored} plays and cannot be deleted")

    email = user.email
    db.session.delete(user)
    db.session.commit()
    logger.info("Deleted user %s", email)
