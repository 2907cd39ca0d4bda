#!/usr/bin/env python3
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from core.models import Team, TeamMember, User, db
from web import create_app


def reset_empty_database():
    """Reset database with one team and its admin, no plays"""
    # Delete existing database
    db_path = Path(__file__).parent / "team_playbook.db"
    if db_path.exists():
        db_path.unlink()
        print("✓ Old database deleted")

    # Create new database
    app = create_app("development")
    with app.app_context():
        db.create_all()
        print("✓ Database tables created")

        team = Team(name=os.getenv("TEAM_NAME", "My Team"))
        admin = User(
            email=os.getenv("ADMIN_EMAIL", "admin@local.com"),
            first_name="Team",
            last_name="Admin",
            role="ADMIN",
        )
        admin.set_password(os.getenv("ADMIN_PASSWORD", "admin12345"))
        db.session.add_all([team, admin, TeamMember(user=admin, team=team)])
        db.session.commit()
        print(f"✓ Team '{team.name}' and admin {admin.email} created")

    print("\n✅ Empty database ready!")
    print("\nTo start server: python run.py")


if __name__ == "__main__":
    reset_empty_database()
