#!/usr/bin/env python3
"""
CLI commands for database operations
Run with: flask --app manage <command>  or  python3 manage.py <command>
"""

import click
from flask import Flask

from core.accounts import add_member, create_team, register_user
from core.exceptions import PlaybookError
from core.models import Team, User, USER_ROLES, db
from core.seed_plays import seed_plays


def register_commands(app: Flask):
    @app.cli.command("init-db")
    def init_db():
        """Initialize the database."""
        db.create_all()
        click.echo("[CLI] Database initialized.")

    @app.cli.command("seed")
    def seed():
        """Seed a demo team, coach and template-based plays."""
        created = seed_plays()
        click.echo(f"[CLI] Database seeded with {created} plays.")

    @app.cli.command("reset-db")
    def reset_db():
        """Drop all tables and reinitialize."""
        if click.confirm("Are you sure you want to drop all tables?"):
            db.drop_all()
            click.echo("[CLI] All tables dropped.")
            db.create_all()
            click.echo("[CLI] Database reinitialized.")
        else:
            click.echo("[CLI] Operation cancelled.")

    @app.cli.command("create-team")
    @click.argument("name")
    def create_team_command(name):
        """Create a team."""
        team = create_team(name)
        click.echo(f"[CLI] Team {team.id} '{team.name}' created.")

    @app.cli.command("create-user")
    @click.option("--email", required=True)
    @click.option("--first-name", required=True)
    @click.option("--last-name", required=True)
    @click.option("--role", type=click.Choice(USER_ROLES), default="COACH")
    @click.option("--team-id", type=int, default=None)
    @click.password_option()
    def create_user_command(email, first_name, last_name, role, team_id, password):
        """Create a user, admins included."""
        try:
            user = register_user(
                {
                    "email": email,
                    "firstName": first_name,
                    "lastName": last_name,
                    "role": role,
                    "password": password,
                    "teamId": team_id,
                },
                allow_admin=True,
            )
        except PlaybookError as e:
            db.session.rollback()
            raise click.ClickException(str(e))
        click.echo(f"[CLI] User {user.email} ({user.role}) created.")

    @app.cli.command("add-member")
    @click.argument("email")
    @click.argument("team_id", type=int)
    def add_member_command(email, team_id):
        """Add an existing user to a team."""
        user = User.query.filter_by(email=email.strip().lower()).first()
        team = db.session.get(Team, team_id)
        if user is None or team is None:
            raise click.ClickException("Unknown user or team")
        add_member(user, team)
        click.echo(f"[CLI] {user.email} is a member of '{team.name}'.")
