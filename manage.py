#!/usr/bin/env python3
"""
CLI entry point for database management and migrations
Run with: python3 manage.py [init-db | seed | create-team | create-user | add-member | db upgrade]
"""
import os

from flask.cli import FlaskGroup

from web import create_app


def make_app():
    return create_app(os.getenv("FLASK_ENV", "development"))


cli = FlaskGroup(create_app=make_app)

if __name__ == "__main__":
    cli()
