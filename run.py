#!/usr/bin/env python3
import argparse

from web import create_app

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Team Playbook development server")
    parser.add_argument("--env", default="development")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    args = parser.parse_args()
    app = create_app(args.env)
    app.run(host=args.host, port=args.port, debug=app.config.get("DEBUG", False))
