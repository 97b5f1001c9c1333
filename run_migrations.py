"""
Run schema migrations before the app starts.
Deploy start command: python run_migrations.py && uvicorn content_studio.main:app ...
So every deploy upgrades the database to the latest Alembic revision with no manual step.
"""
import os
import sys

from alembic import command
from alembic.config import Config


def run():
    root = os.path.dirname(os.path.abspath(__file__))
    os.chdir(root)

    config = Config(os.path.join(root, "alembic.ini"))
    try:
        command.upgrade(config, "head")
    except Exception as e:
        print(f"❌ Migration failed: {e}")
        sys.exit(1)
    print("✅ Database is at the latest revision")


if __name__ == "__main__":
    run()
