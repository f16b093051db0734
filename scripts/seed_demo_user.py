#!/usr/bin/env python3
"""Seed a demo user.

Creates (or recreates) a dedicated demo account so the API can be tried
without going through registration.

Usage:
    DATABASE_URL=sqlite:///./auth_api.db python scripts/seed_demo_user.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.database import Base, SessionLocal, engine
from src.services.auth import create_user, get_user_by_email

DEMO_NAME = "Demo User"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demopass123"


def seed_demo_user():
    """Create the demo user, replacing any existing one."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    try:
        existing_user = get_user_by_email(session, DEMO_EMAIL)
        if existing_user:
            print("Demo user already exists. Recreating...")
            session.delete(existing_user)
            session.commit()

        user = create_user(session, DEMO_NAME, DEMO_EMAIL, DEMO_PASSWORD)
        print(f"Created demo user {user.id}: {DEMO_EMAIL} / {DEMO_PASSWORD}")

    except Exception as e:
        session.rollback()
        print(f"Error seeding demo user: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_user()
