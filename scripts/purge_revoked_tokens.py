#!/usr/bin/env python3
"""Delete revocation records for tokens past their refresh window.

Safe to run from cron; a revoked token that can no longer be refreshed is
rejected on its own.

Usage:
    DATABASE_URL=sqlite:///./auth_api.db python scripts/purge_revoked_tokens.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.database import SessionLocal
from src.services.auth import purge_expired_revocations


def main():
    session = SessionLocal()
    try:
        deleted = purge_expired_revocations(session)
        print(f"Purged {deleted} expired revocations")
    finally:
        session.close()


if __name__ == "__main__":
    main()
