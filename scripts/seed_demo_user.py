# scripts/seed_demo_user.py
import os, sys
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import select
from app.db import SessionLocal
from app.models.user import User
from app.security import get_password_hash

DEMO_EMAIL = os.getenv("DEMO_EMAIL", "demo@keystroke.local")
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "demo1234")

def upsert_user(db, email, name, password):
    row = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if row:
        row.name = name
        row.password = get_password_hash(password)
    else:
        row = User(email=email, name=name, password=get_password_hash(password))
        db.add(row)
    db.commit()

def main():
    db = SessionLocal()
    try:
        upsert_user(db, DEMO_EMAIL, "Demo", DEMO_PASSWORD)
        print(f"Demo user OK: {DEMO_EMAIL}")
    finally:
        db.close()

if __name__ == "__main__":
    main()
