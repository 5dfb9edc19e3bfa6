"""Script to create the initial admin user.

Reads ADMIN_USERNAME (default "admin") and ADMIN_PASSWORD from the
environment; the password has no default.
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hotel_ops.database import SessionLocal, engine, Base
from hotel_ops.models.user import User, UserRole
from hotel_ops.auth import get_password_hash


def create_admin(username: str, password: str) -> bool:
    """Create an admin user unless one exists. Returns True if created."""
    # Create tables
    Base.metadata.create_all(bind=engine)
    
    db = SessionLocal()
    try:
        admin = db.query(User).filter(User.role == UserRole.ADMIN).first()
        if admin:
            print(f"Admin user already exists: {admin.username}")
            return False
        
        if db.query(User).filter(User.username == username).first():
            print(f"Username {username} is taken by a non-admin user")
            return False
        
        db.add(User(
            username=username,
            hashed_password=get_password_hash(password),
            role=UserRole.ADMIN,
        ))
        db.commit()
        print(f"Admin user {username} created successfully!")
        return True
    finally:
        db.close()


if __name__ == "__main__":
    password = os.environ.get("ADMIN_PASSWORD")
    if not password:
        print("Set ADMIN_PASSWORD to create the admin user.")
        sys.exit(1)
    create_admin(os.environ.get("ADMIN_USERNAME", "admin"), password)
