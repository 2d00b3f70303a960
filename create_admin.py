"""
Script to create the first admin user
Run this script after running database migrations

Usage:
    python create_admin.py

Environment Variables (optional):
    ADMIN_EMAIL - Admin email address
    ADMIN_PASSWORD - Admin password (min 6 characters)
    ADMIN_NAME - Admin name
"""
import sys
from sqlalchemy.exc import OperationalError
from app.database import SessionLocal
from app.exceptions import AppError
from app.services.auth_service import create_admin as create_admin_user
from app.config import settings


def create_admin():
    """Create an admin account from settings or interactive input"""
    db = SessionLocal()
    
    try:
        print("=" * 50)
        print("Create Admin User")
        print("=" * 50)
        
        email = settings.ADMIN_EMAIL.strip() or input("Enter admin email: ").strip()
        if not email:
            print("[ERROR] Email is required!")
            return
        
        password = settings.ADMIN_PASSWORD.strip() or input("Enter admin password (min 6 characters): ").strip()
        if len(password) < 6:
            print("[ERROR] Password must be at least 6 characters!")
            return
        
        name = settings.ADMIN_NAME.strip() or input("Enter admin name: ").strip() or "Admin"
        
        admin = create_admin_user(db, email=email, password=password, name=name)
        
        print("\n" + "=" * 50)
        print("[SUCCESS] Admin user created successfully!")
        print("=" * 50)
        print(f"   Email: {admin.email}")
        print(f"   Name: {admin.name}")
        print(f"   ID: {admin.id}")
        print("\n[TIP] You can now login at: POST /auth/login")
        print("=" * 50)
    
    except OperationalError as e:
        if "no such table" in str(e).lower():
            print("[ERROR] Tables do not exist! Run `alembic upgrade head` or `python init_db.py` first.")
        else:
            print(f"[ERROR] Database error: {e}")
        sys.exit(1)
    except AppError as e:
        print(f"[ERROR] {e.message}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    create_admin()
