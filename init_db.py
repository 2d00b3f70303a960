"""
Script to create all tables directly from the models (development / SQLite).
Use `alembic upgrade head` for managed databases.

Usage:
    python init_db.py [--drop]
"""
import sys
from sqlalchemy import inspect
from app.database import Base, engine
from app import models  # noqa: F401

if "--drop" in sys.argv:
    print("Dropping existing tables...")
    Base.metadata.drop_all(bind=engine)

print("Creating database tables...")
Base.metadata.create_all(bind=engine)

tables = inspect(engine).get_table_names()
print(f"Database ready with {len(tables)} tables: {', '.join(sorted(tables))}")
