"""
Initialize database — creates all tables and seeds the vehicle catalog.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--reset]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import create_tables, engine, SessionLocal
from app.config import settings
from app.services.catalog_service import seed_catalog, replace_catalog
from sqlalchemy import inspect, text


def main():
    parser = argparse.ArgumentParser(description="Create tables and seed the vehicle catalog")
    parser.add_argument("--reset", action="store_true",
                        help="DEV ONLY: delete all orders and vehicles, then reseed")
    args = parser.parse_args()

    print("🗄️  Car Leasing DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure the database server is running and DATABASE_URL is set in .env")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()

    db = SessionLocal()
    try:
        count = replace_catalog(db) if args.reset else seed_catalog(db)
    finally:
        db.close()
    print(f"🌱 Catalog {'replaced' if args.reset else 'seeded'} ({count} vehicles)")

    tables = sorted(inspect(engine).get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host 0.0.0.0 --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
