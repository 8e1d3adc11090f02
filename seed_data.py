#!/usr/bin/env python3
"""
Seed Data Script

Creates an initial operator account and a few tour packages so the API can
be exercised locally.

Usage:
    python seed_data.py
"""

from src.database import StorageContext
from src.models import AdminUser
from src.auth.schemas import AdminRegister, AdminRole
from src.auth.service import AdminAuthService
from src.packages.schemas import PackageCreate
from src.packages.service import PackageService

SEED_PACKAGES = [
    {
        "slug": "paro-valley-escape",
        "title": "Paro Valley Escape",
        "description": "Monasteries, rice terraces and the Tiger's Nest hike.",
        "currency": "NU",
        "priceNU": 900,
        "durationText": "5D/4N",
        "location": "Paro",
        "type": "cultural",
        "includes": "Hotel, Guide, Breakfast",
    },
    {
        "slug": "himalayan-trek",
        "title": "Himalayan Trek",
        "description": "A guided high-altitude trek with camping nights.",
        "currency": "USD",
        "priceCents": 185000,
        "durationDays": 10,
        "location": "Laya",
        "type": "adventure",
        "includes": ["Tents", "Porter", "All meals"],
    },
]

def create_seed_data():
    storage = StorageContext()
    storage.create_all()
    
    with storage.session() as db:
        try:
            print("🚀 Creating seed data...")
            
            if AdminAuthService.get_admin_by_email(db, "admin@example.com"):
                print("✅ Operator already exists, skipping...")
            else:
                AdminAuthService.register_admin(db, AdminRegister(
                    first_name="Site",
                    last_name="Administrator",
                    email="admin@example.com",
                    password="Admin123!",
                    role=AdminRole.SUPER_ADMIN
                ))
                print("✅ Created operator admin@example.com / Admin123!")
            
            package_service = PackageService(db)
            created = 0
            for payload in SEED_PACKAGES:
                if package_service.get_package(payload["slug"]):
                    continue
                package_service.create_package(PackageCreate.model_validate(payload))
                created += 1
            
            print(f"✅ Created {created} packages ({db.query(AdminUser).count()} operators in total)")
        except Exception as e:
            print(f"❌ Error creating seed data: {e}")
            db.rollback()
            raise
    
    storage.dispose()

if __name__ == "__main__":
    create_seed_data()
