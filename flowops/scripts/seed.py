"""
Seed script for a FlowOps development database.

Creates a manager and staff for two establishments plus sample inventory,
equipment, checklists, weekly tasks and a menu whose recipe is linked to
stock, so recording a sale immediately shows a deduction.

Usage:
    python -m flowops.scripts.seed
"""
from decimal import Decimal

from sqlalchemy.orm import Session

from flowops.db.session import SessionLocal
from flowops.models import ChecklistItem, Equipment, Ingredient, InventoryItem, MenuItem, User, WeeklyTask
from flowops.core.security import hash_password

DEMO_PASSWORD = "password123"


def seed_database(db: Session) -> bool:
    """Seed demo data. Returns False (and does nothing) if users already exist."""
    if db.query(User).count() > 0:
        print("Database already seeded. Skipping...")
        return False

    print("Seeding database...")
    hashed = hash_password(DEMO_PASSWORD)

    for name, username, role, establishment in [
        ("Admin Manager", "admin", "manager", "Bison Den"),
        ("Hunter Lead", "hunter", "lead", "Bison Den"),
        ("Sam Server", "sam", "employee", "Bison Den"),
        ("Cafe Manager", "cafe", "manager", "Trailblazer Café"),
    ]:
        db.add(User(
            name=name,
            email=f"{username}@flowops.com",
            username=username,
            hashed_password=hashed,
            role=role,
            status="active",
            establishment=establishment,
        ))

    stock = {}
    for icon, name, category, quantity, unit, status in [
        ("🍔", "Beef Patties", "Food/Meat", "120", "pieces", "OK"),
        ("🥬", "Lettuce", "Food/Produce", "40", "leaves", "OK"),
        ("🍅", "Tomatoes", "Food/Produce", "15", "slices", "LOW"),
        ("🧀", "Cheese Slices", "Food/Dairy", "80", "pieces", "OK"),
        ("🍞", "Buns", "Food/Bakery", "100", "pieces", "OK"),
        ("🥤", "Cola Syrup", "Drink", "20", "liters", "OK"),
    ]:
        item = InventoryItem(
            icon=icon,
            name=name,
            category=category,
            quantity=Decimal(quantity),
            unit=unit,
            status=status,
            low_comment="Need to restock soon" if status == "LOW" else None,
            updated_by="System",
            establishment="Bison Den",
        )
        db.add(item)
        stock[name] = item

    for name, category, status, issue in [
        ("Fryer", "Kitchen", "Working", None),
        ("Grill", "Kitchen", "Working", None),
        ("Fridge", "Kitchen", "Attention", "Temperature fluctuating"),
        ("Ice Machine", "Bar", "Working", None),
    ]:
        db.add(Equipment(name=name, category=category, status=status, last_issue=issue, establishment="Bison Den"))

    for text, list_type, assigned_to in [
        ("Turn on grill", "opening", "Hunter Lead"),
        ("Refill sauces", "opening", "Sam Server"),
        ("Check fryer oil", "shift", "Hunter Lead"),
        ("Clean grill", "closing", "Sam Server"),
    ]:
        db.add(ChecklistItem(text=text, list_type=list_type, assigned_to=assigned_to, establishment="Bison Den"))

    db.add(WeeklyTask(text="Deep clean walk-in fridge", assigned_to="Hunter Lead", establishment="Bison Den"))

    db.flush()
    burger = MenuItem(name="Classic Burger", category="Burgers", establishment="Bison Den")
    db.add(burger)
    db.flush()
    for name, quantity, unit, link in [
        ("Beef Patty", "1", "pieces", "Beef Patties"),
        ("Bun", "1", "pieces", "Buns"),
        ("Cheese", "1", "pieces", "Cheese Slices"),
        ("Tomato", "2", "slices", "Tomatoes"),
        ("Pickles", "3", "pieces", None),
    ]:
        db.add(Ingredient(
            menu_item_id=burger.id,
            name=name,
            quantity=Decimal(quantity),
            unit=unit,
            inventory_item_id=stock[link].id if link else None,
        ))

    db.commit()
    print(f"Seeded demo data (password for every account: {DEMO_PASSWORD})")
    return True


if __name__ == "__main__":
    session = SessionLocal()
    try:
        seed_database(session)
    finally:
        session.close()
