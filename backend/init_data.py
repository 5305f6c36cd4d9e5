"""
Seed data script
Creates staff accounts, room types, the rate taxonomy and two rate plans:
a best-available rate with length-of-stay tiers and a dated override, and a
bed-and-breakfast package.

Default accounts (password 123456 for all):
  director     Director
  manager      Revenue Manager
  front1       Front Desk
  accounting1  Accounting
"""
import sys
sys.path.insert(0, '.')

from datetime import date, timedelta
from decimal import Decimal
from app.database import SessionLocal, init_db
from app.models.orm import (
    Employee, EmployeeRole, RoomType, RateCategory, RateClass, RateType,
    RatePlan, RateTier, RateOverride, RatePackageComponent,
)
from app.security.auth import get_password_hash
from rate_engine.models import AdjustmentType, ComponentType, OverrideType


def init_employees(db):
    """Staff accounts"""
    employees = [
        {'username': 'director', 'name': 'Director', 'role': EmployeeRole.DIRECTOR},
        {'username': 'manager', 'name': 'Revenue Manager', 'role': EmployeeRole.MANAGER},
        {'username': 'front1', 'name': 'Front Desk', 'role': EmployeeRole.FRONT_DESK},
        {'username': 'accounting1', 'name': 'Accounting', 'role': EmployeeRole.ACCOUNTING},
    ]

    created = 0
    for emp in employees:
        if not db.query(Employee).filter(Employee.username == emp['username']).first():
            db.add(Employee(**emp, password_hash=get_password_hash('123456')))
            created += 1

    db.commit()
    print(f"Employees: {created} created")


def init_room_types(db):
    """Room types and their default base prices"""
    room_type_defs = [
        {'code': 'STD', 'name': 'Standard Twin', 'base_price': Decimal('120.00'), 'max_occupancy': 2,
         'description': 'Two single beds, private bathroom'},
        {'code': 'DBL', 'name': 'Double', 'base_price': Decimal('140.00'), 'max_occupancy': 2,
         'description': 'One double bed'},
        {'code': 'DLX', 'name': 'Deluxe', 'base_price': Decimal('210.00'), 'max_occupancy': 3,
         'description': 'High floor with sofa area'},
    ]

    created = 0
    for rt_data in room_type_defs:
        if not db.query(RoomType).filter(RoomType.code == rt_data['code']).first():
            db.add(RoomType(**rt_data))
            created += 1

    db.commit()
    print(f"Room types: {created} created")
    return {rt.code: rt for rt in db.query(RoomType).all()}


def init_taxonomy(db):
    """Rate category -> class, and rate types"""
    category = db.query(RateCategory).filter(RateCategory.code == 'RETAIL').first()
    if not category:
        category = RateCategory(code='RETAIL', name='Retail', description='Publicly sold rates')
        db.add(category)
        db.flush()

    rate_class = db.query(RateClass).filter(RateClass.code == 'BAR').first()
    if not rate_class:
        rate_class = RateClass(code='BAR', name='Best available', rate_category_id=category.id)
        db.add(rate_class)

    types = {}
    for code, name in [('FLEX', 'Flexible'), ('PKG', 'Package')]:
        rate_type = db.query(RateType).filter(RateType.code == code).first()
        if not rate_type:
            rate_type = RateType(code=code, name=name)
            db.add(rate_type)
        types[code] = rate_type

    db.commit()
    print("Rate taxonomy ready")
    return {"category": category, "class": rate_class, "types": types}


def init_rate_plans(db, room_types, taxonomy):
    """BAR with tiers and an override; BB package with components"""
    bar = db.query(RatePlan).filter(RatePlan.code == 'BAR').first()
    if not bar:
        bar = RatePlan(
            code='BAR', name='Best Available Rate', currency='USD',
            rate_category_id=taxonomy["category"].id, rate_class_id=taxonomy["class"].id,
            rate_type_id=taxonomy["types"]["FLEX"].id,
        )
        db.add(bar)
        db.flush()

        db.add_all([
            RateTier(rate_plan_id=bar.id, min_nights=1, max_nights=3,
                     adjustment_type=AdjustmentType.PERCENTAGE, adjustment_value=Decimal('0'), priority=0),
            RateTier(rate_plan_id=bar.id, min_nights=4, max_nights=6,
                     adjustment_type=AdjustmentType.PERCENTAGE, adjustment_value=Decimal('-10'), priority=0),
            RateTier(rate_plan_id=bar.id, min_nights=7,
                     adjustment_type=AdjustmentType.PERCENTAGE, adjustment_value=Decimal('-15'), priority=0),
        ])
        # New Year's Eve
        new_year_eve = date(date.today().year, 12, 31)
        db.add(RateOverride(
            rate_plan_id=bar.id, override_date=new_year_eve,
            override_type=OverrideType.SURCHARGE, override_value=Decimal('60'),
            reason="New Year's Eve",
        ))
        db.add(RateOverride(
            rate_plan_id=bar.id, room_type_id=room_types['DLX'].id,
            override_date=new_year_eve, override_type=OverrideType.FIXED,
            override_value=Decimal('320'), reason="New Year's Eve deluxe",
        ))

    bb = db.query(RatePlan).filter(RatePlan.code == 'BB').first()
    if not bb:
        bb = RatePlan(
            code='BB', name='Bed & Breakfast', currency='USD', is_package=True,
            rate_category_id=taxonomy["category"].id,
            rate_type_id=taxonomy["types"]["PKG"].id,
            valid_from=date.today(), valid_to=date.today() + timedelta(days=365),
        )
        db.add(bb)
        db.flush()

        db.add_all([
            RatePackageComponent(
                rate_plan_id=bb.id, component_type=ComponentType.MEAL, component_code='BRK',
                component_name='Breakfast', price_adult=Decimal('18'), price_child=Decimal('9'),
                price_infant=Decimal('0'), is_included=True,
            ),
            RatePackageComponent(
                rate_plan_id=bb.id, component_type=ComponentType.SERVICE, component_code='PARK',
                component_name='Parking', unit_price=Decimal('15'), is_included=False,
            ),
        ])

    db.commit()
    print("Rate plans ready: BAR, BB")


def main():
    print("=" * 50)
    print("Rate console seed data")
    print("=" * 50)

    init_db()
    print("Tables created")

    db = SessionLocal()
    try:
        init_employees(db)
        room_types = init_room_types(db)
        taxonomy = init_taxonomy(db)
        init_rate_plans(db, room_types, taxonomy)

        print("=" * 50)
        print("Done. Default accounts (password 123456):")
        print("  director, manager, front1, accounting1")
        print("=" * 50)
    finally:
        db.close()


if __name__ == '__main__':
    main()
