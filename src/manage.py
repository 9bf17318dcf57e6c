"""CampusEats management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load demo users and a starter menu

Set PROTEAN_ENV (e.g. ``sqlite`` or ``production``) to pick the database.
"""

import argparse
import sys

DEMO_USERS = [
    {"email": "student1@campus.ro", "full_name": "Alex Popescu", "role": "Student", "opening_points": 150},
    {"email": "student2@campus.ro", "full_name": "Maria Ionescu", "role": "Student", "opening_points": 200},
    {"email": "staff1@campus.ro", "full_name": "Ion Georgescu", "role": "Staff"},
    {"email": "manager@campus.ro", "full_name": "Admin User", "role": "Manager"},
]

DEMO_MENU = [
    {"name": "Burger Classic", "description": "Beef burger with cheddar and pickles", "price": 25.0, "category": "Main"},
    {"name": "Pizza Margherita", "description": "Tomato, mozzarella and basil", "price": 28.0, "category": "Main"},
    {"name": "Wrap Vegan", "description": "Falafel, hummus and greens", "price": 20.0, "category": "Main"},
    {"name": "Cappuccino", "description": "Double shot with steamed milk", "price": 10.0, "category": "Drink"},
    {"name": "Lemonade", "description": "Fresh lemons and mint", "price": 12.0, "category": "Drink"},
    {"name": "Cheesecake", "description": "Berry cheesecake slice", "price": 16.0, "category": "Dessert"},
    {"name": "Pretzel", "description": "Salted baked pretzel", "price": 7.0, "category": "Snack"},
]


def setup_database():
    """Create the database schema for the campuseats domain."""
    from campuseats.domain import campuseats
    from campuseats.utils.db import setup_db

    print("Initializing campuseats domain...")
    campuseats.init()
    print("Creating database schema...")
    setup_db(campuseats)
    print("Done.")


def drop_database():
    """Drop the database schema for the campuseats domain."""
    from campuseats.domain import campuseats
    from campuseats.utils.db import drop_db

    print("Initializing campuseats domain...")
    campuseats.init()
    print("Dropping database schema...")
    drop_db(campuseats)
    print("Done.")


def seed():
    """Register demo users and add the starter menu through domain commands."""
    from campuseats.domain import campuseats
    from campuseats.menu.management import CreateProduct
    from campuseats.user.registration import RegisterUser

    campuseats.init()
    with campuseats.domain_context():
        for user in DEMO_USERS:
            user_id = campuseats.process(RegisterUser(**user), asynchronous=False)
            print(f"  user {user['email']} -> {user_id}")
        for product in DEMO_MENU:
            product_id = campuseats.process(CreateProduct(**product), asynchronous=False)
            print(f"  product {product['name']} -> {product_id}")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="CampusEats management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load demo users and menu")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
