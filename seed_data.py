# seed_data.py
"""
Populate the database with sample data for local testing.

Usage: python seed_data.py

Rows are inserted directly through the repositories, so no emails are
sent. Customers that already exist (by email) are skipped along with
their sample appointment.
"""

from datetime import datetime, timedelta

from tattoo_workshop.database import create_db_and_tables, new_session
from tattoo_workshop.models.appointment import Appointment
from tattoo_workshop.models.catalog import GeneratedTattoo, PortfolioItem, PricelistItem
from tattoo_workshop.models.customer import Customer
from tattoo_workshop.repositories.appointment_repo import AppointmentRepository
from tattoo_workshop.repositories.catalog_repo import CatalogRepository
from tattoo_workshop.repositories.customer_repo import CustomerRepository

# (customer, artist, days from now, duration, status, notes)
CUSTOMERS = [
    (
        dict(
            name="Alice Johnson",
            email="alice@example.com",
            phone="555-0101",
            address="123 Main St, New York, NY 10001",
            notes="Regular customer, prefers traditional style",
        ),
        ("Sarah Chen", 2, 120, "scheduled", "Traditional rose design on shoulder"),
    ),
    (
        dict(
            name="Bob Smith",
            email="bob@example.com",
            phone="555-0102",
            address="456 Oak Ave, Los Angeles, CA 90001",
            notes="First-time customer, interested in sleeve",
        ),
        ("Mike Rodriguez", 5, 180, "scheduled", "Starting sleeve - Japanese dragon"),
    ),
    (
        dict(
            name="Carol Martinez",
            email="carol@example.com",
            phone="555-0103",
            address="789 Pine Rd, Chicago, IL 60601",
            notes="Prefers color work, multiple sessions",
        ),
        ("Sarah Chen", -7, 150, "completed", "Watercolor butterfly - completed successfully"),
    ),
    (
        dict(
            name="David Lee",
            email="david@example.com",
            phone="555-0104",
            address="321 Elm St, Houston, TX 77001",
            notes="Looking for memorial tattoo",
        ),
        ("Alex Thompson", 10, 90, "scheduled", "Memorial portrait consultation and first session"),
    ),
]

PRICELIST = [
    ('Small Tattoo (up to 2")', "Simple designs, minimal detail", 80, 60, "Small Tattoos"),
    ('Medium Tattoo (2-5")', "Moderate detail and size", 150, 120, "Medium Tattoos"),
    ('Large Tattoo (5-10")', "Complex designs with high detail", 300, 180, "Large Tattoos"),
    ("Full Sleeve", "Complete arm coverage, multiple sessions", 2000, 600, "Large Tattoos"),
    ("Touch-up (within 1 year)", "Free touch-up for existing tattoos", 0, 30, "Touch-ups"),
    ("Touch-up (after 1 year)", "Touch-up for older tattoos", 50, 45, "Touch-ups"),
    ("Cover-up Consultation", "Assessment and planning for cover-up work", 50, 30, "Consultations"),
    ("Custom Design Session", "Work with artist to create custom design", 100, 60, "Consultations"),
]

PORTFOLIO = [
    (
        "Japanese Dragon Sleeve",
        "Full sleeve featuring traditional Japanese dragon with cherry blossoms and waves",
        "https://images.unsplash.com/photo-1565058683374-c76d93cd0d0b?w=800",
        "Mike Rodriguez",
        "japanese,dragon,sleeve,traditional,color",
    ),
    (
        "Watercolor Phoenix",
        "Vibrant watercolor style phoenix on back",
        "https://images.unsplash.com/photo-1611501275019-9b5cda994e8d?w=800",
        "Sarah Chen",
        "watercolor,phoenix,back,color,artistic",
    ),
    (
        "Geometric Mandala",
        "Intricate geometric mandala design on forearm",
        "https://images.unsplash.com/photo-1568515387631-8b650bbcdb90?w=800",
        "Alex Thompson",
        "geometric,mandala,blackwork,forearm,symmetry",
    ),
    (
        "Portrait Memorial",
        "Realistic portrait memorial piece",
        "https://images.unsplash.com/photo-1590246814883-57c511e4e394?w=800",
        "Alex Thompson",
        "portrait,realistic,memorial,black and grey",
    ),
    (
        "Traditional Rose",
        "Classic traditional American rose with bold lines",
        "https://images.unsplash.com/photo-1611501275019-9b5cda994e8d?w=800",
        "Sarah Chen",
        "traditional,rose,american traditional,color",
    ),
]

GENERATED = [
    (
        "A phoenix rising from flames in traditional Japanese style",
        "Traditional Japanese phoenix design with bold outlines and vibrant colors, "
        "rising from stylized flames. Placement: back or upper arm. Size: 8-12 inches. "
        "Colors: deep reds, oranges and golds for the flames; blues, greens and purples "
        "for the phoenix.",
    ),
    (
        "Minimalist mountain range on forearm",
        "Clean minimalist line work forming mountain silhouettes. Placement: inner "
        "forearm. Size: 4-6 inches wide. Black ink only, thin to medium line weight, "
        "optional dotwork shading and a small sun or moon for balance.",
    ),
]


def main():
    print("Seeding database with sample data...")
    create_db_and_tables()

    customers = CustomerRepository()
    appointments = AppointmentRepository()
    catalog = CatalogRepository()
    now = datetime.now().replace(minute=0, second=0, microsecond=0)

    with new_session() as session:
        added = 0
        for data, (artist, days, duration, status, notes) in CUSTOMERS:
            if customers.get_by_email(session, data["email"]):
                continue
            customer = customers.create(session, Customer(**data))
            appointments.create(
                session,
                Appointment(
                    customer_id=customer.id,
                    artist_name=artist,
                    appointment_date=now + timedelta(days=days),
                    duration=duration,
                    status=status,
                    notes=notes,
                ),
            )
            added += 1
        print(f"Added {added} customers with appointments")

        if not catalog.list_pricelist(session):
            for name, description, price, duration, category in PRICELIST:
                catalog.save(
                    session,
                    PricelistItem(
                        service_name=name,
                        description=description,
                        price=price,
                        duration=duration,
                        category=category,
                    ),
                )
            print(f"Added {len(PRICELIST)} services to pricelist")

        if not catalog.list_portfolio(session):
            for title, description, image_url, artist, tags in PORTFOLIO:
                catalog.save(
                    session,
                    PortfolioItem(
                        title=title,
                        description=description,
                        image_url=image_url,
                        artist_name=artist,
                        tags=tags,
                    ),
                )
            print(f"Added {len(PORTFOLIO)} portfolio items")

        if not catalog.list_generated(session):
            for prompt, description in GENERATED:
                catalog.save(session, GeneratedTattoo(prompt=prompt, description=description))
            print(f"Added {len(GENERATED)} generated tattoo examples")

    print("Database seeding completed.")


if __name__ == "__main__":
    main()
