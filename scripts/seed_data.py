"""Seed initial data for the marketplace."""

import asyncio

from src.models.customer import Customer
from src.models.driver import Driver, Location
from src.models.restaurant import Restaurant
from src.state.manager import StateManager
from src.state.store import CustomerStore, DriverStore, RestaurantStore


async def seed_restaurants() -> None:
    """Seed restaurants with their delivery terms."""
    print("Seeding restaurants...")

    state_manager = StateManager()
    await state_manager.connect()
    store = RestaurantStore(state_manager)

    restaurants = [
        Restaurant(
            name="Al Baik Grill",
            delivery_fee="5",
            minimum_order="30",
            delivery_time="30-45 min",
            phone="+966500000001",
            address="King Fahd Rd, Riyadh",
        ),
        Restaurant(
            name="Pizza Corner",
            delivery_fee="7.50",
            minimum_order="50",
            delivery_time="40-60 min",
            phone="+966500000002",
            address="Olaya St, Riyadh",
        ),
        Restaurant(
            name="Shawarma House",
            delivery_time="20-30 min",
            phone="+966500000003",
            address="Tahlia St, Jeddah",
        ),
    ]

    for restaurant in restaurants:
        await store.create(restaurant)
        fee = restaurant.delivery_fee or "default"
        print(f"  ✓ Added {restaurant.name} (fee: {fee}, minimum: {restaurant.minimum_order})")

    await state_manager.disconnect()
    print("✓ Restaurants seeded successfully\n")


async def seed_drivers() -> None:
    """Seed delivery drivers."""
    print("Seeding drivers...")

    state_manager = StateManager()
    await state_manager.connect()
    store = DriverStore(state_manager)

    drivers = [
        Driver(
            name="Khalid Al-Harbi",
            phone="+966510000001",
            vehicle_type="car",
            is_available=True,
            current_location=Location(lat=24.7136, lng=46.6753),
        ),
        Driver(
            name="Omar Saeed",
            phone="+966510000002",
            vehicle_type="motorcycle",
            is_available=True,
            current_location=Location(lat=24.7200, lng=46.6800),
        ),
        Driver(
            name="Faisal Nasser",
            phone="+966510000003",
            vehicle_type="car",
            is_available=False,
        ),
    ]

    for driver in drivers:
        await store.create(driver)
        print(f"  ✓ Added {driver.name} ({driver.vehicle_type}, available: {driver.is_available})")

    await state_manager.disconnect()
    print("✓ Drivers seeded successfully\n")


async def seed_sample_customers() -> None:
    """Seed sample customers."""
    print("Seeding sample customers...")

    state_manager = StateManager()
    await state_manager.connect()
    store = CustomerStore(state_manager)

    customers = [
        Customer(name="Sara Ahmed", phone="+966520000001", email="sara@example.com"),
        Customer(name="Yousef Ali", phone="+966520000002", email="yousef@example.com"),
        Customer(name="Noura Salem", phone="+966520000003"),
    ]

    for customer in customers:
        await store.create(customer)
        print(f"  ✓ Added {customer.name} ({customer.id})")

    await state_manager.disconnect()
    print("✓ Sample customers seeded successfully\n")


async def main() -> None:
    """Run all seed functions."""
    print("\n" + "=" * 50)
    print("  Seeding Marketplace Data")
    print("=" * 50 + "\n")

    await seed_restaurants()
    await seed_drivers()
    await seed_sample_customers()

    print("=" * 50)
    print("  ✓ All data seeded successfully!")
    print("=" * 50 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
