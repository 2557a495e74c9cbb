"""
Seed script to populate the database with two weeks of sample readings.
Run from the project root: python seed.py
"""
import random
from datetime import timedelta

from bp_tracker import create_app
from bp_tracker.models.reading import utcnow
from bp_tracker.utils.classifier import classify_bp

DAYS = 14
NOTES = [None, None, 'Morning, before coffee', 'After walk', 'Evening', None]


def seed():
    app = create_app()
    with app.app_context():
        store = app.extensions['reading_store']
        if store.count():
            print(f"  Database already has {store.count()} reading(s), skipping.")
            return

        rng = random.Random(42)
        now = utcnow().replace(second=0, microsecond=0)
        for day in range(DAYS, 0, -1):
            for hour in (7, 19):
                systolic = rng.randint(112, 142)
                diastolic = rng.randint(70, 92)
                heart_rate = rng.choice([None, rng.randint(58, 84)])
                recorded_at = (now - timedelta(days=day)).replace(hour=hour, minute=rng.randint(0, 59))
                reading = store.create(systolic, diastolic, heart_rate,
                                       notes=rng.choice(NOTES), recorded_at=recorded_at)
                category = classify_bp(systolic, diastolic)
                print(f"  Added reading {reading.id}: {systolic}/{diastolic} ({category.label})")

        print(f"\nReadings seeded: {store.count()} total.")


if __name__ == "__main__":
    seed()
