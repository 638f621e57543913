"""
Reset the review database.

DANGEROUS: This deletes all review state!
Only use when you want to start fresh for testing.

Usage:
    python -m scripts.maintenance.reset_review_db
"""

from srs_core import fsrs


def main():
    print("=" * 60)
    print("WARNING: Reset Review Database")
    print("=" * 60)
    print()
    print("This will DELETE all review items:")
    print("  - Memory state (difficulty, stability, retrievability)")
    print("  - Schedules, repetition and lapse counts")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() == "yes":
        print("\nResetting database...")
        fsrs.reset_db(fsrs.get_engine())
        print("Database reset complete!")
        print("\nThe database now has an empty review_items table.")
    else:
        print("\nCancelled. No changes made.")


if __name__ == "__main__":
    main()
