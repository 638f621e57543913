"""
Create the review_items table if it does not exist.

Usage:
    python -m scripts.maintenance.init_review_db
"""

from srs_core import fsrs


def main():
    engine = fsrs.get_engine()
    fsrs.init_db(engine)
    mode = "test" if fsrs.is_test_mode() else "production"
    print(f"Review schema ready ({mode} database: {engine.url.render_as_string(hide_password=True)})")


if __name__ == "__main__":
    main()
