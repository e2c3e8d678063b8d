# scripts/init_db.py

from core.database import init_db
from core.logging_config import configure_logging


def main():
    configure_logging()
    print("Creating database tables...")

    # Create the kv_store table
    init_db()

    print("Database initialized successfully.")


if __name__ == "__main__":
    main()
