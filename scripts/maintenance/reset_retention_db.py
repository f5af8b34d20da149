"""
Reset the memory link database.

DANGEROUS: This deletes every stored memory link!
Only use when you want to start fresh for testing.

Usage:
    python -m scripts.maintenance.reset_retention_db
"""

from core.retention.database import SqlMemoryStore

def main():
    print("=" * 60)
    print("WARNING: Reset Memory Link Database")
    print("=" * 60)
    print()
    print("This will DELETE all memory links:")
    print("  - Wave amplitudes and decay constants")
    print("  - Success, failure and used-in-the-wild counts")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() == "yes":
        print("\nResetting database...")
        SqlMemoryStore.from_url().reset_db()
        print("✓ Database reset complete!")
    else:
        print("\nCancelled. No changes made.")


if __name__ == "__main__":
    main()
