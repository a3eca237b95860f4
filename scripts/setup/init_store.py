# scripts/setup/init_store.py
"""
Initialize the bookings file — creates an empty JSON array if none exists,
otherwise reports how many bookings it holds.
Usage: python scripts/setup/init_store.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.config import settings
from app.store import BookingStore
from app.utils.json_parser import read_json_file


def main():
    print("🗄️  Bookings Store Initialization")
    print("=" * 40)
    path = os.path.abspath(settings.BOOKINGS_FILE)
    print(f"📁 Bookings file: {path}")

    store = BookingStore(path)
    if not os.path.exists(path):
        print("\n📋 File not found — creating an empty store...")
        store.save([])
        print("✅ Empty bookings file created")
    else:
        data = read_json_file(path)
        if not isinstance(data, list):
            print("❌ File exists but is not a JSON array.")
            print("   The backend would start with no bookings and overwrite it on the next change.")
            print("   Fix or move the file, then re-run this script.")
            sys.exit(1)
        print("✅ Existing bookings file is valid")

    bookings = store.load()
    print(f"\n📊 Bookings in store: {len(bookings)}")
    for b in bookings[-5:]:
        print(f"   ✓ #{b.id} {b.vehicle} {b.pickup_date} → {b.return_date} [{b.status}]")

    print("\n🎉 Store ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host {settings.BACKEND_HOST} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
