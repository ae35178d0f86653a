#!/usr/bin/env python3
"""
Quick setup verification for the guru dashboard.

Run this first to check if your environment is ready.
"""

import os
import sys
from pathlib import Path

def check_environment():
    """Check if environment is properly set up."""
    print("🔍 Environment Check")
    print("=" * 30)

    # Check Python version
    python_version = f"{sys.version_info.major}.{sys.version_info.minor}"
    print(f"Python version: {python_version}")
    if sys.version_info < (3, 9):
        print("⚠️  Python 3.9+ required")
        return False
    else:
        print("✅ Python version OK")

    # Check settings
    print(f"\nSettings:")
    try:
        sys.path.insert(0, str(Path(__file__).parent / "src"))
        from guru_dashboard.config import Settings
        settings = Settings.load()
    except ImportError as e:
        print(f"❌ Import error: {e}")
        print("Run: pip install -e .")
        return False

    api_key = settings.openrouter.api_key
    if api_key:
        if api_key.startswith("sk-or-"):
            print(f"✅ OPENROUTER_API_KEY: {api_key[:10]}...")
        else:
            print(f"⚠️  OPENROUTER_API_KEY looks unusual: {api_key[:10]}...")
    else:
        print("❌ OPENROUTER_API_KEY: Not set (the relay will answer 500)")

    print(f"   Relay URL: {settings.relay.url}")

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("❌ DATABASE_URL: Not set")
        print("\nQuick setup:")
        print("1. Copy the connection string from Supabase > Project Settings > Database")
        print("2. Add to .env file: echo 'DATABASE_URL=postgresql://...' >> .env")
        return False

    try:
        from guru_dashboard.config import DatabaseSettings
        DatabaseSettings()
        print("✅ DATABASE_URL: set")
    except ValueError as e:
        print(f"❌ DATABASE_URL invalid: {e}")
        return False

    return True

def main():
    print("🚀 Guru Dashboard Setup Verification")
    print("=" * 50)

    passed = check_environment()
    if passed:
        print("\n" + "=" * 50)
        print("🎉 Setup verification PASSED!")
        print("\nNext steps:")
        print("1. Start the relay: guru-dashboard serve-relay")
        print("2. Check the database: python scripts/test_db_connection.py")
        print("3. Show the table: guru-dashboard teachers")
    else:
        print("\n" + "=" * 50)
        print("❌ Setup verification FAILED!")
        print("\nPlease fix the issues above.")

    return passed

if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
