#!/usr/bin/env python3
"""Helper script to check and create the .env file for the PTV API key."""

from pathlib import Path
import os
import sys


def _mask(value: str) -> str:
    if len(value) > 12:
        return value[:6] + "..." + value[-4:]
    return value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Route Planner Environment Checker")
    print("=" * 60)
    print()

    if env_file.exists():
        print(f"✅ Found .env file at: {env_file}")
        print()
        print("Current contents:")
        print("-" * 60)
        for line in env_file.read_text(encoding="utf-8").splitlines():
            name, sep, value = line.partition("=")
            if sep and name.strip() == "ROUTE_PLANNER_API_KEY":
                print(f"{name}={_mask(value.strip())}")
            else:
                print(line)
        print("-" * 60)
        print()
    else:
        print(f"❌ .env file NOT found at: {env_file}")
        print()
        print("Creating template .env file...")

        template = """# PTV Developer API key (required)
ROUTE_PLANNER_API_KEY=your-api-key-here

# API Configuration
ROUTE_PLANNER_API_PREFIX=/api
# ROUTE_PLANNER_FRONTEND_ALLOWED_ORIGINS=["http://localhost:5173","http://127.0.0.1:5173"]

# Planning
ROUTE_PLANNER_TIMEZONE=Europe/Berlin
# ROUTE_PLANNER_VEHICLE_PROFILES=["EUR_TRUCK_40T","EUR_VAN"]
# ROUTE_PLANNER_POLL_INTERVAL_SECONDS=0.5

# Outputs
ROUTE_PLANNER_DATA_ROOT=./data
ROUTE_PLANNER_PERSIST_RESULTS=false
"""
        env_file.write_text(template, encoding="utf-8")

        print(f"✅ Created .env file at: {env_file}")
        print()
        print("⚠️  Please edit .env and add your PTV API key!")
        print()
        return

    print("Checking environment variables...")
    print()

    api_key = os.getenv("ROUTE_PLANNER_API_KEY")
    if api_key:
        print(f"✅ ROUTE_PLANNER_API_KEY (from environment): {_mask(api_key)}")
    else:
        print("❌ ROUTE_PLANNER_API_KEY not found in environment")
    print()

    print("Testing config loading...")
    print()

    sys.path.insert(0, str(project_root / "src"))
    from route_planner.config import settings

    if settings.api_key:
        print(f"✅ Config loaded API key: {_mask(settings.api_key)}")
        print(f"✅ Timezone: {settings.timezone}")
        print("=" * 60)
        print("✅ SUCCESS: API key is configured!")
        print("=" * 60)
    else:
        print("=" * 60)
        print("❌ ERROR: API key is NOT configured")
        print("=" * 60)
        print()
        print("Troubleshooting:")
        print("1. Make sure .env file exists in project root")
        print("2. Make sure variables start with ROUTE_PLANNER_ prefix")
        print("3. Make sure there are no spaces around = sign")
        print("4. Restart backend after editing .env")


if __name__ == "__main__":
    main()
