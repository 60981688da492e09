#!/usr/bin/env python3
"""Script to verify connectivity and credentials for the PTV services."""

import asyncio
import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from route_planner.config import settings
from route_planner.exceptions import RoutePlannerError
from route_planner.services.geocoding.client import GeocodingClient, check_health


async def main():
    print("=" * 60)
    print("PTV Service Connection Test")
    print("=" * 60)
    print()

    # Check configuration
    print("1. Checking configuration...")
    if not settings.api_key:
        print("   [ERROR] API key is not configured")
        print("   Please set ROUTE_PLANNER_API_KEY in your .env file")
        return 1

    print(f"   [OK] API base URL: {settings.api_base_url}")
    print(f"   [OK] Vehicle profiles: {', '.join(settings.vehicle_profiles)}")
    print()

    print("2. Testing geocoding health check...")
    if await check_health():
        print("   [OK] Geocoding service accepts the API key")
    else:
        print("   [ERROR] Geocoding service is not responding")
        return 1
    print()

    print("3. Testing location search...")
    try:
        candidates = await GeocodingClient().search_locations("Alexanderplatz, Berlin")
    except RoutePlannerError as e:
        print(f"   [ERROR] Search failed: {e.to_payload()}")
        return 1
    print(f"   [OK] Received {len(candidates)} candidates")
    if candidates:
        first = candidates[0]
        print(f"   [OK] First match: {first.label} ({first.latitude:.5f}, {first.longitude:.5f})")
    print()

    print("=" * 60)
    print("[SUCCESS] PTV services are reachable!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
