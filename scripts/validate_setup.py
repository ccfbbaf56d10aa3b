"""Validate that the marketplace is properly set up and configured."""

import asyncio
import sys
from pathlib import Path


async def check_python_version() -> bool:
    """Check if Python version is 3.11+."""
    print("Checking Python version...")

    version = sys.version_info
    if version.major < 3 or (version.major == 3 and version.minor < 11):
        print(f"  ❌ Python {version.major}.{version.minor} detected")
        print("  → Python 3.11+ required")
        return False

    print(f"  ✓ Python {version.major}.{version.minor} detected")
    return True


async def check_settings() -> bool:
    """Check that settings load and the business knobs are sane."""
    print("\nChecking configuration...")

    if not Path(".env").exists():
        print("  ℹ️  No .env file, using defaults and environment variables")

    from pydantic import ValidationError

    from src.config import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"  ❌ Invalid settings: {e}")
        return False

    print(f"  ✓ Environment: {settings.environment}")
    print(f"  ✓ Default delivery fee: {settings.default_delivery_fee}")
    print(f"  ✓ Driver commission rate: {settings.driver_commission_rate}")
    return True


async def check_project_structure() -> bool:
    """Check if all required directories and files exist."""
    print("\nChecking project structure...")

    required_paths = [
        "src/main.py",
        "src/config.py",
        "src/errors.py",
        "src/api/routes.py",
        "src/services/lifecycle.py",
        "src/services/pricing.py",
        "src/services/availability.py",
        "src/services/checkout.py",
        "src/state/manager.py",
        "src/state/store.py",
        "pyproject.toml",
    ]

    missing = []
    for path in required_paths:
        if not Path(path).exists():
            missing.append(path)

    if missing:
        print("  ❌ Missing files:")
        for path in missing:
            print(f"     - {path}")
        return False

    print("  ✓ All required files present")
    return True


async def check_redis() -> bool:
    """Check that Redis answers on the configured URL."""
    print("\nChecking Redis...")

    from redis.exceptions import RedisError

    from src.state.manager import StateManager

    state_manager = StateManager()
    try:
        await state_manager.ping()
    except (RedisError, OSError) as e:
        print(f"  ❌ Redis not reachable at {state_manager.redis_url}: {e}")
        print("  → Start Redis or set REDIS_URL")
        return False
    finally:
        await state_manager.disconnect()

    print(f"  ✓ Redis reachable at {state_manager.redis_url}")
    return True


async def main() -> None:
    """Run all validation checks."""
    print("\n" + "=" * 60)
    print("  Food Delivery Marketplace - Setup Validation")
    print("=" * 60 + "\n")

    checks = [
        ("Python Version", check_python_version),
        ("Configuration", check_settings),
        ("Project Structure", check_project_structure),
        ("Redis", check_redis),
    ]

    results = []
    for name, check in checks:
        try:
            result = await check()
            results.append((name, result))
        except Exception as e:
            print(f"  ❌ Error during {name} check: {e}")
            results.append((name, False))

    print("\n" + "=" * 60)
    print("  Validation Summary")
    print("=" * 60)

    all_passed = True
    for name, passed in results:
        status = "✓" if passed else "❌"
        print(f"  {status} {name}")
        if not passed:
            all_passed = False

    print("=" * 60)

    if all_passed:
        print("\n✅ All checks passed! System is ready.")
        print("\nNext steps:")
        print("  1. Seed data: python -m scripts.seed_data")
        print("  2. Start API: python -m src.main")
        print("  3. Test API: curl http://localhost:8000/health")
        print("  4. View docs: http://localhost:8000/docs")
    else:
        print("\n❌ Some checks failed. Please fix the issues above.")
        sys.exit(1)

    print()


if __name__ == "__main__":
    asyncio.run(main())
