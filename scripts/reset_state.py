"""Reset all marketplace state in Redis (useful for testing)."""

import asyncio

from src.state.manager import StateManager


async def reset_all_state() -> None:
    """Delete every key under the configured prefix."""
    state_manager = StateManager()

    print(f"\n⚠️  WARNING: This will delete ALL '{state_manager.prefix}:*' keys from Redis!")
    response = input("Are you sure? (yes/no): ")

    if response.lower() != "yes":
        print("Cancelled.")
        return

    print("\nResetting state...")

    await state_manager.connect()
    deleted = await state_manager.delete_namespace()
    await state_manager.disconnect()

    print(f"✓ Deleted {deleted} keys from Redis\n")


if __name__ == "__main__":
    asyncio.run(reset_all_state())
