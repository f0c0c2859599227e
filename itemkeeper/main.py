"""
itemkeeper - Main entry point.

Runs a short demonstration of team-based access control through the
item pipelines, and can be run to verify the installation.
"""

from __future__ import annotations

import asyncio

from itemkeeper.auth import IdentityClaims, InMemoryDirectory, reason
from itemkeeper.core.models import Role, Team
from itemkeeper.pipeline import ValidationException
from itemkeeper.services.items import (
    CreateItemRequest,
    CreateItemService,
    GetItemRequest,
    GetItemService,
    UpdateItemRequest,
    UpdateItemService,
)
from itemkeeper.storage import InMemoryItemStore


async def demo():
    """Create a team item and show who can read and modify it."""
    print("=" * 60)
    print("ITEMKEEPER DEMO")
    print("=" * 60)
    print()

    engineering = Team(
        team_id="engineering",
        name="Engineering",
        owner_id="eng-lead",
        member_ids={"alice", "bob"},
        admin_ids={"eng-lead"},
    )
    directory = InMemoryDirectory(
        users={
            "alice": Role.USER,
            "bob": Role.USER,
            "eng-lead": Role.TEAM_ADMIN,
            "mallory": Role.USER,
            "root": Role.ADMIN,
        },
        teams=[engineering],
    )
    store = InMemoryItemStore()

    users = {}
    for user_id in ("alice", "bob", "eng-lead", "mallory", "root"):
        users[user_id] = await directory.resolve_user(IdentityClaims(user_id=user_id))

    print("Creating a team item as alice...")
    created = await CreateItemService(store, directory).execute(CreateItemRequest(
        user=users["alice"],
        message="Quarterly roadmap draft",
        team_id="engineering",
    ))
    item_id = created["id"]
    print(f"  ✓ Created {item_id} ({created['accessLevel']})")
    print()

    item = await store.get_item(item_id)
    print("Access decisions:")
    for user_id, user in users.items():
        read = reason(user, item)
        write = reason(user, item, for_modify=True)
        print(f"  • {user_id:<9} read={read.value:<20} modify={write.value}")
    print()

    print("Reading and updating through the pipelines...")
    get_service = GetItemService(store, directory)
    update_service = UpdateItemService(store, directory)
    for user_id in ("bob", "mallory"):
        try:
            await get_service.execute(GetItemRequest(user=users[user_id], item_id=item_id))
            print(f"  ✓ {user_id} read the item")
        except ValidationException as e:
            print(f"  ✗ {user_id}: {e}")
    for user_id in ("bob", "eng-lead"):
        try:
            await update_service.execute(UpdateItemRequest(
                user=users[user_id],
                item_id=item_id,
                message="Quarterly roadmap v2",
            ))
            print(f"  ✓ {user_id} updated the item")
        except ValidationException as e:
            print(f"  ✗ {user_id}: {e}")
    print()

    print("=" * 60)
    print("Demo complete!")
    print("=" * 60)


def main():
    """Main entry point."""
    asyncio.run(demo())


if __name__ == "__main__":
    main()
