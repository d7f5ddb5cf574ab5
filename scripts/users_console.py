#!/usr/bin/env python3
# =============================================================================
# scripts/users_console.py - Interactive User Directory Console
# =============================================================================
# Terminal counterpart of the web UI: shows the user list and stats, lets you
# create and delete users, and re-fetches both after every change.
#
# Usage:
#   python scripts/users_console.py                       # Uses API_BASE_URL
#   python scripts/users_console.py http://localhost:5000
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from lib.api_client import ApiClientError, UserDirectoryClient

ROLES = ("developer", "designer", "manager", "admin")
DEFAULT_API_URL = "http://localhost:5000"


def show_users(client: UserDirectoryClient) -> list[dict]:
    """Print the user table and return the users shown."""
    try:
        users = client.list_users()
    except ApiClientError as exc:
        print(f"Failed to fetch users: {exc}")
        return []

    if not users:
        print("No users yet.")
        return []

    print(f"\n{'#':>3}  {'Name':<24}  {'Email':<32}  {'Role':<10}  Created")
    print("-" * 96)
    for index, user in enumerate(users, start=1):
        print(
            f"{index:>3}  {user['name']:<24}  {user['email']:<32}  "
            f"{user['role']:<10}  {user['createdAt']}"
        )
    return users


def show_stats(client: UserDirectoryClient) -> None:
    try:
        stats = client.get_stats()
    except ApiClientError as exc:
        print(f"Failed to fetch stats: {exc}")
        return

    roles = ", ".join(f"{item['role']}: {item['count']}" for item in stats["roleStats"]) or "none"
    uptime = stats["serverInfo"]["uptime"]
    print(f"\nTotal users: {stats['totalUsers']}  |  By role: {roles}  |  Server uptime: {uptime:.0f}s")


def refresh(client: UserDirectoryClient) -> list[dict]:
    users = show_users(client)
    show_stats(client)
    return users


def add_user(client: UserDirectoryClient) -> bool:
    print("\nCreate a new user (leave the name blank to cancel).")
    name = input("Name: ").strip()
    if not name:
        print("Cancelled.")
        return False
    email = input("Email: ").strip()
    role = input(f"Role ({'/'.join(ROLES)}): ").strip().lower()

    try:
        user = client.create_user(name, email, role)
    except ApiClientError as exc:
        print(f"Failed to create user: {exc.message}")
        return False

    print(f"User created successfully: {user['name']} <{user['email']}>")
    return True


def remove_user(client: UserDirectoryClient, users: list[dict]) -> bool:
    if not users:
        print("There are no users to delete.")
        return False

    choice = input(f"Number of the user to delete [1-{len(users)}]: ").strip()
    if not choice.isdigit() or not 1 <= int(choice) <= len(users):
        print("Invalid selection.")
        return False

    user = users[int(choice) - 1]
    confirm = input(f"Delete {user['name']} <{user['email']}>? [y/N]: ").strip().lower()
    if confirm != "y":
        print("Cancelled.")
        return False

    try:
        message = client.delete_user(user["id"])
    except ApiClientError as exc:
        print(f"Failed to delete user: {exc.message}")
        return False

    print(message)
    return True


def main() -> None:
    base_url = sys.argv[1] if len(sys.argv) > 1 else os.getenv("API_BASE_URL", DEFAULT_API_URL)

    print("User Directory Console")
    print(f"API: {base_url}")
    print("Press Ctrl+C at any time to exit.")

    with UserDirectoryClient(base_url) as client:
        users = refresh(client)
        try:
            while True:
                print("\n  1) Refresh  2) Add user  3) Delete user  4) Exit")
                choice = input("Enter choice [1-4]: ").strip()

                if choice == "1":
                    users = refresh(client)
                elif choice == "2":
                    if add_user(client):
                        users = refresh(client)
                elif choice == "3":
                    if remove_user(client, users):
                        users = refresh(client)
                elif choice == "4":
                    print("Goodbye!")
                    return
                else:
                    print("Invalid selection. Please choose a number from the menu.")
        except KeyboardInterrupt:
            print("\nExiting.")


if __name__ == "__main__":
    main()
