#!/usr/bin/env python3

import asyncio
import random
import sys
import os

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from guestbook.database import create_tables, db_session
from guestbook.repositories.user_repository import UserRepository
from guestbook.repositories.message_repository import MessageRepository

async def create_test_users():
    async with db_session() as db:
        user_repo = UserRepository(db)
        
        users_data = [
            {"name": "alice", "email": "alice@example.com", "password": "password123"},
            {"name": "bob", "email": "bob@example.com", "password": "password123"},
            {"name": "charlie", "email": "charlie@example.com", "password": "password123"},
        ]
        
        created_users = []
        for user_data in users_data:
            existing_user = await user_repo.get_by_email(user_data["email"])
            if not existing_user:
                user = await user_repo.register(**user_data)
                created_users.append(user)
                print(f"Created user: {user.name} (ID: {user.id})")
            else:
                created_users.append(existing_user)
                print(f"User {user_data['name']} exists (ID: {existing_user.id})")
        
        return created_users

async def create_test_messages(users):
    async with db_session() as db:
        message_repo = MessageRepository(db)
        
        messages_data = [
            (users[0], "Lovely place, thanks for having us!"),
            (users[1], "Greetings from the mountains"),
            (users[2], "Will definitely come back next summer"),
            (users[0], "The coffee was excellent"),
            (users[1], "Hello to everyone reading this"),
        ]
        
        created_messages = []
        for author, text in messages_data:
            message = await message_repo.create(text, author_id=author.id)
            for _ in range(random.randint(0, 5)):
                await message_repo.increment_like(message.id)
            created_messages.append(message)
            print(f"Created message from {author.name}: '{text[:30]}...'")
        
        return created_messages

async def main():
    print("Creating test data for Auth Guestbook...\n")
    
    try:
        print("1. Creating database tables...")
        await create_tables()
        print("Tables created\n")
        
        print("2. Creating test users...")
        users = await create_test_users()
        print(f"Created/found {len(users)} users\n")
        
        print("3. Creating test messages...")
        messages = await create_test_messages(users)
        print(f"Created {len(messages)} messages\n")
        
        print("Test data created successfully!")
        print("\nUsers:")
        for user in users:
            print(f"  - {user.name} <{user.email}> - password: password123")
            print(f"    access token: {user.access_token[:16]}...")
        
        print("\nUseful links:")
        print("  - API docs: http://localhost:8000/docs")
        print("  - Messages: http://localhost:8000/users/messages?sort=likes")
        
    except Exception as e:
        print(f"Error creating test data: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    asyncio.run(main())
