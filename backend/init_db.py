"""
Initialize database and create a demo profile.

Run this script once to set up the database:
    python init_db.py
"""

import uuid

from biolink.database import engine, Base, SessionLocal
from biolink.core.security import create_access_token
from biolink.store import SqlStore, StoreError

DEMO_LINKS = {
    None: [
        ("Portfolio", "https://example.com"),
        ("Blog", "https://example.com/blog"),
    ],
    "Social": [
        ("Twitter", "https://twitter.com/demo"),
        ("Instagram", "https://instagram.com/demo"),
        ("YouTube", "https://youtube.com/@demo"),
    ],
}


def init_database():
    """Create all database tables"""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Database tables created successfully!")


def create_demo_profile():
    """Create a demo profile with a collection and a few links"""
    db = SessionLocal()
    store = SqlStore(db)

    try:
        if store.get_profile_by_username("demo"):
            print("Demo profile already exists.")
            print("Skipping demo data creation.")
            return

        print("\nCreating demo profile...")
        user_id = str(uuid.uuid4())
        store.create_profile(
            id=user_id,
            username="demo",
            display_name="Demo User",
            bio="Everything I make, in one place.",
            theme="purple",
            is_public=True
        )

        for collection_title, links in DEMO_LINKS.items():
            collection_id = None
            if collection_title:
                collection = store.insert_collection(
                    user_id=user_id,
                    title=collection_title,
                    position=store.next_collection_position(user_id)
                )
                collection_id = collection.id

            for title, url in links:
                store.insert_link(
                    user_id=user_id,
                    collection_id=collection_id,
                    title=title,
                    url=url,
                    position=store.next_link_position(user_id, collection_id)
                )

        token = create_access_token({"sub": user_id, "email": "demo@example.com"})

        print("\n" + "="*50)
        print("Demo profile created successfully!")
        print("="*50)
        print("Public page: /demo")
        print(f"Session token: {token}")
        print("="*50)

    except StoreError as e:
        print(f"Error creating demo profile: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    print("="*50)
    print("Biolink - Database Initialization")
    print("="*50)

    init_database()
    create_demo_profile()

    print("\nDatabase initialization complete!")
    print("\nYou can now start the server with:")
    print("    uvicorn biolink.main:app --reload")
