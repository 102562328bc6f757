#!/usr/bin/env python3
"""
Sync MongoDB indexes - create the lookup indexes for Users and JobData

Use --recreate after toggling MONGODB_ENFORCE_UNIQUE_USERS: MongoDB refuses
to change the unique flag of an existing index in place.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pymongo.errors import PyMongoError  # noqa: E402

from app.config import settings  # noqa: E402
from app.db.mongo import MongoDB, ensure_indexes  # noqa: E402


async def print_indexes(collection):
    indexes = await collection.list_indexes().to_list(length=None)
    for idx in indexes:
        unique = " (unique)" if idx.get("unique") else ""
        print(f"   - {idx['name']}: {dict(idx.get('key', {}))}{unique}")


async def sync_indexes(recreate: bool) -> int:
    print("🔧 Syncing MongoDB Indexes")
    print("=" * 60)

    mongo = MongoDB(settings)
    mongo.init_client()
    collections = [
        mongo.db[settings.MONGODB_USER_COLLECTION],
        mongo.db[settings.MONGODB_JOBDATA_COLLECTION],
    ]

    try:
        await mongo.db.command("ping")
        print(f"✅ MongoDB connected ({settings.MONGODB_DB_NAME})")

        if recreate:
            for collection in collections:
                print(f"\n🗑️  Dropping indexes on {collection.name} (except _id)...")
                await collection.drop_indexes()

        print(f"\n📝 Creating indexes (unique users: {settings.MONGODB_ENFORCE_UNIQUE_USERS})...")
        await ensure_indexes(mongo.db, settings)

        for collection in collections:
            print(f"\n📋 Indexes on {collection.name}:")
            await print_indexes(collection)
            count = await collection.count_documents({})
            print(f"   📊 Documents: {count}")
    except PyMongoError as e:
        print(f"❌ MongoDB error: {e}")
        return 1
    finally:
        mongo.close()

    print("\n" + "=" * 60)
    print("✅ MongoDB indexes in sync.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--recreate",
        action="store_true",
        help="drop existing indexes before creating them",
    )
    args = parser.parse_args()
    return asyncio.run(sync_indexes(args.recreate))


if __name__ == "__main__":
    sys.exit(main())
