"""Integer id allocation backed by a counters collection."""

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from adapter.mongodb import COUNTERS_COLLECTION_NAME


async def next_id(db: AsyncDatabase, sequence: str) -> int:
    """Atomically increment and return the named sequence (first value is 1)."""
    doc = await db[COUNTERS_COLLECTION_NAME].find_one_and_update(
        {'_id': sequence},
        {'$inc': {'seq': 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return doc['seq']
