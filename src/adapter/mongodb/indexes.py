"""Index setup for the users and products collections.

Startup calls ``ensure_all_indexes``. The unique user indexes are what reject
concurrent duplicate signups, so an index left over with the right keys but
the wrong options is replaced rather than kept.
"""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)

# Options that change what an index enforces
ENFORCED_OPTIONS = ('unique', 'partialFilterExpression')


def _options_differ(idx_info: dict, wanted: dict) -> bool:
    return any(
        idx_info.get(option, False if option == 'unique' else None)
        != wanted.get(option, False if option == 'unique' else None)
        for option in ENFORCED_OPTIONS
    )


async def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create ``name`` on ``keys``, replacing a conflicting index.

    A conflict is an index with the same name on other keys, the same keys
    under another name, or the same keys with other uniqueness or filter.
    """
    try:
        await collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return await _replace_conflicting(collection, keys, name, **kwargs)


async def _replace_conflicting(collection, keys: list, name: str, **kwargs) -> bool:
    wanted_keys = dict(keys)

    for idx_name, idx_info in (await collection.index_information()).items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == wanted_keys
        if not (same_name or same_keys):
            continue
        if same_name and same_keys and not _options_differ(idx_info, kwargs):
            continue

        logger.warning("Replacing conflicting index", extra={
            "collection": collection.name, "index": idx_name, "wanted": name,
        })
        await collection.drop_index(idx_name)
        await collection.create_index(keys, name=name, **kwargs)
        return True

    logger.error("Could not resolve index conflict", extra={"collection": collection.name, "index": name})
    return False


async def ensure_all_indexes(db) -> bool:
    """Create the user and product indexes. True only if every one succeeded."""
    from adapter.mongodb.product_repository import MongoProductRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        await MongoUserRepository(db).ensure_indexes(),
        await MongoProductRepository(db).ensure_indexes(),
    ]
    return all(results)
