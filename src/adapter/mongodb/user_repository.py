"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.sequences import next_id
from domain.model.errors import DuplicateEmailError, DuplicateError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: AsyncDatabase):
        self.db = db
        self.collection = db[USERS_COLLECTION_NAME]

    async def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        The unique indexes are the real guard against concurrent signups
        racing between the existence check and the insert.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            await create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            await create_index_safe(
                self.collection, [('google_id', 1)], 'idx_users_google_id',
                unique=True,
                partialFilterExpression={'google_id': {'$type': 'string'}},
            )
            await create_index_safe(
                self.collection, [('email_confirm_token', 1)], 'idx_users_email_confirm_token',
                partialFilterExpression={'email_confirm_token': {'$type': 'string'}},
            )
            await create_index_safe(
                self.collection, [('reset_password_token', 1)], 'idx_users_reset_password_token',
                partialFilterExpression={'reset_password_token': {'$type': 'string'}},
            )
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            full_name=doc.get('full_name'),
            password_hash=doc.get('password_hash'),
            google_id=doc.get('google_id'),
            is_email_confirmed=doc.get('is_email_confirmed', False),
            email_confirm_token=doc.get('email_confirm_token'),
            reset_password_token=doc.get('reset_password_token'),
            reset_password_expires_at=doc.get('reset_password_expires_at'),
        )

    def _to_document(self, user: User) -> dict:
        return {
            'email': user.email,
            'full_name': user.full_name,
            'password_hash': user.password_hash,
            'google_id': user.google_id,
            'is_email_confirmed': user.is_email_confirmed,
            'email_confirm_token': user.email_confirm_token,
            'reset_password_token': user.reset_password_token,
            'reset_password_expires_at': user.reset_password_expires_at,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
        }

    # ── write operations ─────────────────────────────────────

    async def create(
        self,
        email: str,
        full_name: str | None = None,
        password_hash: str | None = None,
        google_id: str | None = None,
        is_email_confirmed: bool = False,
        email_confirm_token: str | None = None,
    ) -> User:
        """Insert a new user under the next integer id."""
        try:
            now = datetime.now(timezone.utc)
            user = User(
                id=await next_id(self.db, USERS_COLLECTION_NAME),
                email=email,
                created_at=now,
                updated_at=now,
                full_name=full_name,
                password_hash=password_hash,
                google_id=google_id,
                is_email_confirmed=is_email_confirmed,
                email_confirm_token=email_confirm_token,
            )
            await self.collection.insert_one({'_id': user.id, **self._to_document(user)})
            logger.debug("User inserted", extra={"userId": user.id})
            return user
        except DuplicateKeyError as e:
            raise _duplicate_error(e, email) from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise

    async def save(self, user: User) -> User:
        """Replace the stored document with every field of ``user``."""
        try:
            user.updated_at = datetime.now(timezone.utc)
            await self.collection.replace_one({'_id': user.id}, self._to_document(user))
            return user
        except DuplicateKeyError as e:
            raise _duplicate_error(e, user.email) from e
        except PyMongoError as e:
            logger.error("Failed to save user", extra={"userId": user.id, "error": str(e)})
            raise

    # ── read operations ──────────────────────────────────────

    async def get_by_id(self, user_id: int) -> User | None:
        return await self._find_one({'_id': user_id})

    async def get_by_email(self, email: str) -> User | None:
        return await self._find_one({'email': email})

    async def get_by_google_id(self, google_id: str) -> User | None:
        return await self._find_one({'google_id': google_id})

    async def get_by_email_confirm_token(self, token: str) -> User | None:
        return await self._find_one({'email_confirm_token': token})

    async def get_by_reset_password_token(self, token: str) -> User | None:
        return await self._find_one({'reset_password_token': token})

    async def _find_one(self, query: dict) -> User | None:
        try:
            doc = await self.collection.find_one(query)
        except PyMongoError as e:
            logger.error("Failed to query users", extra={"fields": sorted(query), "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None


def _duplicate_error(e: DuplicateKeyError, email: str) -> DuplicateError:
    """Translate a unique index violation into the matching domain error."""
    key_pattern = (e.details or {}).get('keyPattern') or {}
    if 'google_id' in key_pattern:
        logger.warning("Google id already linked to another user", extra={"email": email})
        return DuplicateError("Google account already linked")
    logger.warning("User write failed: email already exists", extra={"email": email})
    return DuplicateEmailError()
