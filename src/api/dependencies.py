import os
from datetime import timedelta

from fastapi import Depends, HTTPException

from adapter.jwt.token_issuer import JoseTokenIssuer
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.product_repository import MongoProductRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.product_repository import ProductRepository
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository
from services.auth_service import AuthService
from services.products_service import ProductsService
from services.users_service import UsersService

JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_DAYS = int(os.getenv("JWT_EXPIRATION_DAYS", "7"))


async def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = await get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


async def get_user_repo() -> UserRepository:
    return MongoUserRepository(await _get_db())


async def get_product_repo() -> ProductRepository:
    return MongoProductRepository(await _get_db())


def get_token_issuer() -> TokenIssuer:
    return JoseTokenIssuer(
        os.getenv("JWT_SECRET_KEY"),
        algorithm=JWT_ALGORITHM,
        expires_in=timedelta(days=JWT_EXPIRATION_DAYS),
    )


def get_users_service(repo: UserRepository = Depends(get_user_repo)) -> UsersService:
    return UsersService(repo)


def get_auth_service(
    users: UsersService = Depends(get_users_service),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(users, token_issuer)


def get_products_service(repo: ProductRepository = Depends(get_product_repo)) -> ProductsService:
    return ProductsService(repo)
