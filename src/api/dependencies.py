"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresCustomerRepository
from src.config.settings import Settings, get_settings
from src.domain.registration import RegistrationService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresCustomerRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresCustomerRepository(pool)


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    A fresh service per request; all state lives in the database.
    """
    repository = get_repository(request)
    return RegistrationService(repository=repository)


# HTTP BASIC AUTH security scheme for OpenAPI documentation
http_basic = HTTPBasic()


def require_admin(
    credentials: HTTPBasicCredentials = Depends(http_basic),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate the administrative API caller.

    FastAPI's HTTPBasic already answers 401 for a missing or malformed
    Authorization header; this checks the decoded pair against settings
    using constant-time comparison.

    Returns:
        The authenticated username
    """
    username_ok = secrets.compare_digest(
        credentials.username.encode(), settings.admin_username.encode()
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode(), settings.admin_password.encode()
    )
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
