"""
Security Module

Password hashing with bcrypt and JWT access token management.
"""

import secrets
from typing import Any, Dict, Optional
from datetime import datetime, timedelta, timezone
from enum import Enum

import bcrypt
import jwt

from hostel_laundry.config.settings import settings
from hostel_laundry.core.exceptions import (
    AuthenticationError,
    InvalidTokenError,
    TokenExpiredError,
)
from hostel_laundry.core.logging import get_logger

logger = get_logger(__name__)


class TokenType(str, Enum):
    """Token type enumeration"""
    ACCESS = "access"


class PasswordManager:
    """Password hashing and verification"""

    @staticmethod
    def hash_password(password: str, rounds: Optional[int] = None) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password
            rounds: bcrypt cost factor (defaults to PASSWORD_BCRYPT_ROUNDS)

        Returns:
            Hashed password
        """
        try:
            salt = bcrypt.gensalt(rounds=rounds or settings.PASSWORD_BCRYPT_ROUNDS)
            return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            logger.error(f"Password hashing failed: {str(e)}")
            raise AuthenticationError("Password hashing failed")

    @staticmethod
    def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Verify a password against its hash.

        Returns:
            True if password matches, False otherwise
        """
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except (ValueError, TypeError) as e:
            logger.error(f"Password verification failed: {str(e)}")
            return False


class TokenManager:
    """JWT token management utilities"""

    @staticmethod
    def create_token(
        data: Dict[str, Any],
        token_type: TokenType = TokenType.ACCESS,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create JWT token with specified data and expiration.

        Args:
            data: Data to encode in token
            token_type: Type of token to create
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        to_encode = data.copy()
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

        to_encode.update({
            "exp": expire,
            "iat": now,
            "type": token_type.value,
            "jti": secrets.token_urlsafe(16)
        })

        return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def verify_token(token: str, expected_type: Optional[TokenType] = TokenType.ACCESS) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Raises:
            InvalidTokenError: If token is invalid
            TokenExpiredError: If token has expired
        """
        try:
            payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.PyJWTError as e:
            logger.warning(f"Token verification failed: {str(e)}")
            raise InvalidTokenError("Invalid token", reason=type(e).__name__)

        if expected_type and payload.get("type") != expected_type.value:
            raise InvalidTokenError("Invalid token type")
        if not payload.get("sub"):
            raise InvalidTokenError("Token has no subject")

        return payload


def hash_password(password: str) -> str:
    """Convenience function for hashing a password"""
    return PasswordManager.hash_password(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Convenience function for verifying a password"""
    return PasswordManager.verify_password(plain_password, hashed_password)


def create_access_token(data: Dict[str, Any]) -> str:
    """Convenience function for creating access token"""
    return TokenManager.create_token(data, TokenType.ACCESS)


def verify_token(token: str) -> Dict[str, Any]:
    return TokenManager.verify_token(token, TokenType.ACCESS)
