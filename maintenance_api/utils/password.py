"""비밀번호 검증 유틸리티 모듈.

Password verification utility module.
Worker rosters are edited by administrators as plain JSON, so stored
passwords may be either opaque plain values or bcrypt hashes.
Both are compared in constant time.
"""

import secrets

import bcrypt

# bcrypt 해시 접두사: Prefixes of the bcrypt modular crypt format
_BCRYPT_PREFIXES: tuple[str, ...] = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def is_bcrypt_hash(value: str) -> bool:
    return value.startswith(_BCRYPT_PREFIXES)


def verify_password(plain_password: str, stored_password: str) -> bool:
    """입력 비밀번호와 저장된 값을 비교 검증합니다.

    Verify a plain text password against the stored roster value.
    bcrypt hashes are checked with bcrypt; anything else is treated as an
    opaque value and compared for exact equality.

    Args:
        plain_password: 검증할 평문 비밀번호 (Plain text password to verify)
        stored_password: 명단에 저장된 값 (Value stored in workers.json)

    Returns:
        bool: 일치하면 True (True if the password matches)
    """
    if is_bcrypt_hash(stored_password):
        try:
            return bcrypt.checkpw(
                plain_password.encode("utf-8"), stored_password.encode("utf-8")
            )
        except ValueError:
            # 손상된 해시: malformed hash never matches
            return False
    return secrets.compare_digest(
        plain_password.encode("utf-8"), stored_password.encode("utf-8")
    )
