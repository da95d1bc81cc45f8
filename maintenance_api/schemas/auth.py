"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
"""

from typing import Any

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """작업자 로그인 요청 스키마.

    Attributes:
        username: 사용자 로그인 아이디 (Worker login identifier)
        password: 비밀번호 (Compared against the roster value)
    """

    username: str  # 사용자 로그인 아이디 (Worker login identifier)
    password: str  # 비밀번호: 평문 또는 bcrypt 해시와 비교 (Compared to plain value or bcrypt hash)


class LoginResponse(BaseModel):
    """로그인 성공 응답 스키마.

    Attributes:
        success: 항상 True (Always true on success)
        name: 작업자 표시 이름 (Worker display name)
        role: 역할 (Role from the roster)
        username: 로그인 아이디 (Login identifier)
        institutionId: 소속 기관 ID (Owning institution)
    """

    success: bool = True
    name: Any = None  # 명단 값 그대로 전달 (Passed through from the roster as-is)
    role: Any = None
    username: str
    institutionId: str  # 클라이언트 호환 필드명 (camelCase kept for mobile clients)
