"""인증 서비스: 작업자 로그인 비즈니스 로직.

Auth Service: Verifies worker credentials across every institution.
A username/password pair is looked up in each institution's roster in
turn; the first match decides which institution the session belongs to.
Usernames are assumed to be unique across institutions, so the scan
order (directory listing) does not matter in practice.
"""

import logging
from typing import Any

from maintenance_api.repositories.base import JsonCollectionStore
from maintenance_api.repositories.paths import ResourceKind
from maintenance_api.schemas.auth import LoginRequest, LoginResponse
from maintenance_api.utils.exceptions import InvalidCredentialsError
from maintenance_api.utils.password import verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling worker authentication.
    """

    def _matches(self, worker: Any, data: LoginRequest) -> bool:
        if not isinstance(worker, dict):
            return False
        stored = worker.get("password")
        if worker.get("username") != data.username or not isinstance(stored, str):
            return False
        return verify_password(data.password, stored)

    def authenticate(self, store: JsonCollectionStore, data: LoginRequest) -> LoginResponse:
        """모든 기관 명단에서 자격 증명을 검색합니다.

        Linear scan over every institution's worker roster.

        Args:
            store: JSON 컬렉션 저장소 (Collection store)
            data: 로그인 요청 (Username and password)

        Returns:
            LoginResponse: 이름, 역할, 소속 기관 (Name, role and owning institution)

        Raises:
            InvalidCredentialsError: 어느 기관에서도 일치하지 않을 때 (No institution matched)
        """
        for institution_id in store.paths.list_institutions():
            for worker in store.load(institution_id, ResourceKind.WORKERS):
                if self._matches(worker, data):
                    return LoginResponse(
                        name=worker.get("name"),
                        role=worker.get("role"),
                        username=data.username,
                        institutionId=institution_id,
                    )
        logger.info("Failed login for username %r", data.username)
        raise InvalidCredentialsError()


auth_service: AuthService = AuthService()
