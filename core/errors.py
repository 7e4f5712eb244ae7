"""
도메인 예외

모든 비즈니스 규칙 위반은 FinanceError 하위 클래스로 표현.
Web 계층은 status_code로 HTTP 응답을 결정한다.
"""


class FinanceError(Exception):
    """도메인 예외 기본 클래스

    Args:
        message: 클라이언트에 노출되는 메시지
    """

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(FinanceError):
    """ID가 없거나 요청한 전이에 맞지 않는 상태"""

    status_code = 404


class ValidationError(FinanceError):
    """잘못된 입력 (금액 ≤ 0, 필수 필드 누락, 날짜 범위 오류 등)"""

    status_code = 400


class InsufficientFundsError(FinanceError):
    """잔액 부족"""

    status_code = 400


class ConflictError(FinanceError):
    """보관되지 않은 엔티티의 영구 삭제 시도"""

    status_code = 409
