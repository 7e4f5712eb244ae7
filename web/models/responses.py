"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
엔티티 본문은 도메인 모델의 to_dict() (camelCase, 금액 문자열)를 그대로 사용한다.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")
    storage: str = Field(..., description="저장소 종류 (memory/file)")


class SuccessResponse(BaseModel):
    """상태 전이 성공 응답"""

    success: bool = Field(default=True, description="성공 여부")


class MessageResponse(BaseModel):
    """메시지 응답 (영구 삭제 등)"""

    message: str = Field(..., description="결과 메시지")


class ErrorResponse(BaseModel):
    """오류 응답"""

    message: str = Field(..., description="오류 메시지")
    errors: list[dict] | None = Field(default=None, description="요청 검증 오류 상세")


class ArchiveStatsResponse(BaseModel):
    """보관함 통계 응답"""

    total: int = Field(..., description="보관된 엔티티 총 개수")
    byType: dict[str, int] = Field(..., description="종류별 개수")
    oldestDate: str | None = Field(default=None, description="가장 오래된 보관 항목의 updatedAt")
