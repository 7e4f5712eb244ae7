"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- accounts: 계좌 CRUD, 이력, 계좌 간 이체
- categories: 카테고리 CRUD
- transactions: 거래 조회/생성/수정/삭제
- goals: 목표 CRUD, 적립
- debts: 부채 CRUD, 상환
- subscriptions: 구독 CRUD, 상태 변경, 결제
- archive: 보관/복원, 보관함 조회/통계/영구 삭제
"""
