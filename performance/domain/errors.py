class PerformanceQueryError(Exception):
    """
    조회 계층에서 발생하는 오류의 공통 부모 클래스입니다.
    """


class InvalidArgumentError(PerformanceQueryError, ValueError):
    # 잘못된 요청 파라미터 (HTTP 400)
    pass


class NotFoundError(PerformanceQueryError):
    # 최소 1건을 기대하는 조회가 비어 있는 경우 (HTTP 404)
    pass


class UpstreamUnavailableError(PerformanceQueryError):
    # 지표 저장소에 접근할 수 없거나 쿼리가 실패한 경우 (HTTP 503)
    pass


class InternalError(PerformanceQueryError):
    # 예상하지 못한 상태 (HTTP 500)
    pass
