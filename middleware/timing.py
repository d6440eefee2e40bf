# timing: 요청 타이밍 미들웨어
# 각 요청에 타임스탬프와 요청 ID를 주입하여 일관된 요청 정보를 제공합니다.

import uuid
from datetime import datetime, timezone
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"


class TimingMiddleware(BaseHTTPMiddleware):
    """
    요청 타이밍 미들웨어

    각 요청이 들어올 때 타임스탬프와 요청 ID를 request.state에 저장합니다.
    클라이언트가 X-Request-ID를 보내면 그대로 사용하고, 응답 헤더로 돌려줍니다.
    """

    async def dispatch(self, request: Request, call_next):
        # UTC 시간으로 요청 시간 기록
        request.state.request_time = datetime.now(timezone.utc)
        request.state.request_id = (
            request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        )

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response
