import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from pose_angle.api import include_all_routers
from pose_angle.config.settings import settings
from pose_angle.services.service_factory import create_pose_stream_service

# 핸들러가 이미 있으면(uvicorn/pytest) 그대로 둔다
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    앱 수명 동안 파이프라인 서비스 1개를 유지.
    테스트 등에서 app.state.pose_service를 미리 넣어두면 그걸 사용
    """
    service = getattr(app.state, "pose_service", None)
    if service is None:
        service = create_pose_stream_service(settings)
        app.state.pose_service = service

    if settings.CAMERA_ENABLED:
        service.start()
    try:
        yield
    finally:
        service.stop()


# 앱 생성
app = FastAPI(debug=settings.DEBUG_MODE, lifespan=lifespan)

# 자동으로 pose_angle/api/* 모듈을 스캔해 라우터 전부 등록
include_all_routers(app)

app.openapi = lambda: get_openapi(
    title="Live Pose Angle API",
    version="0.1.0",
    description="카메라 프레임에서 관절 각도를 실시간으로 측정/표시하는 API",
    routes=app.routes,
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pose_angle.main:app", host="0.0.0.0", port=settings.FASTAPI_PORT, reload=False)
