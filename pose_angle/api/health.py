from fastapi import APIRouter, Depends

from pose_angle.common.dependencies import get_pose_service
from pose_angle.services.pose_stream_service import PoseStreamService

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/health/pipeline")
def pipeline_health(service: PoseStreamService = Depends(get_pose_service)):
    """캡처/채널/처리기 상태. 캡처 설정 실패는 capture_error로 구분해서 노출"""
    st = service.status()
    st["status"] = "error" if st["capture_error"] else ("ok" if st["running"] else "idle")
    return st


ROUTER = [router]
