from fastapi import Header, HTTPException, Request
from typing import Optional
from pose_angle.config.settings import settings
from pose_angle.services.pose_stream_service import PoseStreamService
import logging

logger = logging.getLogger(__name__)


# API Key 인증 (설정 변경용)
async def verify_api_key(
        x_internal_api_key: Optional[str] = Header(None, alias="X-Internal-Api-Key")
):
    if x_internal_api_key is None:
        logger.warning("⚠️ Missing X-Internal-Api-Key header")
        raise HTTPException(
            status_code=401,
            detail="Missing X-Internal-Api-Key header"
        )

    if x_internal_api_key != settings.INTERNAL_API_KEY:
        logger.warning(f"❌ Invalid API Key: {x_internal_api_key[:10]}...")
        raise HTTPException(
            status_code=401,
            detail="Invalid Internal API Key"
        )

    return True


# app.state에 올려둔 파이프라인 서비스
def get_pose_service(request: Request) -> PoseStreamService:
    service = getattr(request.app.state, "pose_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Pose pipeline is not initialized")
    return service
