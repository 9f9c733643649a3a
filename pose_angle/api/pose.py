from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response, StreamingResponse
from starlette.concurrency import run_in_threadpool
from typing import Iterator, Optional
import logging
import time

from pose_angle.common.dependencies import get_pose_service, verify_api_key
from pose_angle.config.settings import settings
from pose_angle.schemas.angle_dto import AngleResponse
from pose_angle.schemas.config_dto import PipelineConfig, PipelineConfigUpdate
from pose_angle.schemas.frame_dto import DisplayResultResponse, Frame
from pose_angle.services.pose_stream_service import PoseStreamService
from pose_angle.utils.image_codec import decode_image, encode_jpeg

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/pose", tags=["Pose Angle"])

_NO_CACHE = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
}


# ========== 각도 / 최신 결과 ==========
@router.get("/angle", response_model=AngleResponse)
def latest_angle(service: PoseStreamService = Depends(get_pose_service)) -> AngleResponse:
    """가장 최근에 갱신된 스무딩 각도 (스킵된 프레임은 반영 안 됨)"""
    result = service.sink.latest_angle()
    if result is None:
        raise HTTPException(status_code=404, detail="No angle measured yet")
    return AngleResponse(
        angle=result.angle,
        angle_text=result.angle_text,
        raw_angle=result.raw_angle,
        frame_index=result.frame_index,
        timestamp=result.timestamp,
        joints=service.processor.joint_triple,
    )


@router.get("/latest", response_model=DisplayResultResponse)
def latest_result(service: PoseStreamService = Depends(get_pose_service)) -> DisplayResultResponse:
    result = service.sink.latest()
    if result is None:
        raise HTTPException(status_code=404, detail="No frame processed yet")
    return DisplayResultResponse.from_result(result)


# ========== 이미지 ==========
@router.get("/snapshot.jpg")
def snapshot(service: PoseStreamService = Depends(get_pose_service)):
    """최신 표시 이미지 1장 (JPEG)"""
    result = service.sink.latest()
    if result is None:
        raise HTTPException(status_code=404, detail="No frame available yet")
    jpeg = encode_jpeg(result.image, settings.JPEG_QUALITY)
    return Response(content=jpeg, media_type="image/jpeg", headers=_NO_CACHE)


@router.get("/mjpeg")
def mjpeg(
        fps: float = Query(default=settings.MJPEG_FPS, gt=0.0, le=60.0),
        limit: Optional[int] = Query(default=None, ge=1, description="N 프레임 후 종료"),
        service: PoseStreamService = Depends(get_pose_service),
):
    """표시 이미지 MJPEG 스트림 (multipart/x-mixed-replace)"""
    return StreamingResponse(
        _mjpeg_frames(service, fps, limit),
        media_type="multipart/x-mixed-replace; boundary=frame",
        headers={**_NO_CACHE, "Connection": "keep-alive"},
    )


def _mjpeg_frames(service: PoseStreamService, fps: float, limit: Optional[int]) -> Iterator[bytes]:
    min_interval = 1.0 / fps
    seq = 0
    sent = 0
    last_sent = 0.0
    while limit is None or sent < limit:
        seq, result = service.sink.wait_next(seq, timeout=1.0)
        if result is None:
            continue
        wait = min_interval - (time.monotonic() - last_sent)
        if wait > 0:
            time.sleep(wait)
        jpeg = encode_jpeg(result.image, settings.JPEG_QUALITY)
        last_sent = time.monotonic()
        sent += 1
        yield (
            b"--frame\r\n"
            b"Content-Type: image/jpeg\r\n"
            + f"Content-Length: {len(jpeg)}\r\n\r\n".encode("ascii")
            + jpeg
            + b"\r\n"
        )


# ========== 외부 프레임 입력 ==========
@router.post("/frame", response_model=DisplayResultResponse)
async def process_frame(
        file: UploadFile = File(..., description="처리할 이미지 (jpg/png)"),
        service: PoseStreamService = Depends(get_pose_service),
) -> DisplayResultResponse:
    """
    업로드 이미지를 라이브 처리기로 처리 (카메라 스트림과 같은 락으로 직렬화)
    """
    content = await file.read()
    try:
        image = decode_image(content)
    except ValueError as e:
        logger.warning(f"⚠️ invalid upload {file.filename}: {e}")
        raise HTTPException(status_code=400, detail=f"Invalid image: {e}")

    frame = Frame.from_image(image, index=service.sink.seq, timestamp=time.monotonic())
    result = await run_in_threadpool(service.submit_frame, frame)
    return DisplayResultResponse.from_result(result)


# ========== 설정 ==========
@router.get("/config", response_model=PipelineConfig)
def get_config(service: PoseStreamService = Depends(get_pose_service)) -> PipelineConfig:
    return service.config()


@router.put("/config", response_model=PipelineConfig)
def update_config(
        update: PipelineConfigUpdate,
        _: bool = Depends(verify_api_key),
        service: PoseStreamService = Depends(get_pose_service),
) -> PipelineConfig:
    """관절 트리플/스무딩 계수/신뢰도 하한/방향 변경 (프레임 사이에 적용)"""
    try:
        config = service.update_config(update)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"🔧 config updated: {config.model_dump()}")
    return config


ROUTER = [router]
