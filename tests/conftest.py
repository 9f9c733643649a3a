"""
Pytest Configuration & Shared Fixtures

이 파일은 모든 테스트에서 재사용 가능한 fixture를 정의합니다.
"""
import os

# 설정 모듈 import 전에 카메라/모델 없이 동작하도록 고정
os.environ.setdefault("CAMERA_ENABLED", "false")
os.environ.setdefault("DETECTOR_BACKEND", "noop")
os.environ.setdefault("INTERNAL_API_KEY", "test-api-key")

import pytest
import numpy as np
from fastapi.testclient import TestClient

from pose_angle.domain.frame.processor import FrameProcessor
from pose_angle.services.pose_stream_service import PoseStreamService
from tests.test_helpers import (
    FailingDetector,
    FakeDetector,
    create_angle_pose,
    create_frame,
)


# ========================================
# Application Fixtures
# ========================================

@pytest.fixture
def app(pose_service):
    """FastAPI 애플리케이션 인스턴스 (카메라 없는 서비스 주입)"""
    from pose_angle.main import app as fastapi_app
    fastapi_app.state.pose_service = pose_service
    yield fastapi_app
    fastapi_app.state.pose_service = None


@pytest.fixture
def client(app):
    """FastAPI TestClient (lifespan 포함)"""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    """인증 헤더 (X-Internal-Api-Key)"""
    return {"X-Internal-Api-Key": "test-api-key"}


# ========================================
# Domain Object Fixtures
# ========================================

@pytest.fixture
def right_arm_90():
    """오른팔 90도 포즈"""
    return create_angle_pose(90.0)


@pytest.fixture
def fake_detector(right_arm_90):
    """항상 오른팔 90도 포즈를 돌려주는 검출기"""
    return FakeDetector([right_arm_90])


@pytest.fixture
def failing_detector():
    return FailingDetector()


@pytest.fixture
def processor(fake_detector):
    """기본 설정 FrameProcessor (factor 0.2)"""
    return FrameProcessor(detector=fake_detector)


@pytest.fixture
def pose_service(processor):
    """캡처 소스 없는 서비스 (업로드 프레임만 처리)"""
    return PoseStreamService(processor=processor)


@pytest.fixture
def blank_frame():
    """100x100 검은 프레임"""
    return create_frame()


# ========================================
# Utility Functions
# ========================================

@pytest.fixture
def assert_valid_angle():
    """각도 값 유효성 검증 헬퍼"""
    def _assert(angle: float, min_val: float = 0.0, max_val: float = 180.0):
        assert not np.isnan(angle), "Angle should not be NaN"
        assert min_val <= angle <= max_val, f"Angle {angle} out of range [{min_val}, {max_val}]"
    return _assert
