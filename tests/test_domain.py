"""
Domain Logic Tests

도메인 계층 구성 요소 테스트 (DTO, 오버레이, 검출기 어댑터, 설정 헬퍼)
"""
import pytest
import numpy as np
from pydantic import ValidationError

from pose_angle.common.errors import IncompleteLandmarks, PoseAngleError
from pose_angle.config.env_utils import env_bool, env_float, env_int, env_list
from pose_angle.constants import LEFT_LEG, MARKER_COLOR_BGR
from pose_angle.domain.frame.annotator import FrameAnnotator
from pose_angle.domain.pose.detector import NoopKeypointDetector
from pose_angle.schemas.angle_dto import AngleResponse, JointTriple
from pose_angle.schemas.config_dto import PipelineConfigUpdate
from pose_angle.schemas.pose_dto import Keypoint, NoPose, PoseFound, first_pose
from pose_angle.services.service_factory import create_detector, create_frame_processor
from pose_angle.utils.image_codec import decode_image, encode_jpeg
from tests.test_helpers import create_angle_pose, create_blank_image


class TestJointTriple:
    """관절 트리플 설정 테스트"""

    def test_default_is_right_arm(self):
        assert JointTriple().as_tuple() == ("right_shoulder", "right_elbow", "right_wrist")

    def test_from_preset(self):
        assert JointTriple.from_names(["left_leg"]).as_tuple() == LEFT_LEG

    def test_from_three_names(self):
        triple = JointTriple.from_names(["left_hip", " left_knee ", "left_ankle"])
        assert triple.vertex == "left_knee"

    def test_unknown_joint_rejected(self):
        with pytest.raises(ValidationError):
            JointTriple(first="right_shoulder", vertex="tail", last="right_wrist")

    def test_wrong_count_rejected(self):
        with pytest.raises(ValueError):
            JointTriple.from_names(["right_shoulder", "right_elbow"])

    def test_unknown_preset_rejected(self):
        with pytest.raises(ValueError):
            JointTriple.from_names(["third_arm"])


class TestPoseDetection:
    """태그된 검출 결과 테스트"""

    def test_empty_is_no_pose(self):
        assert isinstance(first_pose([]), NoPose)

    def test_first_pose_is_used(self):
        a, b = create_angle_pose(30.0), create_angle_pose(120.0)
        detection = first_pose([a, b])
        assert isinstance(detection, PoseFound)
        assert detection.landmarks == a

    def test_noop_detector(self):
        assert NoopKeypointDetector().detect(create_blank_image()) == []


class TestFrameAnnotator:
    """오버레이 렌더링 테스트"""

    def test_marker_drawn_at_keypoint(self):
        img = create_blank_image(100, 100)
        out = FrameAnnotator(marker_radius=10).annotate(
            img, [Keypoint(name="right_elbow", x=50.0, y=60.0, confidence=1.0)]
        )
        assert tuple(out[60, 50]) == MARKER_COLOR_BGR
        assert not img.any()

    def test_angle_label_optional(self):
        img = create_blank_image(200, 100)
        with_text = FrameAnnotator(draw_angle_text=True).annotate(img, [], "90.00")
        without_text = FrameAnnotator(draw_angle_text=False).annotate(img, [], "90.00")
        assert with_text.any()
        assert not without_text.any()


class TestSchemas:
    def test_angle_response_range(self):
        with pytest.raises(ValidationError):
            AngleResponse(angle=181.0, angle_text="181.00", frame_index=0, timestamp=0.0,
                          joints=JointTriple())

    def test_config_update_bounds(self):
        with pytest.raises(ValidationError):
            PipelineConfigUpdate(smoothing_factor=1.0)
        assert PipelineConfigUpdate().smoothing_factor is None


class TestErrors:
    def test_incomplete_landmarks_lists_missing(self):
        e = IncompleteLandmarks(["right_wrist", "right_elbow"])
        assert isinstance(e, PoseAngleError)
        assert e.missing == ["right_wrist", "right_elbow"]
        assert "right_wrist" in str(e)


class TestImageCodec:
    def test_jpeg_round_trip_keeps_size(self):
        data = encode_jpeg(create_blank_image(64, 48), quality=90)
        assert data[:2] == b"\xff\xd8"
        assert decode_image(data).shape == (48, 64, 3)

    @pytest.mark.parametrize("payload", [b"", b"not an image"])
    def test_decode_rejects_garbage(self, payload):
        with pytest.raises(ValueError):
            decode_image(payload)


class TestServiceFactory:
    def test_noop_detector(self):
        assert create_detector("noop").name() == "noop"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_detector("yolo")

    def test_processor_from_settings(self, monkeypatch):
        from pose_angle.config.settings import settings
        monkeypatch.setattr(settings, "ANGLE_JOINTS", ["left_arm"])
        monkeypatch.setattr(settings, "SMOOTHING_FACTOR", 0.4)

        p = create_frame_processor(NoopKeypointDetector(), settings)
        assert p.joint_triple.as_tuple() == ("left_shoulder", "left_elbow", "left_wrist")
        assert p.smoother.factor == 0.4


class TestEnvUtils:
    def test_env_bool(self, monkeypatch):
        monkeypatch.setenv("X_FLAG", "Yes")
        assert env_bool("X_FLAG") is True
        monkeypatch.setenv("X_FLAG", "0")
        assert env_bool("X_FLAG", True) is False

    def test_env_list(self, monkeypatch):
        monkeypatch.setenv("X_LIST", "a, b,\nc")
        assert env_list("X_LIST", []) == ["a", "b", "c"]
        monkeypatch.delenv("X_LIST")
        assert env_list("X_LIST", ("d",)) == ["d"]

    def test_env_numbers_fall_back_on_garbage(self, monkeypatch):
        monkeypatch.setenv("X_NUM", "fast")
        assert env_float("X_NUM", 0.2) == 0.2
        monkeypatch.setenv("X_NUM", "12")
        assert env_int("X_NUM", 1) == 12
        assert np.isclose(env_float("X_NUM", 0.0), 12.0)
