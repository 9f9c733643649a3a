# tests/unit/test_selector.py
import pytest

from pose_angle.common.errors import IncompleteLandmarks
from pose_angle.constants import RIGHT_ARM
from pose_angle.domain.pose.selector import KeypointSelector
from pose_angle.schemas.pose_dto import NormalizedLandmark
from pose_angle.utils.enums.enums import CoordinateOrigin
from tests.test_helpers import create_landmarks


def test_projects_to_pixels_top_left():
    sel = KeypointSelector()
    kps = sel.filter_and_project(create_landmarks({"nose": (0.25, 0.5)}), width=200, height=100)
    assert len(kps) == 1
    assert kps[0].position == pytest.approx((50.0, 50.0))


def test_bottom_left_origin_flips_y():
    """좌하단 원점 검출기: y=0.1 (아래쪽) → 픽셀 y=90"""
    sel = KeypointSelector(origin=CoordinateOrigin.bottom_left)
    kps = sel.filter_and_project(create_landmarks({"nose": (0.5, 0.1)}), width=100, height=100)
    assert kps[0].position == pytest.approx((50.0, 90.0))


def test_zero_confidence_never_selected():
    """이름이 맞아도 confidence 0이면 제외"""
    sel = KeypointSelector(min_confidence=0.0)
    landmarks = create_landmarks({"right_shoulder": (0.1, 0.1), "right_elbow": (0.5, 0.5)})
    landmarks["right_wrist"] = NormalizedLandmark(x=0.9, y=0.9, confidence=0.0)

    kps = sel.filter_and_project(landmarks, 100, 100)
    assert "right_wrist" not in {kp.name for kp in kps}
    with pytest.raises(IncompleteLandmarks) as exc:
        sel.select(kps, RIGHT_ARM)
    assert exc.value.missing == ["right_wrist"]


def test_min_confidence_is_strict():
    sel = KeypointSelector(min_confidence=0.5)
    kps = sel.filter_and_project(
        {
            "nose": NormalizedLandmark(x=0.5, y=0.5, confidence=0.5),
            "left_eye": NormalizedLandmark(x=0.5, y=0.5, confidence=0.51),
        },
        100,
        100,
    )
    assert [kp.name for kp in kps] == ["left_eye"]


def test_non_finite_coordinates_dropped():
    sel = KeypointSelector()
    kps = sel.filter_and_project(
        {"nose": NormalizedLandmark(x=float("nan"), y=0.5, confidence=1.0)}, 100, 100
    )
    assert kps == []


def test_select_returns_triple_in_order():
    sel = KeypointSelector()
    kps = sel.filter_and_project(
        create_landmarks(
            {"right_wrist": (0.9, 0.9), "right_shoulder": (0.1, 0.1), "right_elbow": (0.5, 0.5)}
        ),
        100,
        100,
    )
    first, vertex, last = sel.select(kps, RIGHT_ARM)
    assert (first.name, vertex.name, last.name) == RIGHT_ARM
