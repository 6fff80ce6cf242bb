import pytest

from core.entities.exercise import ExerciseType
from core.entities.pose_entity import Keypoint, Pose
from core.exceptions import MalformedKeypointError
from core.service.keypoint_filter import filter_keypoints, validate_keypoint


class TestValidateKeypoint:
    def test_accepts_well_formed_keypoint(self):
        keypoint = Keypoint(name="nose", x=1.0, y=2.0, score=0.0)
        assert validate_keypoint(keypoint) is keypoint

    @pytest.mark.parametrize("x, y, score", [
        (float("nan"), 0.0, 0.5),
        (0.0, float("inf"), 0.5),
        (0.0, 0.0, 1.5),
        (0.0, 0.0, -0.1),
    ])
    def test_rejects_malformed_keypoint(self, x, y, score):
        with pytest.raises(MalformedKeypointError) as exc_info:
            validate_keypoint(Keypoint(name="left_elbow", x=x, y=y, score=score))
        assert exc_info.value.keypoint_name == "left_elbow"


class TestFilterKeypoints:
    def test_no_profile_returns_keypoints_unchanged(self, full_pose):
        filtered = filter_keypoints(full_pose, None)
        assert filtered.keypoints == full_pose.keypoints

    def test_no_profile_still_drops_malformed_keypoints(self):
        pose = Pose(keypoints=[
            Keypoint(name="nose", x=1.0, y=1.0, score=0.9),
            Keypoint(name="left_eye", x=float("nan"), y=1.0, score=0.9),
        ])
        assert [kp.name for kp in filter_keypoints(pose, None).keypoints] == ["nose"]

    def test_profile_keeps_only_required_keypoints_in_order(self, full_pose):
        filtered = filter_keypoints(full_pose, ExerciseType.BICEPS_CURL.profile)
        assert [kp.name for kp in filtered.keypoints] == [
            "left_shoulder", "right_shoulder", "left_elbow",
            "right_elbow", "left_wrist", "right_wrist",
        ]

    def test_low_confidence_keypoints_are_filtered_to_empty(self, make_arm_pose):
        pose = make_arm_pose(45.0, right=45.0, score=0.3)
        assert filter_keypoints(pose, ExerciseType.BICEPS_CURL.profile).keypoints == []

    def test_confidence_floor_is_exclusive(self, make_arm_pose):
        pose = make_arm_pose(45.0, score=0.31)
        assert len(filter_keypoints(pose, ExerciseType.BICEPS_CURL.profile).keypoints) == 3

    def test_does_not_mutate_input(self, full_pose):
        before = list(full_pose.keypoints)
        filter_keypoints(full_pose, ExerciseType.BICEPS_CURL.profile)
        assert full_pose.keypoints == before
