import pytest
from pydantic import ValidationError

from core.entities.pose_entity import Keypoint, Pose


class TestPoseEntities:
    def test_keypoint_serializes_with_plain_field_names(self):
        keypoint = Keypoint(name="nose", x=1.5, y=2.5, score=0.9)

        assert keypoint.model_dump(by_alias=True) == {"name": "nose", "x": 1.5, "y": 2.5, "score": 0.9}
        assert keypoint.as_pixel() == (2, 2)
        assert keypoint.is_usable

    def test_pose_rejects_duplicate_names(self):
        with pytest.raises(ValidationError, match="unique"):
            Pose(keypoints=[
                Keypoint(name="nose", x=0, y=0, score=0.9),
                Keypoint(name="nose", x=1, y=1, score=0.9),
            ])

    def test_pose_lookup(self):
        pose = Pose(keypoints=[Keypoint(name="left_hip", x=3, y=4, score=0.5)])

        assert pose.get("left_hip").x == 3
        assert pose.get("right_hip") is None
        assert pose.score is None
        assert list(pose.keypoint_map()) == ["left_hip"]
