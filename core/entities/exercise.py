from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

# (a, b, c) joint names; the angle is measured at b
AngleTriple = Tuple[str, str, str]


class JointState(Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Thresholds:
    """
    Activation angles of a rep, in degrees.

    The tracked angle falls while a rep is performed, so a joint leaves
    ``START`` once it drops below ``end`` and re-arms once it rises above
    ``start``.
    """
    start: float
    end: float

    def __post_init__(self):
        if not self.start > self.end:
            raise ValueError(
                f"Thresholds require start > end, got start={self.start} end={self.end}"
            )

    @property
    def span(self) -> float:
        return self.start - self.end


@dataclass(frozen=True)
class ExerciseProfile:
    """Joints to measure and the thresholds that define one repetition."""
    exercise: "ExerciseType"
    angle_triples: Tuple[AngleTriple, ...]
    thresholds: Thresholds
    display_angle: bool = True

    @property
    def vertex_joints(self) -> Tuple[str, ...]:
        """Vertex joint names in triple order, without duplicates."""
        return tuple(dict.fromkeys(b for _, b, _ in self.angle_triples))

    @property
    def required_keypoints(self) -> FrozenSet[str]:
        return frozenset(name for triple in self.angle_triples for name in triple)


class ExerciseType(Enum):
    BICEPS_CURL = "bicepsCurl"
    PUSH_UP = "pushUp"

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def profile(self) -> ExerciseProfile:
        return EXERCISE_PROFILES[self]


ARM_TRIPLES: Tuple[AngleTriple, ...] = (
    ("left_shoulder", "left_elbow", "left_wrist"),
    ("right_shoulder", "right_elbow", "right_wrist"),
)


def _build_profile(exercise: ExerciseType) -> ExerciseProfile:
    match exercise:
        case ExerciseType.BICEPS_CURL:
            return ExerciseProfile(
                exercise=exercise,
                angle_triples=ARM_TRIPLES,
                thresholds=Thresholds(start=150, end=30),
                display_angle=True,
            )
        case ExerciseType.PUSH_UP:
            return ExerciseProfile(
                exercise=exercise,
                angle_triples=ARM_TRIPLES,
                thresholds=Thresholds(start=160, end=90),
                display_angle=True,
            )
    raise ValueError(f"No profile registered for exercise: {exercise}")


# Built at import so a member without a profile fails immediately
EXERCISE_PROFILES: Dict[ExerciseType, ExerciseProfile] = {
    exercise: _build_profile(exercise) for exercise in ExerciseType
}


def resolve_exercise(exercise_id: "str | ExerciseType | None") -> Optional[ExerciseType]:
    """
    Map an exercise identifier to its enum member.

    Accepts the member itself, its value ("bicepsCurl") or its name
    ("BICEPS_CURL", case-insensitive). Anything else resolves to None.
    """
    if exercise_id is None:
        return None
    if isinstance(exercise_id, ExerciseType):
        return exercise_id
    try:
        return ExerciseType(exercise_id)
    except ValueError:
        pass
    return ExerciseType.__members__.get(str(exercise_id).upper())


def get_profile(exercise_id: "str | ExerciseType | None") -> Optional[ExerciseProfile]:
    """Profile for an exercise id; unknown ids mean no active profile."""
    exercise = resolve_exercise(exercise_id)
    if exercise is None:
        return None
    return exercise.profile


def available_exercises() -> List[str]:
    return [exercise.value for exercise in ExerciseType]
