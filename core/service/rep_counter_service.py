from typing import Dict, Optional

from core.entities.exercise import ExerciseProfile, ExerciseType, JointState
from core.interface.observer_interface import PipelineObserver
from core.service.geometry_service import is_angle_available

from posetrainer.utils.logging_config import setup_logger

logger = setup_logger("service.rep-counter", "core.log")


class RepetitionStateMachine:
    """
    Hysteresis state machine counting repetitions per vertex joint.

    Each vertex joint of the active exercise starts in ``START``. A joint
    moves to ``END`` when its angle drops below the profile's ``end``
    threshold, which completes one rep, and back to ``START`` when its angle
    rises above ``start``. Angles between the two thresholds never cause a
    transition.

    Joint states belong to the active exercise and are reinitialized on
    every ``reset``. Rep counts are kept per exercise for the lifetime of
    the machine so that returning to an exercise resumes its count.
    """

    def __init__(self, observer: Optional[PipelineObserver] = None):
        self._observer = observer or PipelineObserver()
        self._profile: Optional[ExerciseProfile] = None
        self._joint_states: Dict[str, JointState] = {}
        self._rep_counts: Dict[ExerciseType, int] = {}

    @property
    def active_exercise(self) -> Optional[ExerciseType]:
        return self._profile.exercise if self._profile else None

    @property
    def joint_states(self) -> Dict[str, JointState]:
        return dict(self._joint_states)

    @property
    def rep_counts(self) -> Dict[ExerciseType, int]:
        return dict(self._rep_counts)

    def joint_state(self, joint: str) -> Optional[JointState]:
        return self._joint_states.get(joint)

    def rep_count(self, exercise: Optional[ExerciseType] = None) -> int:
        """Reps for the given exercise, or for the active one when omitted."""
        exercise = exercise or self.active_exercise
        if exercise is None:
            return 0
        return self._rep_counts.get(exercise, 0)

    def reset(self, profile: Optional[ExerciseProfile]) -> None:
        """Make ``profile`` the active exercise with every joint back at START."""
        self._profile = profile
        self._joint_states = {}
        if profile is None:
            logger.info("Joint states cleared, no active exercise")
            return
        for joint in profile.vertex_joints:
            self._joint_states[joint] = JointState.START
        logger.info(f"Initialized joint states for {profile.exercise.value}: {list(self._joint_states)}")

    def update(self, joint: str, angle: float) -> Optional[JointState]:
        """
        Feed one freshly measured angle for a vertex joint.

        Returns:
            The joint's new state when a transition happened, else None.
        """
        if self._profile is None or joint not in self._joint_states:
            return None
        if not is_angle_available(angle):
            return None

        thresholds = self._profile.thresholds
        state = self._joint_states[joint]

        if state is JointState.START and angle < thresholds.end:
            self._set_state(joint, JointState.END)
            self._increment(self._profile.exercise)
            return JointState.END
        if state is JointState.END and angle > thresholds.start:
            self._set_state(joint, JointState.START)
            return JointState.START
        return None

    def _set_state(self, joint: str, state: JointState) -> None:
        self._joint_states[joint] = state
        logger.debug(f"{joint} state changed to: {state.value}")
        self._observer.on_joint_state_changed(joint, state)

    def _increment(self, exercise: ExerciseType) -> None:
        count = self._rep_counts.get(exercise, 0) + 1
        self._rep_counts[exercise] = count
        logger.info(f"Rep completed for {exercise.value}: {count}")
        self._observer.on_rep_count_changed(exercise, count)
