from core.entities.exercise import ExerciseType, JointState
from core.exceptions import EstimatorUnavailableError


class PipelineObserver:
    """
    Receives events from the frame pipeline.

    Every hook is a no-op by default; a UI layer overrides the ones it
    needs and redraws itself when they fire.
    """

    def on_rep_count_changed(self, exercise: ExerciseType, count: int) -> None:
        pass

    def on_joint_state_changed(self, joint: str, state: JointState) -> None:
        pass

    def on_estimator_unavailable(self, error: EstimatorUnavailableError) -> None:
        pass
