import asyncio
import threading
import time
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import numpy as np
import pytest

from core.entities.exercise import ExerciseType, JointState
from core.exceptions import EstimationFailedError, EstimatorUnavailableError
from core.interface import (
    DrawingSurface,
    FrameSourceInterface,
    PipelineObserver,
    PoseEstimatorInterface,
)
from core.usecase.pipeline_usecase import FramePipeline


@pytest.fixture
def frame():
    return np.zeros((480, 640, 3), dtype=np.uint8)


@pytest.fixture
def estimator():
    mock = MagicMock(spec=PoseEstimatorInterface)
    mock.estimate = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def surface():
    return MagicMock(spec=DrawingSurface)


@pytest.fixture
def observer():
    return Mock(spec=PipelineObserver)


@pytest.fixture
def pipeline(estimator, surface, observer):
    pipeline = FramePipeline(estimator, surface, observer=observer, tick_interval=0.01)
    pipeline.select_exercise("bicepsCurl")
    return pipeline


@pytest.fixture
def frame_source(frame):
    source = MagicMock(spec=FrameSourceInterface)
    source.read.return_value = frame
    return source


class BlockingEstimator(PoseEstimatorInterface):
    """Runs a slow blocking inference in the default executor, like MoveNet does."""

    def __init__(self, pose, delay=0.2):
        self._pose = pose
        self._delay = delay
        self._lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = 0

    def infer(self, frame):
        with self._lock:
            self.calls += 1
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        time.sleep(self._delay)
        with self._lock:
            self.in_flight -= 1
        return [self._pose]

    async def estimate(self, frame):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.infer, frame)

    def teardown(self):
        pass


class TestProcessFrame:
    @pytest.mark.asyncio
    async def test_applies_pose_to_state_machine_and_overlay(self, pipeline, estimator, surface, frame, make_arm_pose):
        estimator.estimate.return_value = [make_arm_pose(20.0)]

        result = await pipeline.process_frame(frame)

        assert result.exercise is ExerciseType.BICEPS_CURL
        assert result.rep_count == 1
        assert result.joint_states["left_elbow"] is JointState.END
        assert [r.joint for r in result.angles] == ["left_elbow"]
        estimator.estimate.assert_awaited_once_with(frame)
        surface.draw_frame.assert_called_once_with(frame)
        assert pipeline.metrics.summary("pipeline.tick.latency")["count"] == 1
        assert pipeline.metrics.summary("pipeline.reps")["count"] == 1

    @pytest.mark.asyncio
    async def test_counts_one_rep_over_a_full_movement(self, pipeline, estimator, frame, make_arm_pose):
        for angle in [160.0, 140.0, 20.0, 160.0]:
            estimator.estimate.return_value = [make_arm_pose(angle)]
            await pipeline.process_frame(frame)

        assert pipeline.rep_count == 1
        assert pipeline.state_machine.joint_state("left_elbow") is JointState.START

    @pytest.mark.asyncio
    async def test_only_first_pose_is_used(self, pipeline, estimator, frame, make_arm_pose):
        estimator.estimate.return_value = [make_arm_pose(170.0), make_arm_pose(20.0)]

        result = await pipeline.process_frame(frame)

        assert result.rep_count == 0

    @pytest.mark.asyncio
    async def test_low_confidence_pose_measures_nothing(self, pipeline, estimator, surface, frame, make_arm_pose):
        estimator.estimate.return_value = [make_arm_pose(20.0, right=20.0, score=0.2)]

        result = await pipeline.process_frame(frame)

        assert result.angles == []
        assert result.rep_count == 0
        surface.draw_line.assert_not_called()
        surface.draw_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_pose_is_a_no_op(self, pipeline, estimator, surface, frame):
        estimator.estimate.return_value = []

        assert await pipeline.process_frame(frame) is None
        surface.draw_frame.assert_not_called()

    @pytest.mark.asyncio
    async def test_estimation_failure_skips_the_tick(self, pipeline, estimator, surface, frame, make_arm_pose):
        estimator.estimate.side_effect = EstimationFailedError("model exploded")

        assert await pipeline.process_frame(frame) is None
        assert pipeline.estimator_available
        assert pipeline.metrics.summary("pipeline.estimation.failures")["count"] == 1
        surface.draw_frame.assert_not_called()

        estimator.estimate.side_effect = None
        estimator.estimate.return_value = [make_arm_pose(20.0)]
        result = await pipeline.process_frame(frame)
        assert result.rep_count == 1

    @pytest.mark.asyncio
    async def test_unavailable_estimator_is_reported_once(self, pipeline, estimator, observer, frame):
        estimator.estimate.side_effect = EstimatorUnavailableError("no backend")

        assert await pipeline.process_frame(frame) is None
        assert await pipeline.process_frame(frame) is None

        assert not pipeline.estimator_available
        assert estimator.estimate.await_count == 1
        observer.on_estimator_unavailable.assert_called_once()

    @pytest.mark.asyncio
    async def test_result_arriving_after_exercise_switch_is_discarded(self, pipeline, estimator, surface, frame, make_arm_pose):
        release = asyncio.Event()

        async def slow_estimate(_frame):
            await release.wait()
            return [make_arm_pose(20.0)]

        estimator.estimate.side_effect = slow_estimate
        pending = asyncio.create_task(pipeline.process_frame(frame))
        await asyncio.sleep(0)

        pipeline.select_exercise("pushUp")
        release.set()

        assert await pending is None
        assert pipeline.state_machine.rep_counts == {}
        surface.draw_frame.assert_not_called()

    @pytest.mark.asyncio
    async def test_result_arriving_after_pause_is_discarded(self, pipeline, estimator, frame, make_arm_pose):
        release = asyncio.Event()

        async def slow_estimate(_frame):
            await release.wait()
            return [make_arm_pose(20.0)]

        estimator.estimate.side_effect = slow_estimate
        pending = asyncio.create_task(pipeline.process_frame(frame))
        await asyncio.sleep(0)

        pipeline.pause()
        release.set()

        assert await pending is None
        assert pipeline.rep_count == 0

    @pytest.mark.asyncio
    async def test_unknown_exercise_draws_unfiltered_skeleton(self, pipeline, estimator, surface, frame, full_pose):
        assert pipeline.select_exercise("squat") is None
        estimator.estimate.return_value = [full_pose]

        result = await pipeline.process_frame(frame)

        assert result.exercise is None
        assert result.rep_count == 0
        assert surface.draw_line.call_count == 16
        surface.draw_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_switching_exercises_keeps_rep_counts(self, pipeline, estimator, observer, frame, make_arm_pose):
        estimator.estimate.return_value = [make_arm_pose(20.0)]
        await pipeline.process_frame(frame)

        pipeline.select_exercise(ExerciseType.PUSH_UP)
        assert pipeline.rep_count == 0
        assert set(pipeline.state_machine.joint_states.values()) == {JointState.START}

        pipeline.select_exercise("bicepsCurl")
        assert pipeline.rep_count == 1
        observer.on_rep_count_changed.assert_called_once_with(ExerciseType.BICEPS_CURL, 1)


class TestDetectionLoop:
    def test_rejects_non_positive_interval(self, estimator, surface):
        with pytest.raises(ValueError):
            FramePipeline(estimator, surface, tick_interval=0)

    @pytest.mark.asyncio
    async def test_ticks_never_overlap(self, pipeline, estimator, frame_source, make_arm_pose):
        in_flight = 0
        max_in_flight = 0

        async def slow_estimate(_frame):
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.02)
            in_flight -= 1
            return [make_arm_pose(170.0)]

        estimator.estimate.side_effect = slow_estimate
        pipeline.start(frame_source)
        await asyncio.sleep(0.15)
        await pipeline.stop()

        assert estimator.estimate.await_count >= 2
        assert max_in_flight == 1
        assert not pipeline.is_running

    @pytest.mark.asyncio
    async def test_missing_frames_skip_estimation(self, pipeline, estimator, frame_source):
        frame_source.read.return_value = None

        pipeline.start(frame_source)
        await asyncio.sleep(0.05)
        await pipeline.stop()

        assert frame_source.read.call_count >= 2
        estimator.estimate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_loop_stops_when_estimator_becomes_unavailable(self, pipeline, estimator, observer, frame_source):
        estimator.estimate.side_effect = EstimatorUnavailableError("gone")

        pipeline.start(frame_source)
        await asyncio.sleep(0.05)

        assert not pipeline.is_running
        assert estimator.estimate.await_count == 1
        observer.on_estimator_unavailable.assert_called_once()

        pipeline.start(frame_source)
        assert not pipeline.is_running
        await pipeline.stop()

    @pytest.mark.asyncio
    async def test_pause_and_resume(self, pipeline, estimator, frame_source):
        pipeline.start(frame_source)
        await asyncio.sleep(0.03)

        pipeline.pause()
        assert pipeline.is_paused
        assert not pipeline.is_running
        await asyncio.sleep(0.01)
        calls_while_paused = estimator.estimate.await_count
        await asyncio.sleep(0.05)
        assert estimator.estimate.await_count == calls_while_paused

        pipeline.resume()
        assert pipeline.is_running
        assert not pipeline.is_paused
        await asyncio.sleep(0.05)
        assert estimator.estimate.await_count > calls_while_paused

        await pipeline.stop()
        assert not pipeline.is_running

    @pytest.mark.asyncio
    async def test_quick_pause_resume_waits_for_running_inference(self, surface, frame_source, make_arm_pose):
        estimator = BlockingEstimator(make_arm_pose(170.0))
        pipeline = FramePipeline(estimator, surface, tick_interval=0.01)

        pipeline.start(frame_source)
        await asyncio.sleep(0.05)
        pipeline.pause()
        pipeline.resume()
        await asyncio.sleep(0.1)
        await pipeline.stop()

        assert estimator.max_in_flight == 1
        assert estimator.in_flight == 0

    @pytest.mark.asyncio
    async def test_stale_executor_result_is_discarded_after_pause(self, surface, frame_source, make_arm_pose):
        estimator = BlockingEstimator(make_arm_pose(20.0), delay=0.1)
        pipeline = FramePipeline(estimator, surface, tick_interval=0.01)
        pipeline.select_exercise("bicepsCurl")

        pipeline.start(frame_source)
        await asyncio.sleep(0.03)
        pipeline.pause()
        await asyncio.sleep(0.15)
        await pipeline.stop()

        assert estimator.calls == 1
        assert pipeline.rep_count == 0
        surface.draw_frame.assert_not_called()

    @pytest.mark.asyncio
    async def test_failing_tick_is_logged_and_loop_keeps_running(self, pipeline, estimator, surface, frame_source, make_arm_pose):
        estimator.estimate.return_value = [make_arm_pose(170.0)]
        surface.draw_frame.side_effect = RuntimeError("surface lost")

        with patch("core.usecase.pipeline_usecase.logger") as mock_logger:
            pipeline.start(frame_source)
            await asyncio.sleep(0.05)
            assert pipeline.is_running
            await pipeline.stop()

        assert estimator.estimate.await_count >= 2
        mock_logger.error.assert_any_call("Tick failed: surface lost")
        assert pipeline.metrics.summary("pipeline.tick.failures")["count"] >= 2
