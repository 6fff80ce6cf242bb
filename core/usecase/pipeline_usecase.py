import asyncio
import time
from typing import Optional

import numpy as np

from core.entities.exercise import ExerciseProfile, ExerciseType, JointState, get_profile
from core.entities.pose_entity import FrameResult
from core.exceptions import EstimatorUnavailableError
from core.interface import (
    DrawingSurface,
    FrameSourceInterface,
    PipelineObserver,
    PoseEstimatorInterface,
)
from core.service.geometry_service import joint_angles
from core.service.keypoint_filter import filter_keypoints
from core.service.overlay_service import OverlayRenderer
from core.service.rep_counter_service import RepetitionStateMachine
from utilities.monitoring.metrics import MetricsCollector

from posetrainer.utils.logging_config import setup_logger

# Setup logging
logger = setup_logger("pipeline-usecase", "pipeline.log")

DEFAULT_TICK_INTERVAL = 0.1


class FramePipeline:
    """
    Runs pose analysis on a video stream, one tick at a time.

    A tick estimates poses on the current frame, filters the first pose to
    the active exercise, measures its joint angles, feeds them to the
    repetition state machine and renders the overlay. Ticks are
    single-flight: the next one is scheduled only after the previous
    estimation and its processing have finished.

    Pausing, stopping or switching exercise invalidates any estimation that
    is still in flight; its result is discarded when it arrives.
    """

    def __init__(
        self,
        estimator: PoseEstimatorInterface,
        surface: DrawingSurface,
        observer: Optional[PipelineObserver] = None,
        renderer: Optional[OverlayRenderer] = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        """
        Args:
            estimator: Pose estimator queried once per tick
            surface: Surface the overlay is drawn on
            observer: Receives rep count, joint state and availability events
            renderer: Overlay renderer, a default one when omitted
            tick_interval: Nominal seconds between tick starts
            metrics: Collector for latency and failure metrics
        """
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        self._estimator = estimator
        self._surface = surface
        self._observer = observer or PipelineObserver()
        self._renderer = renderer or OverlayRenderer()
        self._state_machine = RepetitionStateMachine(self._observer)
        self._tick_interval = tick_interval
        self._metrics = metrics or MetricsCollector()

        self._profile: Optional[ExerciseProfile] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        # Estimation that may outlive a cancelled tick, e.g. inference in an executor thread
        self._pending: Optional[asyncio.Future] = None
        self._frame_source: Optional[FrameSourceInterface] = None
        self._paused = False
        self._estimator_available = True

    @property
    def state_machine(self) -> RepetitionStateMachine:
        return self._state_machine

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    @property
    def active_profile(self) -> Optional[ExerciseProfile]:
        return self._profile

    @property
    def active_exercise(self) -> Optional[ExerciseType]:
        return self._profile.exercise if self._profile else None

    @property
    def rep_count(self) -> int:
        return self._state_machine.rep_count()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def estimator_available(self) -> bool:
        return self._estimator_available

    def select_exercise(self, exercise_id: "str | ExerciseType | None") -> Optional[ExerciseProfile]:
        """
        Switch the active exercise.

        Joint states restart at START; rep counts of every exercise are kept.
        Unknown ids behave like deselecting the exercise.
        """
        profile = get_profile(exercise_id)
        if exercise_id is not None and profile is None:
            logger.warning(f"Unknown exercise '{exercise_id}', no exercise is active")
        self._profile = profile
        self._state_machine.reset(profile)
        self._invalidate()
        logger.info(f"Active exercise: {profile.exercise.value if profile else None}")
        return profile

    async def process_frame(self, frame: np.ndarray) -> Optional[FrameResult]:
        """
        Run one tick on a frame.

        Returns:
            The tick's result, or None when the tick was a no-op (no pose,
            failed estimation, unavailable estimator, or a result that went
            stale while it was being estimated).
        """
        if not self._estimator_available:
            return None

        # At most one estimation in flight, even across pause and resume
        await self._wait_for_pending()

        generation = self._generation
        profile = self._profile
        start_time = time.perf_counter()

        pending = asyncio.ensure_future(self._estimator.estimate(frame))
        self._pending = pending
        try:
            poses = await asyncio.shield(pending)
        except EstimatorUnavailableError as e:
            self._mark_unavailable(e)
            return None
        except Exception as e:
            logger.error(f"Pose estimation failed: {e}")
            self._metrics.record("pipeline.estimation.failures", 1)
            return None

        if generation != self._generation:
            logger.debug("Discarding estimation result that arrived after cancellation")
            return None
        if not poses:
            return None

        pose = filter_keypoints(poses[0], profile)
        angles = joint_angles(pose, profile) if profile else []
        for reading in angles:
            new_state = self._state_machine.update(reading.joint, reading.angle)
            if new_state is JointState.END:
                self._metrics.record("pipeline.reps", 1, {"exercise": profile.exercise.value})

        self._renderer.render(pose, frame, self._surface, profile, angles)
        self._metrics.record("pipeline.tick.latency", time.perf_counter() - start_time)

        return FrameResult(
            exercise=profile.exercise if profile else None,
            rep_count=self._state_machine.rep_count(),
            angles=angles,
            joint_states=self._state_machine.joint_states,
        )

    async def run(self, frame_source: FrameSourceInterface) -> None:
        """Tick until cancelled or until the estimator becomes unavailable."""
        loop = asyncio.get_running_loop()
        while self._estimator_available:
            started = loop.time()
            frame = frame_source.read()
            if frame is not None:
                try:
                    await self.process_frame(frame)
                except Exception as e:
                    logger.error(f"Tick failed: {e}")
                    self._metrics.record("pipeline.tick.failures", 1)
            elapsed = loop.time() - started
            await asyncio.sleep(max(0.0, self._tick_interval - elapsed))
        logger.warning("Detection loop ended, estimator unavailable")

    def start(self, frame_source: FrameSourceInterface) -> None:
        """Start the detection loop on the running event loop."""
        if self.is_running:
            return
        if not self._estimator_available:
            logger.warning("Not starting detection, estimator unavailable")
            return
        self._frame_source = frame_source
        self._paused = False
        self._task = asyncio.create_task(self.run(frame_source), name="pose-detection")
        logger.info("Detection started")

    def pause(self) -> None:
        """Stop ticking; any in-flight result is discarded."""
        self._paused = True
        self._cancel()
        logger.info("Detection paused")

    def resume(self) -> None:
        if not self._paused or self._frame_source is None:
            return
        self.start(self._frame_source)
        logger.info("Detection resumed")

    async def stop(self) -> None:
        """Cancel the detection loop and wait for it and any in-flight estimation to finish."""
        task = self._task
        self._cancel()
        self._paused = False
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
        await self._wait_for_pending()
        self._task = None
        logger.info("Detection stopped")

    def _cancel(self) -> None:
        self._invalidate()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        # A cancelled task may still be unwinding; it no longer counts as running
        self._task = None

    async def _wait_for_pending(self) -> None:
        pending = self._pending
        if pending is not None and not pending.done():
            # asyncio.wait never cancels or raises from the awaited future
            await asyncio.wait([pending])

    def _invalidate(self) -> None:
        self._generation += 1

    def _mark_unavailable(self, error: EstimatorUnavailableError) -> None:
        if not self._estimator_available:
            return
        self._estimator_available = False
        logger.error(f"Pose estimator unavailable: {error}")
        self._observer.on_estimator_unavailable(error)
