import argparse
import asyncio
import threading
from typing import Optional

import cv2

from core.entities.exercise import ExerciseType, JointState, available_exercises
from core.exceptions import EstimatorUnavailableError
from core.interface import PipelineObserver
from core.usecase import FramePipeline
from infrastructure.inference import InferenceServiceFactory
from infrastructure.vision import OpenCVFrameSource, OpenCVSurface
from utilities.config import get_config
from utilities.monitoring.metrics import JSONFileExporter

from posetrainer.utils.logging_config import set_log_level, setup_logger, start_resource_monitoring

logger = setup_logger("main", "posetrainer_main.log")

WINDOW_NAME = "Workout Pose Trainer"

# Number keys select exercises in registry order, 0 clears the selection
EXERCISE_KEYS = {ord(str(i + 1)): exercise for i, exercise in enumerate(available_exercises())}


class ConsoleObserver(PipelineObserver):
    """Logs pipeline events and keeps the status line shown in the window."""

    def __init__(self):
        self.status = ""

    def on_rep_count_changed(self, exercise: ExerciseType, count: int) -> None:
        self.status = f"{exercise.display_name}: {count}"
        logger.info(f"Rep count for {exercise.value}: {count}")

    def on_joint_state_changed(self, joint: str, state: JointState) -> None:
        logger.debug(f"{joint} -> {state.value}")

    def on_estimator_unavailable(self, error: EstimatorUnavailableError) -> None:
        self.status = "Pose detection unavailable"
        logger.error(f"Pose detection unavailable: {error}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Count exercise repetitions from a webcam stream.")
    parser.add_argument("--exercise", default=None, help=f"One of: {', '.join(available_exercises())}")
    parser.add_argument("--camera", default=None, help="Camera index or video file path")
    parser.add_argument("--model", default=None, help="Pose model URL")
    return parser.parse_args(argv)


def _video_source(value: Optional[str], default: int):
    if value is None:
        return default
    return int(value) if value.isdigit() else value


def _status_text(pipeline: FramePipeline, observer: ConsoleObserver) -> str:
    if not pipeline.estimator_available:
        return observer.status
    if pipeline.active_exercise is None:
        return "No exercise selected"
    text = f"{pipeline.active_exercise.display_name}: {pipeline.rep_count}"
    if pipeline.is_paused:
        text += " (paused)"
    return text


async def run_session(pipeline: FramePipeline, source: OpenCVFrameSource,
                      surface: OpenCVSurface, observer: ConsoleObserver) -> None:
    """Show the overlay until the window is closed or 'q' is pressed."""
    pipeline.start(source)
    try:
        while True:
            image = surface.image.copy()
            cv2.putText(image, _status_text(pipeline, observer), (10, 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2, cv2.LINE_AA)
            cv2.imshow(WINDOW_NAME, image)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord('p'):
                if pipeline.is_paused:
                    pipeline.resume()
                else:
                    pipeline.pause()
            elif key == ord('0'):
                pipeline.select_exercise(None)
            elif key in EXERCISE_KEYS:
                pipeline.select_exercise(EXERCISE_KEYS[key])

            # Yield to the detection task between redraws
            await asyncio.sleep(0.01)
    finally:
        await pipeline.stop()


def main(argv=None) -> int:
    args = parse_args(argv)
    config = get_config()
    set_log_level(config.MONITORING.LOG_LEVEL)

    stop_event = threading.Event()
    if config.MONITORING.ENABLE_RESOURCE_MONITORING:
        start_resource_monitoring(logger, interval=config.MONITORING.RESOURCE_INTERVAL, stop_event=stop_event)

    try:
        estimator = InferenceServiceFactory.create_estimator("movenet", {
            "model_url": args.model or config.VISION.MODEL_URL,
            "input_size": config.VISION.INPUT_SIZE,
            "enable_gpu": config.VISION.ENABLE_GPU,
        })
    except EstimatorUnavailableError as e:
        logger.error(f"Could not start pose detection: {e}")
        stop_event.set()
        return 1

    source = OpenCVFrameSource(
        _video_source(args.camera, config.VISION.CAMERA_INDEX),
        width=config.VISION.FRAME_WIDTH,
        height=config.VISION.FRAME_HEIGHT,
    )
    surface = OpenCVSurface(config.VISION.FRAME_WIDTH, config.VISION.FRAME_HEIGHT)
    observer = ConsoleObserver()
    pipeline = FramePipeline(
        estimator,
        surface,
        observer=observer,
        tick_interval=config.PIPELINE.tick_interval,
    )
    pipeline.select_exercise(args.exercise or config.PIPELINE.DEFAULT_EXERCISE)

    try:
        asyncio.run(run_session(pipeline, source, surface, observer))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        source.release()
        estimator.teardown()
        cv2.destroyAllWindows()
        stop_event.set()
        output = JSONFileExporter(config.MONITORING.METRICS_DIR).export(pipeline.metrics.get_metrics())
        logger.info(f"Metrics written to {output}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
