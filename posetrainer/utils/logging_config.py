import os
import logging
import psutil
import time
import threading


def _logs_dir() -> str:
    default_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), 'logs')
    return os.environ.get('POSETRAINER_LOG_DIR', default_dir)


def setup_logger(logger_name: str, log_file: str) -> logging.Logger:
    """
    Set up a logger with dynamic log directory creation.
    
    Args:
        logger_name: Name of the logger
        log_file: Name of the log file
    
    Returns:
        logging.Logger: Configured logger instance
    """
    logs_dir = _logs_dir()
    os.makedirs(logs_dir, exist_ok=True)
    
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    
    # File handler captures INFO and above
    file_handler = logging.FileHandler(os.path.join(logs_dir, log_file))
    file_handler.setLevel(logging.INFO)
    file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    file_handler.setFormatter(file_formatter)
    
    # Console handler captures WARNING and above
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(console_formatter)
    
    if not logger.handlers:
        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
    else:
        file_handler.close()
    
    return logger 


def set_log_level(level: str) -> None:
    """Apply a level name (e.g. "DEBUG") to every posetrainer logger created so far."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and logger.handlers:
            logger.setLevel(numeric_level)


def log_cpu_and_mem_usage(logger=None, interval=5, stop_event=None):
    """
    Logs process resource usage at specified intervals.
    
    Args:
        logger (logging.Logger, optional): Custom logger instance. If None, uses default resource_logger
        interval (int): Time in seconds between logging resource usage
        stop_event (threading.Event, optional): Ends the loop once set
    """
    if logger is None:
        logger = setup_logger("cpu-mem-log", "resource.log")
        
    process = psutil.Process()
    while stop_event is None or not stop_event.is_set():
        cpu_usage = psutil.cpu_percent()
        memory_info = psutil.virtual_memory()
        rss_mb = process.memory_info().rss / 1024 / 1024
        logger.info(f"CPU Usage: {cpu_usage}% | Memory Usage: {memory_info.percent}% | RSS: {rss_mb:.1f} MB")
        if stop_event is not None:
            stop_event.wait(interval)
        else:
            time.sleep(interval)


def start_resource_monitoring(logger=None, target=log_cpu_and_mem_usage, interval=30, stop_event=None):
    """
    Starts resource monitoring in a background thread.
    
    Args:
        logger (logging.Logger, optional): Custom logger instance to use
        target: Callable run in the thread, called as target(logger, interval, stop_event)
        interval (int): Time in seconds between logging resource usage
        stop_event (threading.Event, optional): Event that stops the monitor
    
    Returns:
        threading.Thread: The monitoring thread instance
    """
    resource_thread = threading.Thread(
        target=target, 
        args=(logger, interval, stop_event), 
        daemon=True,
        name="resource-monitor"
    )
    
    resource_thread.start()
    return resource_thread
