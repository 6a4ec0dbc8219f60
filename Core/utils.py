"""
Shared helpers for logging setup and convergence plots.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Sequence, Union

import matplotlib.pyplot as plt


def setup_logging(log_type: str, problem_name: str, log_dir: Optional[str] = 'logs',
                  level: int = logging.INFO, attach_to: Sequence[str] = ()) -> logging.Logger:
    """Sets up a logger for a run script.

    Args:
        log_type: Kind of run (e.g. 'ga', 'sa'); names the log file.
        problem_name: Label stamped on every record.
        log_dir: Directory for `<log_type>_logs.log`. None logs to the stream only.
        level: Logging level applied to the logger.
        attach_to: Names of library loggers (e.g. 'GA') that should write
            through the same handlers.
    """
    logger = logging.getLogger(f"{log_type}_{problem_name}_logger")
    logger.setLevel(level)

    # Prevent adding multiple handlers if the logger already exists
    if not logger.handlers:
        session_id = int(time.time())
        formatter = logging.Formatter(
            f'%(asctime)s - %(levelname)s - [Session: {session_id}]-[Problem: {problem_name}] - %(message)s'
        )
        handlers = [logging.StreamHandler()]
        if log_dir is not None:
            log_dir_path = Path(log_dir)
            log_dir_path.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_dir_path / f"{log_type}_logs.log", mode='a'))

        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    for name in attach_to:
        library_logger = logging.getLogger(name)
        library_logger.setLevel(level)
        for handler in logger.handlers:
            if handler not in library_logger.handlers:
                library_logger.addHandler(handler)

    return logger


def plot_convergence(history: Sequence[float], title: str,
                     output_path: Optional[Union[str, Path]] = None,
                     show: bool = False, xlabel: str = 'Iteration') -> None:
    """Plots the best objective value over a run."""
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(range(1, len(history) + 1), list(history))
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel('Best Objective')
    ax.grid(True)
    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path)
    if show:
        plt.show()
    plt.close(fig)
