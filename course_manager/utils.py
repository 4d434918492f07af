# -*- coding: utf-8 -*-
# Prompt, logging and display helpers for the course manager CLI.

import logging
import math
import os
import signal
from logging.handlers import RotatingFileHandler

import pandas as pd

from .settings import COURSE_FIELDS, INPUT_TIMEOUT


def timeout_handler(signum, frame):
    """Handle timeout for user input operations."""
    print("\nTimeout: No response. Quitting...")
    raise TimeoutError("User input timeout")


def get_input_with_timeout(prompt, timeout=INPUT_TIMEOUT):
    """Get input with a timeout. Raises TimeoutError if no response."""
    # signal.SIGALRM is not available on some platforms (notably Windows).
    # Use it only when present; otherwise fall back to a blocking input() without timeout.
    if hasattr(signal, "SIGALRM") and timeout:
        signal.signal(signal.SIGALRM, timeout_handler)
        signal.alarm(int(timeout))
        try:
            return input(prompt)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user.")
            raise
        finally:
            signal.alarm(0)
    try:
        return input(prompt)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        raise


def coerce_price(value):
    """
    Turn a typed price into a number: int for whole-number input, float otherwise.
    Raises ValueError for anything that is not a finite number.
    """
    text = str(value).strip().replace(",", ".")
    try:
        return int(text)
    except ValueError:
        pass
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def prompt_price(prompt, allow_empty=False, timeout=INPUT_TIMEOUT):
    """
    Ask for a price until a number is typed.
    With allow_empty, an empty answer returns None.
    """
    while True:
        raw = get_input_with_timeout(prompt, timeout=timeout).strip()
        if not raw and allow_empty:
            return None
        try:
            return coerce_price(raw)
        except ValueError:
            print("Invalid price.")


def courses_to_dataframe(courses):
    rows = [c.to_dict() for c in courses]
    # object dtype keeps stored ints, floats and None as they are.
    return pd.DataFrame(rows, columns=COURSE_FIELDS, dtype=object)


def format_courses_table(courses):
    """Render courses as a plain-text table, one row per course."""
    df = courses_to_dataframe(courses)
    return df.to_string(index=False)


def print_courses_table(courses):
    print(format_courses_table(courses))


def setup_logging(log_dir=None, log_level="INFO", max_bytes=5_000_000, backup_count=3, verbose=False):
    """
    Configure rotating file logging for the CLI. Returns the logger instance.
    """
    logger = logging.getLogger("course_manager")
    if any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers):
        return logger
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logger.setLevel(level)
    log_dir = log_dir or os.getcwd()
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError as e:
        if verbose:
            print(f"[Logging] Failed to create log dir {log_dir}: {e}")
        log_dir = os.getcwd()
    log_path = os.path.join(log_dir, "course_manager.log")
    handler = RotatingFileHandler(log_path, maxBytes=int(max_bytes), backupCount=int(backup_count), encoding="utf-8")
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if verbose:
        print(f"[Logging] Writing logs to {log_path}")
    return logger
