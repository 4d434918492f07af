# -*- coding: utf-8 -*-
# Course storage: the whole collection lives in one JSON file.

import glob
import json
import logging
import os
import shutil
from datetime import datetime

from .models import Course
from .settings import DB_BACKUP_KEEP, DEFAULT_DB_FILENAME, JSON_INDENT

logger = logging.getLogger("course_manager.data")


def get_default_db_path():
    return os.path.join(os.getcwd(), DEFAULT_DB_FILENAME)


def parse_courses(text):
    """
    Decode the backing file contents into a list of Course.
    Anything that is not a JSON array of objects yields an empty list;
    the corrupt content is then replaced on the next save.
    """
    try:
        payload = json.loads(text)
    except ValueError as e:
        logger.warning("Discarding unparsable course data: %s", e)
        return []
    if not isinstance(payload, list):
        logger.warning("Discarding course data: expected a list, got %s", type(payload).__name__)
        return []
    if not all(isinstance(item, dict) for item in payload):
        logger.warning("Discarding course data: every entry must be an object")
        return []
    return [Course.from_dict(item) for item in payload]


def load_courses(db_path, verbose=False):
    """
    Load every course from db_path.
    A missing, unreadable or malformed file is treated as an empty collection.
    """
    if not os.path.exists(db_path):
        if verbose:
            print(f"[LoadCourses] Course file not found at {db_path}. Returning empty list.")
        logger.info("Course file %s not found; starting empty", db_path)
        return []
    try:
        with open(db_path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", db_path, e)
        return []
    courses = parse_courses(text)
    if verbose:
        print(f"[LoadCourses] Loaded {len(courses)} course(s) from {db_path}")
    logger.info("Loaded %d course(s) from %s", len(courses), db_path)
    return courses


def save_courses(courses, db_path, dry_run=False, verbose=False):
    """
    Overwrite db_path with the full list of courses.
    OSError from the write is not caught here.
    """
    if dry_run:
        print(f"[SaveCourses] Dry run: would save {len(courses)} course(s) to {db_path}")
        return db_path
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    content = json.dumps([c.to_dict() for c in courses], ensure_ascii=False, indent=JSON_INDENT)
    with open(db_path, "w", encoding="utf-8") as f:
        f.write(content)
    if verbose:
        print(f"[SaveCourses] Saved {len(courses)} course(s) to {db_path}")
    logger.info("Saved %d course(s) to %s", len(courses), db_path)
    return db_path


def _list_db_backups(backup_dir, base_name, ext):
    pattern = os.path.join(backup_dir, f"{base_name}_backup_*{ext}")
    return sorted(glob.glob(pattern), key=lambda p: (os.path.getmtime(p), p))


def _cleanup_db_backups(backup_dir, base_name, ext, keep=DB_BACKUP_KEEP, verbose=False):
    if keep is None:
        return []
    try:
        keep = int(keep)
    except (TypeError, ValueError):
        return []
    backups = _list_db_backups(backup_dir, base_name, ext)
    if keep < 0 or len(backups) <= keep:
        return []
    removed = []
    for path in backups[:len(backups) - keep]:
        try:
            os.remove(path)
            removed.append(path)
        except OSError as e:
            logger.warning("Failed to remove old backup %s: %s", path, e)
            if verbose:
                print(f"[DBBackup] Failed to remove old backup {path}: {e}")
    return removed


def backup_database(db_path=None, backup_dir=None, keep=None, dry_run=False, verbose=False):
    """
    Copy the course file to a timestamped backup next to it (or into backup_dir)
    and prune old backups beyond keep. Returns the backup path, or None.
    """
    if not db_path:
        db_path = get_default_db_path()
    if not os.path.exists(db_path):
        print(f"Course file not found at {db_path}")
        return None
    backup_dir = backup_dir or os.path.dirname(db_path) or "."
    base = os.path.splitext(os.path.basename(db_path))[0]
    ext = os.path.splitext(db_path)[1]
    now_str = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = os.path.join(backup_dir, f"{base}_backup_{now_str}{ext}")
    if dry_run:
        print(f"[DBBackup] Dry run: would back up course file to {backup_path}")
        return backup_path
    try:
        os.makedirs(backup_dir, exist_ok=True)
        shutil.copy2(db_path, backup_path)
    except OSError as e:
        logger.error("Failed to back up %s: %s", db_path, e)
        print(f"[DBBackup] Failed to back up course file: {e}")
        return None
    if verbose:
        print(f"[DBBackup] Backed up course file to {backup_path}")
    else:
        print(f"Backup created at {backup_path}")
    logger.info("Backed up %s to %s", db_path, backup_path)
    _cleanup_db_backups(backup_dir, base, ext, keep=keep if keep is not None else DB_BACKUP_KEEP, verbose=verbose)
    return backup_path


def restore_database(db_path=None, backup_path=None, dry_run=False, verbose=False):
    """
    Replace the course file with a backup.
    backup_path of None or "latest" picks the newest backup beside db_path.
    """
    if not db_path:
        db_path = get_default_db_path()
    backup_dir = os.path.dirname(db_path) or "."
    base = os.path.splitext(os.path.basename(db_path))[0]
    ext = os.path.splitext(db_path)[1]
    if not backup_path or backup_path == "latest":
        backups = _list_db_backups(backup_dir, base, ext)
        if not backups:
            print("No backups found.")
            return None
        backup_path = backups[-1]
    if not os.path.exists(backup_path):
        print(f"Backup not found: {backup_path}")
        return None
    if dry_run:
        print(f"[DBBackup] Dry run: would restore course file from {backup_path}")
        return backup_path
    try:
        os.makedirs(backup_dir, exist_ok=True)
        shutil.copy2(backup_path, db_path)
    except OSError as e:
        logger.error("Failed to restore %s from %s: %s", db_path, backup_path, e)
        print(f"[DBBackup] Failed to restore course file: {e}")
        return None
    if verbose:
        print(f"[DBBackup] Restored course file from {backup_path}")
    else:
        print(f"Course file restored from {backup_path}")
    logger.info("Restored %s from %s", db_path, backup_path)
    return backup_path
