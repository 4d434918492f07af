# -*- coding: utf-8 -*-
# Course Manager: interactive add/list/get/update/delete over a JSON course file.

import argparse
import logging
import sys

from .version import __version__
from .config import get_default_config_path, load_config, resolve_settings
from .data import backup_database, load_courses, restore_database, save_courses
from .models import CourseUpdate
from .records import (
    create_course,
    delete_course_by_id,
    find_course_by_id,
    list_courses,
    update_course_by_id,
)
from .utils import get_input_with_timeout, print_courses_table, prompt_price, setup_logging

logger = logging.getLogger("course_manager.core")


def add_course_command(settings, verbose=False):
    timeout = settings["INPUT_TIMEOUT"]
    title = get_input_with_timeout("Course title: ", timeout=timeout).strip()
    price = prompt_price("Course price: ", timeout=timeout)
    courses = load_courses(settings["DB_PATH"], verbose=verbose)
    courses, course = create_course(courses, title, price)
    save_courses(courses, settings["DB_PATH"], dry_run=settings["DRY_RUN"], verbose=verbose)
    logger.info("Added course %s", course.id)
    print("Course added successfully")
    print_courses_table([course])
    return 0


def list_courses_command(settings, verbose=False):
    courses = list_courses(load_courses(settings["DB_PATH"], verbose=verbose))
    if not courses:
        print("No courses found")
        return 0
    print_courses_table(courses)
    return 0


def get_course_command(settings, verbose=False):
    courses = load_courses(settings["DB_PATH"], verbose=verbose)
    if not courses:
        print("No courses found")
        return 0
    course_id = get_input_with_timeout("Enter course ID: ", timeout=settings["INPUT_TIMEOUT"]).strip()
    course = find_course_by_id(courses, course_id)
    if course is None:
        print(f"Course not found with ID: {course_id}")
        return 0
    print_courses_table([course])
    return 0


def update_course_command(settings, verbose=False):
    timeout = settings["INPUT_TIMEOUT"]
    courses = load_courses(settings["DB_PATH"], verbose=verbose)
    if not courses:
        print("No courses found")
        return 0
    course_id = get_input_with_timeout("Enter course ID to update: ", timeout=timeout).strip()
    current = find_course_by_id(courses, course_id)
    if current is None:
        print(f"Course not found with ID: {course_id}")
        return 0

    title = get_input_with_timeout(
        f"New title (leave empty to keep old) [{current.title}]: ", timeout=timeout
    ).strip()
    price = prompt_price(
        f"New price (leave empty to keep old) [{current.price}]: ", allow_empty=True, timeout=timeout
    )
    changes = CourseUpdate(title=title or None, price=price)
    courses, course = update_course_by_id(courses, course_id, changes)
    save_courses(courses, settings["DB_PATH"], dry_run=settings["DRY_RUN"], verbose=verbose)
    logger.info("Updated course %s", course.id)
    print("Course updated successfully")
    print_courses_table([course])
    return 0


def delete_course_command(settings, verbose=False):
    courses = load_courses(settings["DB_PATH"], verbose=verbose)
    if not courses:
        print("No courses found")
        return 0
    course_id = get_input_with_timeout("Enter course ID to delete: ", timeout=settings["INPUT_TIMEOUT"]).strip()
    courses, removed = delete_course_by_id(courses, course_id)
    if not removed:
        print(f"Course not found with ID: {course_id}")
        return 0
    save_courses(courses, settings["DB_PATH"], dry_run=settings["DRY_RUN"], verbose=verbose)
    logger.info("Deleted course %s", course_id)
    print("Course deleted successfully")
    return 0


COMMANDS = [
    # (name, alias, description, handler)
    ("add", "a", "Add a course", add_course_command),
    ("list", "l", "List all courses", list_courses_command),
    ("get", "g", "Get a course by ID", get_course_command),
    ("update", "u", "Update a course by ID", update_course_command),
    ("delete", "d", "Delete a course by ID", delete_course_command),
]


def run_command(handler, settings, verbose=False):
    """
    Run one command handler and turn prompt cancellation and write failures into exit codes.
    """
    try:
        return handler(settings, verbose=verbose)
    except (TimeoutError, KeyboardInterrupt, EOFError):
        logger.info("Command %s cancelled", handler.__name__)
        print("Cancelled. No changes were saved.")
        return 1
    except OSError as e:
        logger.exception("Failed to save courses to %s", settings["DB_PATH"])
        print(f"Failed to save courses: {e}")
        return 1


def _print_menu():
    print("\nMenu:")
    for idx, (_, alias, description, _) in enumerate(COMMANDS, 1):
        print(f"{idx}. {description} ({alias})")
    print("\n0. Exit\n")


def _menu_choice_to_handler(choice):
    choice = choice.strip().lower()
    for idx, (name, alias, _, handler) in enumerate(COMMANDS, 1):
        if choice in (str(idx), name, alias):
            return handler
    return None


def interactive_menu(settings, verbose=False):
    """Loop over the command menu until the user quits."""
    while True:
        _print_menu()
        try:
            choice = get_input_with_timeout("Choose an option (or 'q' to quit): ", timeout=settings["INPUT_TIMEOUT"])
        except (TimeoutError, KeyboardInterrupt, EOFError):
            return 0
        if choice.strip().lower() in ("q", "quit", "0"):
            return 0
        handler = _menu_choice_to_handler(choice)
        if handler is None:
            print("Invalid option.")
            continue
        run_command(handler, settings, verbose=verbose)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="course-manager",
        description="CLI to manage courses",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    general_group = parser.add_argument_group("General")
    general_group.add_argument('--verbose', '-v', action='store_true', help="Enable verbose output", dest="verbose")
    general_group.add_argument('--dry-run', action='store_true',
                               help="Show what would be written without changing any file", dest="dry_run")
    general_group.add_argument('--log-dir', type=str,
                               help="Directory for course_manager.log (default: current directory)",
                               dest="log_dir", metavar="DIR")
    general_group.add_argument('--log-level', type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                               help="Log level for the log file", dest="log_level")
    general_group.add_argument('--log-max-bytes', type=int,
                               help="Rotate the log file after this many bytes", dest="log_max_bytes", metavar="BYTES")
    general_group.add_argument('--log-backups', type=int,
                               help="Number of rotated log files to keep", dest="log_backups", metavar="N")

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument('--config', '-c', type=str,
                              help="Load settings from this JSON file instead of the default location",
                              dest="config", metavar="CONFIG")

    db_group = parser.add_argument_group("Course File")
    db_group.add_argument('--db', '-D', type=str,
                          help="Course file (default: courses.json in the current directory)",
                          dest="db", metavar="DB")
    db_group.add_argument('--backup-db', nargs='?', const=True,
                          help="Back up the course file (optionally into DIR) before running the command",
                          dest="backup_db", metavar="DIR")
    db_group.add_argument('--restore-db', nargs='?', const="latest",
                          help="Restore the course file from PATH (default: latest backup)",
                          dest="restore_db", metavar="PATH")
    db_group.add_argument('--db-backup-keep', type=int,
                          help="Number of course file backups to keep", dest="db_backup_keep", metavar="N")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    for name, alias, description, handler in COMMANDS:
        sub = subparsers.add_parser(name, aliases=[alias], help=description, description=description)
        sub.set_defaults(handler=handler)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = args.config or get_default_config_path(verbose=args.verbose)
    config = load_config(config_path, verbose=args.verbose)
    settings = resolve_settings(args, config)

    setup_logging(
        log_dir=settings["LOG_DIR"],
        log_level=settings["LOG_LEVEL"],
        max_bytes=settings["LOG_MAX_BYTES"],
        backup_count=settings["LOG_BACKUP_COUNT"],
        verbose=args.verbose,
    )
    if args.verbose:
        print(f"[Config] Course file: {settings['DB_PATH']}")

    if args.restore_db:
        restore_database(
            db_path=settings["DB_PATH"],
            backup_path=args.restore_db,
            dry_run=settings["DRY_RUN"],
            verbose=args.verbose,
        )
    if args.backup_db:
        backup_dir = args.backup_db if isinstance(args.backup_db, str) else None
        backup_database(
            db_path=settings["DB_PATH"],
            backup_dir=backup_dir,
            keep=settings["DB_BACKUP_KEEP"],
            dry_run=settings["DRY_RUN"],
            verbose=args.verbose,
        )

    handler = getattr(args, "handler", None)
    if handler is not None:
        return run_command(handler, settings, verbose=args.verbose)
    # Backup/restore on their own need no menu.
    if args.restore_db or args.backup_db:
        return 0
    return interactive_menu(settings, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main())
