"""Entry point for the QuizGuard student kiosk."""

from __future__ import annotations

import argparse
import sys
import time

from PySide6.QtWidgets import QApplication

from quiz_guard.client.api_client import QuizApiClient
from quiz_guard.constants.network_constants import DEFAULT_SERVER_URL
from quiz_guard.core.config import get_settings
from quiz_guard.ui.student_exam_window import StudentExamWindow
from quiz_guard.utils.logging_config import configure_logging


def default_student_id() -> str:
    return f"student_{int(time.time() * 1000)}"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Take a QuizGuard quiz.")
    parser.add_argument("--server", default=DEFAULT_SERVER_URL, help="quiz server URL")
    parser.add_argument("--quiz", required=True, help="quiz id shared by the teacher")
    parser.add_argument("--student", default=None, help="student id (generated when omitted)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    logger = configure_logging(settings.log_level.upper())
    student_id = args.student or default_student_id()
    logger.info("Student %s opening quiz %s on %s", student_id, args.quiz, args.server)

    app = QApplication(sys.argv)
    with QuizApiClient(args.server) as client:
        window = StudentExamWindow(
            client,
            args.quiz,
            student_id,
            seconds_per_question=settings.seconds_per_question,
            max_tab_switches=settings.max_tab_switches,
        )
        if not window.load_quiz():
            sys.exit(1)
        window.show()
        exit_code = app.exec()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
