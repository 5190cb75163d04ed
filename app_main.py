"""Application entry point for the QuizGuard teacher console and server."""

from __future__ import annotations

import argparse
import socket
import sys

from quiz_guard.core.config import get_settings
from quiz_guard.core.quiz_manager import QuizManager
from quiz_guard.server.api_server import serve, start_api_server
from quiz_guard.utils.logging_config import configure_logging


def _determine_server_url(port: int) -> str:
    """Best-effort determination of the LAN address students should use."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="QuizGuard teacher console and quiz server.")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="run only the HTTP server, without the teacher console",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Initialize logging, start the API server, and launch the Qt UI."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    logger = configure_logging(settings.log_level.upper())
    logger.info("Starting QuizGuard (database %s)", settings.database_url)

    quiz_manager = QuizManager.from_settings(settings)
    if args.headless:
        serve(quiz_manager, settings)
        return

    # Deferred so --headless never loads Qt.
    from PySide6.QtWidgets import QApplication

    from quiz_guard.ui.teacher_main_window import TeacherMainWindow

    start_api_server(quiz_manager, settings)
    server_url = _determine_server_url(settings.port)
    logger.info("Students connect to %s", server_url)

    app = QApplication(sys.argv)
    window = TeacherMainWindow(quiz_manager=quiz_manager, server_url=server_url)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
