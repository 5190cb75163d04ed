"""Blocking message boxes shared by the teacher console and the student kiosk."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def _ask(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_delete_question(parent: QWidget, question_number: int) -> bool:
    """Ask before dropping a question from the form (``question_number`` is 1-based)."""
    return _ask(parent, "Remove Question", f"Remove question {question_number} from this quiz?")


def confirm_delete_quiz(parent: QWidget, quiz_title: str) -> bool:
    """Ask before permanently deleting a stored quiz and its questions."""
    return _ask(
        parent,
        "Delete Quiz",
        f'Delete the quiz "{quiz_title}"? This cannot be undone.',
    )


def confirm_discard_draft(parent: QWidget) -> bool:
    return _ask(parent, "Unsaved Changes", "The quiz in the form is not saved. Discard it?")


def show_error(parent: QWidget | None, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_warning(parent: QWidget | None, title: str, message: str) -> None:
    """Blocking warning; the kiosk uses this for proctoring alerts."""
    QMessageBox.warning(parent, title, message)


def show_info(
    parent: QWidget | None,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Information box, optionally with enlarged text."""
    box = QMessageBox(QMessageBox.Information, title, message, QMessageBox.Ok, parent)
    if font_point_size:
        box.setStyleSheet(
            f"QLabel, QPushButton {{ font-size: {font_point_size}pt; }}"
        )
    box.exec()
