"""Component listing stored quizzes with edit, delete and share actions."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_guard.constants.ui_constants import (
    LIST_DELETE_BUTTON,
    LIST_EDIT_BUTTON,
    LIST_REFRESH_BUTTON,
    LIST_SHARE_BUTTON,
    NO_QUIZ_SELECTED_MESSAGE,
)
from quiz_guard.core.errors import QuizGuardError
from quiz_guard.core.models import Quiz
from quiz_guard.core.quiz_manager import QuizManager
from quiz_guard.ui.dialog_helpers import confirm_delete_quiz, show_error, show_info, show_warning

logger = logging.getLogger(__name__)


def build_share_text(quiz: Quiz, server_url: str) -> str:
    """Text the teacher pastes into chat so students can open the quiz."""
    return f'Take the quiz: "{quiz.title}"\nQuiz ID: {quiz.id}\nServer: {server_url}'


class QuizListPanel(QWidget):
    """Shows every stored quiz, newest first."""

    edit_requested = Signal(str)
    quiz_selected = Signal(str)
    quiz_deleted = Signal(str)

    def __init__(
        self,
        quiz_manager: QuizManager,
        server_url: str,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.server_url = server_url
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        button_row = QHBoxLayout()
        self.refresh_button = QPushButton(LIST_REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh)
        button_row.addWidget(self.refresh_button)

        self.edit_button = QPushButton(LIST_EDIT_BUTTON, self)
        self.edit_button.clicked.connect(self._handle_edit)
        button_row.addWidget(self.edit_button)

        self.delete_button = QPushButton(LIST_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete)
        button_row.addWidget(self.delete_button)

        self.share_button = QPushButton(LIST_SHARE_BUTTON, self)
        self.share_button.clicked.connect(self._handle_share)
        button_row.addWidget(self.share_button)
        layout.addLayout(button_row)

        self.quiz_list = QListWidget(self)
        self.quiz_list.itemDoubleClicked.connect(lambda _item: self._handle_edit())
        self.quiz_list.currentItemChanged.connect(self._on_current_changed)
        layout.addWidget(self.quiz_list)

        self.status_label = QLabel(self)
        layout.addWidget(self.status_label)

    def refresh(self) -> None:
        try:
            quizzes = self.quiz_manager.list_quizzes()
        except QuizGuardError as exc:
            show_error(self, "Could not load quizzes", str(exc))
            return

        self.quiz_list.clear()
        for quiz in quizzes:
            created = quiz.created_at.strftime("%Y-%m-%d %H:%M")
            item = QListWidgetItem(
                f"{quiz.title}  ({len(quiz.questions)} questions, created {created})"
            )
            item.setData(Qt.UserRole, quiz.id)
            self.quiz_list.addItem(item)
        self.status_label.setText(f"{len(quizzes)} quizzes")

    def selected_quiz_id(self) -> str | None:
        item = self.quiz_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else None

    def _on_current_changed(self, current: QListWidgetItem | None, _previous) -> None:
        if current is not None:
            self.quiz_selected.emit(current.data(Qt.UserRole))

    def _selected_quiz(self) -> Quiz | None:
        quiz_id = self.selected_quiz_id()
        if quiz_id is None:
            show_warning(self, "No quiz", NO_QUIZ_SELECTED_MESSAGE)
            return None
        try:
            return self.quiz_manager.get_quiz(quiz_id)
        except QuizGuardError as exc:
            show_error(self, "Could not load quiz", str(exc))
            self.refresh()
            return None

    def _handle_edit(self) -> None:
        quiz_id = self.selected_quiz_id()
        if quiz_id is None:
            show_warning(self, "No quiz", NO_QUIZ_SELECTED_MESSAGE)
            return
        self.edit_requested.emit(quiz_id)

    def _handle_delete(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None or not confirm_delete_quiz(self, quiz.title):
            return
        try:
            self.quiz_manager.delete_quiz(quiz.id)
        except QuizGuardError as exc:
            show_error(self, "Delete failed", str(exc))
            return
        self.refresh()
        self.quiz_deleted.emit(quiz.id)

    def _handle_share(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None:
            return
        text = build_share_text(quiz, self.server_url)
        QGuiApplication.clipboard().setText(text)
        logger.info("Copied share info for quiz %s", quiz.id)
        show_info(self, "Share info copied", text, font_point_size=12)
