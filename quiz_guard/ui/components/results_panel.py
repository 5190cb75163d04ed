"""Component showing the ranked attempts for one quiz."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from quiz_guard.constants.ui_constants import LIST_REFRESH_BUTTON, NO_QUIZ_SELECTED_MESSAGE
from quiz_guard.core.errors import QuizGuardError
from quiz_guard.core.quiz_manager import QuizManager
from quiz_guard.styling.styles import Styles
from quiz_guard.ui.dialog_helpers import show_error

_COLUMNS = ("Rank", "Student", "Score", "Percent", "Time", "Submitted")


def _format_duration(seconds: float) -> str:
    minutes, secs = divmod(int(round(seconds)), 60)
    return f"{minutes}:{secs:02d}"


class ResultsPanel(QWidget):
    """Scoreboard of completed attempts; refreshed on demand."""

    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self._quiz_id: str | None = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel(NO_QUIZ_SELECTED_MESSAGE, self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.title_label)
        header_row.addStretch()

        self.refresh_button = QPushButton(LIST_REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh)
        header_row.addWidget(self.refresh_button)
        layout.addLayout(header_row)

        self.table = QTableWidget(0, len(_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(_COLUMNS))
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setStretchLastSection(True)
        layout.addWidget(self.table)

    def set_quiz(self, quiz_id: str | None) -> None:
        self._quiz_id = quiz_id
        self.refresh()

    def refresh(self) -> None:
        self.table.setRowCount(0)
        if self._quiz_id is None:
            self.title_label.setText(NO_QUIZ_SELECTED_MESSAGE)
            return
        try:
            quiz = self.quiz_manager.get_quiz(self._quiz_id)
            rows = self.quiz_manager.get_scoreboard(self._quiz_id)
        except QuizGuardError as exc:
            show_error(self, "Could not load results", str(exc))
            return

        self.title_label.setText(f"{quiz.title}: {len(rows)} submissions")
        self.table.setRowCount(len(rows))
        for row_index, row in enumerate(rows):
            submitted = row.ended_at.strftime("%Y-%m-%d %H:%M") if row.ended_at else ""
            values = (
                str(row.rank),
                row.student_id,
                f"{row.score}/{row.total_questions}",
                f"{row.percentage}%",
                _format_duration(row.duration_seconds),
                submitted,
            )
            for column, value in enumerate(values):
                self.table.setItem(row_index, column, QTableWidgetItem(value))
        self.table.resizeColumnsToContents()
