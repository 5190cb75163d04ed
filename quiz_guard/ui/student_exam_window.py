"""Fullscreen kiosk window in which a student takes one quiz."""

from __future__ import annotations

import logging
from datetime import datetime

from PySide6.QtCore import QEvent, QObject, Qt, QTimer
from PySide6.QtGui import QKeySequence
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QApplication,
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quiz_guard.client.api_client import ApiClientError, QuizApiClient, QuizPaper
from quiz_guard.constants.quiz_constants import (
    MAX_TAB_SWITCHES,
    SECONDS_PER_QUESTION,
    TIME_LEFT_WARNING_SECONDS,
)
from quiz_guard.constants.ui_constants import (
    FULLSCREEN_REQUIRED_MESSAGE,
    STUDENT_FINISH_BUTTON,
    STUDENT_NEXT_BUTTON,
    STUDENT_START_BUTTON,
    STUDENT_WINDOW_TITLE,
    SUBMIT_FAILED_MESSAGE,
    TIMER_INTERVAL_MS,
)
from quiz_guard.core.markdown_math_renderer import renderer
from quiz_guard.core.models import GradeResult, StudentAnswer
from quiz_guard.core.services.delivery_session import (
    CompletionReason,
    DeliverySession,
    DeliveryState,
)
from quiz_guard.core.services.proctoring_monitor import (
    ProctoringEvent,
    ProctoringMonitor,
    ProctoringNotice,
)
from quiz_guard.styling.styles import Styles
from quiz_guard.ui.dialog_helpers import show_error, show_info, show_warning
from quiz_guard.ui.question_renderer import render_result_review

logger = logging.getLogger(__name__)

_INTRO_PAGE, _QUESTION_PAGE, _RESULTS_PAGE = range(3)


class StudentExamWindow(QWidget):
    """Connects Qt input to ``DeliverySession`` and ``ProctoringMonitor``.

    The window owns no quiz state. It forwards clicks and one tick per
    second to the session, translates focus loss, leaving fullscreen and
    key presses into monitor calls, and redraws from the session afterwards.
    """

    def __init__(
        self,
        client: QuizApiClient,
        quiz_id: str,
        student_id: str,
        *,
        seconds_per_question: int = SECONDS_PER_QUESTION,
        max_tab_switches: int = MAX_TAB_SWITCHES,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(STUDENT_WINDOW_TITLE)
        self.setContextMenuPolicy(Qt.NoContextMenu)

        self._client = client
        self._quiz_id = quiz_id
        self._student_id = student_id
        self._seconds_per_question = seconds_per_question
        self._max_tab_switches = max_tab_switches

        self._paper: QuizPaper | None = None
        self._session: DeliverySession[GradeResult] | None = None
        self._monitor: ProctoringMonitor | None = None
        self._results_shown = False

        self._build_ui()
        self.setStyleSheet(Styles.get_kiosk_style())

        self._timer = QTimer(self)
        self._timer.setInterval(TIMER_INTERVAL_MS)
        self._timer.timeout.connect(self._on_tick)

        app = QApplication.instance()
        app.installEventFilter(self)
        app.applicationStateChanged.connect(self._on_application_state_changed)

    # --- Layout ---

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.pages = QStackedWidget(self)
        layout.addWidget(self.pages)

        intro = QWidget(self)
        intro_layout = QVBoxLayout(intro)
        self.title_label = QLabel(self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        intro_layout.addWidget(self.title_label)
        self.instructions_view = self._web_view()
        intro_layout.addWidget(self.instructions_view)
        self.summary_label = QLabel(self)
        intro_layout.addWidget(self.summary_label)
        self.start_button = QPushButton(STUDENT_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start)
        intro_layout.addWidget(self.start_button)
        self.pages.addWidget(intro)

        question_page = QWidget(self)
        question_layout = QVBoxLayout(question_page)
        header_row = QHBoxLayout()
        self.progress_label = QLabel(self)
        header_row.addWidget(self.progress_label)
        header_row.addStretch()
        self.timer_label = QLabel(self)
        header_row.addWidget(self.timer_label)
        question_layout.addLayout(header_row)

        self.question_view = self._web_view()
        question_layout.addWidget(self.question_view, stretch=1)

        self.options_layout = QVBoxLayout()
        question_layout.addLayout(self.options_layout)
        self.option_group = QButtonGroup(self)
        self.option_group.setExclusive(True)
        self.option_group.buttonClicked.connect(self._on_option_clicked)

        self.next_button = QPushButton(STUDENT_NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        question_layout.addWidget(self.next_button)

        self.strike_label = QLabel(self)
        question_layout.addWidget(self.strike_label)
        self.pages.addWidget(question_page)

        self.results_view = self._web_view()
        self.pages.addWidget(self.results_view)

    def _web_view(self) -> QWebEngineView:
        view = QWebEngineView(self)
        view.setContextMenuPolicy(Qt.NoContextMenu)
        return view

    # --- Loading ---

    def load_quiz(self) -> bool:
        """Fetch the quiz; returns False (after telling the student) on failure."""
        try:
            self._paper = self._client.fetch_quiz(self._quiz_id)
        except ApiClientError as exc:
            show_error(self, "Could not load quiz", str(exc))
            return False

        self.title_label.setText(self._paper.title)
        self.instructions_view.setHtml(
            renderer.render_full_document(self._paper.instructions, title=self._paper.title)
        )
        count = len(self._paper.questions)
        self.summary_label.setText(
            f"{count} questions, {self._seconds_per_question} seconds each. "
            "The quiz runs in fullscreen; leaving it ends the quiz."
        )
        self.pages.setCurrentIndex(_INTRO_PAGE)
        return True

    # --- Session control ---

    def _handle_start(self) -> None:
        if self._paper is None or self._session is not None:
            return
        self.showFullScreen()
        fullscreen = bool(self.windowState() & Qt.WindowFullScreen)

        session: DeliverySession[GradeResult] = DeliverySession(
            self._paper.questions,
            self._submit,
            seconds_per_question=self._seconds_per_question,
        )
        if not session.start(fullscreen_acquired=fullscreen):
            show_warning(self, STUDENT_WINDOW_TITLE, FULLSCREEN_REQUIRED_MESSAGE)
            return

        self._session = session
        self._monitor = ProctoringMonitor(
            session,
            max_strikes=self._max_tab_switches,
            notify=self._on_proctoring_notice,
        )
        logger.info("Student %s started quiz %s", self._student_id, self._quiz_id)
        if session.state is DeliveryState.COMPLETED:
            self._show_results()
            return
        self._timer.start()
        self.pages.setCurrentIndex(_QUESTION_PAGE)
        self._render_question()

    def _submit(self, answers: list[StudentAnswer], started_at: datetime) -> GradeResult:
        return self._client.submit(self._quiz_id, self._student_id, answers, started_at)

    def _on_option_clicked(self, button: QPushButton) -> None:
        if self._session is None or not self._session.is_in_progress:
            return
        self._session.select_answer(button.property("option"))

    def _handle_next(self) -> None:
        if self._session is None:
            return
        self._session.advance()
        self._refresh()

    def _on_tick(self) -> None:
        if self._session is None:
            return
        self._session.tick()
        self._refresh(timer_only=True)

    def _refresh(self, *, timer_only: bool = False) -> None:
        if self._session is None:
            return
        if self._session.state is DeliveryState.COMPLETED:
            self._show_results()
        elif timer_only:
            self._render_timer()
        else:
            self._render_question()

    # --- Proctoring hooks ---

    def _on_application_state_changed(self, state: Qt.ApplicationState) -> None:
        if self._monitor is None:
            return
        if self._monitor.on_application_state(state == Qt.ApplicationActive) is not None:
            self._refresh()

    def changeEvent(self, event: QEvent) -> None:
        super().changeEvent(event)
        if event.type() != QEvent.WindowStateChange or self._monitor is None:
            return
        if not self.windowState() & Qt.WindowFullScreen:
            self._monitor.on_fullscreen_exit()
            self._refresh()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if self._monitor is None:
            return False
        if event.type() == QEvent.ContextMenu and self._monitor.blocks_context_menu:
            return True
        if event.type() == QEvent.KeyPress:
            modifiers = event.modifiers()
            key_name = QKeySequence(event.key()).toString()
            if self._monitor.should_block_key(
                key_name,
                ctrl=bool(modifiers & Qt.ControlModifier),
                shift=bool(modifiers & Qt.ShiftModifier),
            ):
                return True
        return False

    def _on_proctoring_notice(self, notice: ProctoringNotice) -> None:
        if notice.event is ProctoringEvent.SHORTCUT_BLOCKED:
            self.strike_label.setText(notice.message)
            return
        if notice.event is ProctoringEvent.TAB_SWITCH_WARNING:
            self.strike_label.setText(notice.message)
        show_warning(self, STUDENT_WINDOW_TITLE, notice.message)

    # --- Rendering ---

    def _render_question(self) -> None:
        question = self._session.current_question if self._session else None
        if question is None:
            return
        self.progress_label.setText(
            f"Question {self._session.current_index + 1} of {self._session.question_count}"
        )
        self.question_view.setHtml(renderer.render_full_document(question.text))

        for button in self.option_group.buttons():
            self.option_group.removeButton(button)
            self.options_layout.removeWidget(button)
            button.deleteLater()
        selected = self._session.selected_answer
        for index, option in enumerate(question.options):
            button = QPushButton(f"{chr(ord('A') + index)}. {option}", self)
            button.setCheckable(True)
            button.setChecked(option == selected)
            button.setProperty("option", option)
            self.option_group.addButton(button)
            self.options_layout.addWidget(button)

        self.next_button.setText(
            STUDENT_FINISH_BUTTON if self._session.is_last_question else STUDENT_NEXT_BUTTON
        )
        self._render_timer()

    def _render_timer(self) -> None:
        if self._session is None:
            return
        minutes, seconds = divmod(self._session.time_left, 60)
        self.timer_label.setText(f"Time left: {minutes}:{seconds:02d}")
        self.timer_label.setStyleSheet(
            Styles.get_timer_label_style(self._session.time_left <= TIME_LEFT_WARNING_SECONDS)
        )

    def _show_results(self) -> None:
        if self._results_shown or self._session is None:
            return
        self._results_shown = True
        self._timer.stop()
        self.showNormal()

        reason = self._session.completion_reason
        logger.info(
            "Quiz %s for %s completed: %s",
            self._quiz_id,
            self._student_id,
            reason.name if reason else "unknown",
        )
        if self._session.submit_error is not None:
            message = f"{SUBMIT_FAILED_MESSAGE}\n{self._session.submit_error}"
            self.results_view.setHtml(renderer.render_full_document(message))
            self.pages.setCurrentIndex(_RESULTS_PAGE)
            show_warning(self, STUDENT_WINDOW_TITLE, message)
            return

        if reason is CompletionReason.TIMEOUT:
            show_info(self, STUDENT_WINDOW_TITLE, "Time is up. Your answers were submitted.")
        self.results_view.setHtml(render_result_review(self._session.result))
        self.pages.setCurrentIndex(_RESULTS_PAGE)

    def closeEvent(self, event) -> None:
        if self._session is not None and self._session.is_in_progress:
            self._monitor.on_fullscreen_exit()
            self._show_results()
        QApplication.instance().removeEventFilter(self)
        super().closeEvent(event)
