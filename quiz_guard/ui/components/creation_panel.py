"""Component for creating and editing a whole quiz."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_guard.constants.quiz_constants import MAX_OPTIONS
from quiz_guard.constants.ui_constants import (
    FORM_ADD_OPTION_BUTTON,
    FORM_ADD_QUESTION_BUTTON,
    FORM_NEXT_BUTTON,
    FORM_PREV_BUTTON,
    FORM_REMOVE_OPTION_BUTTON,
    FORM_REMOVE_QUESTION_BUTTON,
    FORM_SAVE_BUTTON,
    PLACEHOLDER_INSTRUCTIONS,
    PLACEHOLDER_QUESTION,
    PLACEHOLDER_TITLE,
    QUIZ_SAVED_MESSAGE,
)
from quiz_guard.core.errors import QuizGuardError, QuizValidationError
from quiz_guard.core.models import QuestionDraft, Quiz, QuizDraft
from quiz_guard.core.quiz_manager import QuizManager
from quiz_guard.ui.dialog_helpers import (
    confirm_delete_question,
    confirm_discard_draft,
    show_error,
    show_warning,
)
from quiz_guard.ui.question_renderer import render_question_with_options


class CreationPanel(QWidget):
    """Form bound to a ``QuizDraft``, showing one question at a time.

    Every widget edit goes straight into the draft through its incremental
    operations; nothing is validated until Save, where the manager rejects
    the whole draft or stores it in one transaction.
    """

    quiz_saved = Signal(str)

    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self._draft = QuizDraft()
        self._editing_quiz_id: str | None = None
        self._current_question_index: int = 0
        self._has_unsaved_changes: bool = False
        self._loading: bool = False

        self._build_ui()
        self._show_current_question()

    @property
    def has_unsaved_changes(self) -> bool:
        return self._has_unsaved_changes

    @property
    def editing_quiz_id(self) -> str | None:
        return self._editing_quiz_id

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_input = QLineEdit(self)
        self.title_input.setPlaceholderText(PLACEHOLDER_TITLE)
        self.title_input.textChanged.connect(self._on_title_changed)
        layout.addWidget(self.title_input)

        self.instructions_input = QPlainTextEdit(self)
        self.instructions_input.setPlaceholderText(PLACEHOLDER_INSTRUCTIONS)
        self.instructions_input.setMaximumHeight(80)
        self.instructions_input.textChanged.connect(self._on_instructions_changed)
        layout.addWidget(self.instructions_input)

        action_row = QHBoxLayout()
        self.add_question_button = QPushButton(FORM_ADD_QUESTION_BUTTON, self)
        self.add_question_button.clicked.connect(self._handle_add_question)
        action_row.addWidget(self.add_question_button)

        self.remove_question_button = QPushButton(FORM_REMOVE_QUESTION_BUTTON, self)
        self.remove_question_button.clicked.connect(self._handle_remove_question)
        action_row.addWidget(self.remove_question_button)

        self.prev_button = QPushButton(FORM_PREV_BUTTON, self)
        self.prev_button.clicked.connect(lambda: self._navigate(-1))
        action_row.addWidget(self.prev_button)

        self.next_button = QPushButton(FORM_NEXT_BUTTON, self)
        self.next_button.clicked.connect(lambda: self._navigate(1))
        action_row.addWidget(self.next_button)

        self.save_button = QPushButton(FORM_SAVE_BUTTON, self)
        self.save_button.setDefault(True)
        self.save_button.clicked.connect(self._handle_save)
        action_row.addWidget(self.save_button)
        layout.addLayout(action_row)

        self.question_label = QLabel(self)
        layout.addWidget(self.question_label)

        self.question_input = QPlainTextEdit(self)
        self.question_input.setPlaceholderText(PLACEHOLDER_QUESTION)
        self.question_input.textChanged.connect(self._on_question_text_changed)
        layout.addWidget(self.question_input)

        options_row = QHBoxLayout()
        self.option_inputs: list[QLineEdit] = []
        for option_index in range(MAX_OPTIONS):
            option_input = QLineEdit(self)
            option_input.setPlaceholderText(f"Option {chr(ord('A') + option_index)}")
            option_input.textChanged.connect(
                lambda text, i=option_index: self._on_option_changed(i, text)
            )
            options_row.addWidget(option_input)
            self.option_inputs.append(option_input)
        layout.addLayout(options_row)

        option_buttons_row = QHBoxLayout()
        self.add_option_button = QPushButton(FORM_ADD_OPTION_BUTTON, self)
        self.add_option_button.clicked.connect(self._handle_add_option)
        option_buttons_row.addWidget(self.add_option_button)

        self.remove_option_button = QPushButton(FORM_REMOVE_OPTION_BUTTON, self)
        self.remove_option_button.clicked.connect(self._handle_remove_option)
        option_buttons_row.addWidget(self.remove_option_button)

        option_buttons_row.addWidget(QLabel("Correct answer:", self))
        self.correct_answer_combo = QComboBox(self)
        self.correct_answer_combo.currentIndexChanged.connect(self._on_correct_answer_changed)
        option_buttons_row.addWidget(self.correct_answer_combo)
        layout.addLayout(option_buttons_row)

        self.preview_view = QWebEngineView(self)
        layout.addWidget(self.preview_view)

        self.status_label = QLabel("Ready to create a new quiz.", self)
        layout.addWidget(self.status_label)

    # --- Draft lifecycle ---

    def new_quiz(self) -> bool:
        """Start an empty draft; returns False if the user kept the current one."""
        if not self.confirm_leave():
            return False
        self._load_draft(QuizDraft(), quiz_id=None)
        self.status_label.setText("Ready to create a new quiz.")
        return True

    def load_quiz(self, quiz: Quiz) -> bool:
        """Load a stored quiz for editing; saving will replace it."""
        if not self.confirm_leave():
            return False
        draft = QuizDraft(
            title=quiz.title,
            instructions=quiz.instructions,
            questions=[
                QuestionDraft(text=q.text, options=list(q.options), correct_ans=q.correct_ans)
                for q in quiz.questions
            ]
            or [QuestionDraft()],
        )
        self._load_draft(draft, quiz_id=quiz.id)
        self.status_label.setText(f'Editing "{quiz.title}".')
        return True

    def confirm_leave(self) -> bool:
        """Return True when it is fine to drop the current draft."""
        if not self._has_unsaved_changes:
            return True
        return confirm_discard_draft(self)

    def _load_draft(self, draft: QuizDraft, quiz_id: str | None) -> None:
        self._draft = draft
        self._editing_quiz_id = quiz_id
        self._current_question_index = 0
        self._loading = True
        try:
            self.title_input.setText(draft.title)
            self.instructions_input.setPlainText(draft.instructions)
        finally:
            self._loading = False
        self._show_current_question()
        self._has_unsaved_changes = False

    def _handle_save(self) -> None:
        try:
            if self._editing_quiz_id is None:
                quiz = self.quiz_manager.create_quiz(self._draft)
            else:
                quiz = self.quiz_manager.update_quiz(self._editing_quiz_id, self._draft)
        except QuizValidationError as exc:
            if exc.question_number is not None:
                self._current_question_index = exc.question_number - 1
                self._show_current_question()
            show_warning(self, "Invalid quiz", exc.message)
            return
        except QuizGuardError as exc:
            show_error(self, "Save failed", str(exc))
            return

        self._editing_quiz_id = quiz.id
        self._has_unsaved_changes = False
        self.status_label.setText(f"{QUIZ_SAVED_MESSAGE} ({len(quiz.questions)} questions)")
        self.quiz_saved.emit(quiz.id)

    # --- Question navigation and editing ---

    def _handle_add_question(self) -> None:
        self._draft.add_question()
        self._current_question_index = len(self._draft.questions) - 1
        self._mark_changed()
        self._show_current_question()

    def _handle_remove_question(self) -> None:
        if len(self._draft.questions) <= 1:
            show_warning(self, "Cannot remove", "A quiz keeps at least one question in the form.")
            return
        if not confirm_delete_question(self, self._current_question_index + 1):
            return
        self._draft.remove_question(self._current_question_index)
        self._current_question_index = min(
            self._current_question_index, len(self._draft.questions) - 1
        )
        self._mark_changed()
        self._show_current_question()

    def _navigate(self, step: int) -> None:
        target = self._current_question_index + step
        self._current_question_index = max(0, min(len(self._draft.questions) - 1, target))
        self._show_current_question()

    def _handle_add_option(self) -> None:
        self._draft.add_option(self._current_question_index)
        self._mark_changed()
        self._show_current_question()

    def _handle_remove_option(self) -> None:
        question = self._draft.questions[self._current_question_index]
        self._draft.remove_option(self._current_question_index, len(question.options) - 1)
        self._mark_changed()
        self._show_current_question()

    def _on_title_changed(self, text: str) -> None:
        if self._loading:
            return
        self._draft.title = text
        self._mark_changed()

    def _on_instructions_changed(self) -> None:
        if self._loading:
            return
        self._draft.instructions = self.instructions_input.toPlainText()
        self._mark_changed()

    def _on_question_text_changed(self) -> None:
        if self._loading:
            return
        self._draft.update_question(
            self._current_question_index, text=self.question_input.toPlainText()
        )
        self._mark_changed()
        self._refresh_preview()

    def _on_option_changed(self, option_index: int, text: str) -> None:
        if self._loading:
            return
        self._draft.set_option(self._current_question_index, option_index, text)
        self._mark_changed()
        self._refresh_correct_answer_choices()
        self._refresh_preview()

    def _on_correct_answer_changed(self, _index: int) -> None:
        if self._loading:
            return
        self._draft.update_question(
            self._current_question_index,
            correct_ans=self.correct_answer_combo.currentData() or "",
        )
        self._mark_changed()

    def _mark_changed(self) -> None:
        self._has_unsaved_changes = True

    # --- Rendering ---

    def _current_question(self) -> QuestionDraft:
        return self._draft.questions[self._current_question_index]

    def _show_current_question(self) -> None:
        question = self._current_question()
        total = len(self._draft.questions)
        self._loading = True
        try:
            self.question_label.setText(f"Question {self._current_question_index + 1} of {total}")
            self.question_input.setPlainText(question.text)
            for option_index, option_input in enumerate(self.option_inputs):
                visible = option_index < len(question.options)
                option_input.setVisible(visible)
                option_input.setText(question.options[option_index] if visible else "")
        finally:
            self._loading = False

        self.add_option_button.setEnabled(len(question.options) < MAX_OPTIONS)
        self.remove_option_button.setEnabled(len(question.options) > 2)
        self.prev_button.setEnabled(self._current_question_index > 0)
        self.next_button.setEnabled(self._current_question_index < total - 1)
        self._refresh_correct_answer_choices()
        self._refresh_preview()

    def _refresh_correct_answer_choices(self) -> None:
        question = self._current_question()
        self._loading = True
        try:
            self.correct_answer_combo.clear()
            self.correct_answer_combo.addItem("Select...", userData="")
            for option in question.options:
                if option.strip():
                    self.correct_answer_combo.addItem(option, userData=option)
            selected = self.correct_answer_combo.findData(question.correct_ans)
            self.correct_answer_combo.setCurrentIndex(max(0, selected))
        finally:
            self._loading = False

    def _refresh_preview(self) -> None:
        question = self._current_question()
        self.preview_view.setHtml(render_question_with_options(question.text, question.options))

    def set_status_message(self, message: str) -> None:
        self.status_label.setText(message)
