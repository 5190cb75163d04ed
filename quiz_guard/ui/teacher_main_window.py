"""Qt main window for authoring quizzes and reviewing results."""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path

from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quiz_guard.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from quiz_guard.constants.ui_constants import (
    EXPORT_DIALOG_TITLE,
    EXPORT_FILE_FILTER,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    MODE_BUTTON_EXPORT,
    MODE_BUTTON_IMPORT,
    MODE_BUTTON_MAKE,
    MODE_BUTTON_QUIZZES,
    MODE_BUTTON_RESULTS,
    NO_QUIZ_SELECTED_MESSAGE,
    WINDOW_TITLE,
)
from quiz_guard.core.errors import QuizGuardError
from quiz_guard.core.quiz_exporter import save_quiz_to_file
from quiz_guard.core.quiz_manager import QuizManager
from quiz_guard.styling.styles import Styles
from quiz_guard.ui.components.creation_panel import CreationPanel
from quiz_guard.ui.components.quiz_list_panel import QuizListPanel
from quiz_guard.ui.components.results_panel import ResultsPanel
from quiz_guard.ui.dialog_helpers import show_error, show_info, show_warning


class TeacherMode(Enum):
    """High-level UI mode for the teacher console."""

    QUIZ_CREATION = auto()
    QUIZ_LIST = auto()
    RESULTS = auto()


class TeacherMainWindow(QMainWindow):
    """Main Qt window switching between the creation, list and results panels."""

    def __init__(self, quiz_manager: QuizManager, server_url: str) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.quiz_manager = quiz_manager
        self.server_url = server_url
        self._mode = TeacherMode.QUIZ_LIST
        self._last_export_dir: Path | None = None

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self.quiz_list_panel.refresh()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)

        self.creation_panel = CreationPanel(self.quiz_manager, self)
        self.creation_panel.quiz_saved.connect(self._on_quiz_saved)

        self.quiz_list_panel = QuizListPanel(self.quiz_manager, self.server_url, self)
        self.quiz_list_panel.edit_requested.connect(self._handle_edit_quiz)
        self.quiz_list_panel.quiz_selected.connect(self._on_quiz_selected)
        self.quiz_list_panel.quiz_deleted.connect(self._on_quiz_deleted)

        self.results_panel = ResultsPanel(self.quiz_manager, self)

        self.mode_stack.addWidget(self.creation_panel)
        self.mode_stack.addWidget(self.quiz_list_panel)
        self.mode_stack.addWidget(self.results_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(TeacherMode.QUIZ_LIST)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.make_mode_button = QPushButton(MODE_BUTTON_MAKE, self)
        self.make_mode_button.setCheckable(True)
        self.make_mode_button.clicked.connect(self._handle_make_new_quiz)
        button_row.addWidget(self.make_mode_button)

        self.list_mode_button = QPushButton(MODE_BUTTON_QUIZZES, self)
        self.list_mode_button.setCheckable(True)
        self.list_mode_button.clicked.connect(self._handle_show_quizzes)
        button_row.addWidget(self.list_mode_button)

        self.results_mode_button = QPushButton(MODE_BUTTON_RESULTS, self)
        self.results_mode_button.setCheckable(True)
        self.results_mode_button.clicked.connect(self._handle_show_results)
        button_row.addWidget(self.results_mode_button)

        self.import_button = QPushButton(MODE_BUTTON_IMPORT, self)
        self.import_button.clicked.connect(self._handle_import_quiz)
        button_row.addWidget(self.import_button)

        self.export_button = QPushButton(MODE_BUTTON_EXPORT, self)
        self.export_button.clicked.connect(self._handle_export_quiz)
        button_row.addWidget(self.export_button)

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        layout.addLayout(button_row)

    def _set_mode(self, mode: TeacherMode) -> None:
        self._mode = mode
        self.make_mode_button.setChecked(mode == TeacherMode.QUIZ_CREATION)
        self.list_mode_button.setChecked(mode == TeacherMode.QUIZ_LIST)
        self.results_mode_button.setChecked(mode == TeacherMode.RESULTS)

        index_map = {
            TeacherMode.QUIZ_CREATION: 0,
            TeacherMode.QUIZ_LIST: 1,
            TeacherMode.RESULTS: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    # --- Mode handlers ---

    def _handle_make_new_quiz(self) -> None:
        if self.creation_panel.new_quiz():
            self._set_mode(TeacherMode.QUIZ_CREATION)
        else:
            self._set_mode(self._mode)

    def _handle_show_quizzes(self) -> None:
        self.quiz_list_panel.refresh()
        self._set_mode(TeacherMode.QUIZ_LIST)

    def _handle_show_results(self) -> None:
        quiz_id = self.quiz_list_panel.selected_quiz_id()
        if quiz_id is None:
            show_warning(self, "No quiz", NO_QUIZ_SELECTED_MESSAGE)
            self._set_mode(self._mode)
            return
        self.results_panel.set_quiz(quiz_id)
        self._set_mode(TeacherMode.RESULTS)

    def _handle_edit_quiz(self, quiz_id: str) -> None:
        try:
            quiz = self.quiz_manager.get_quiz(quiz_id)
        except QuizGuardError as exc:
            show_error(self, "Could not load quiz", str(exc))
            return
        if self.creation_panel.load_quiz(quiz):
            self._set_mode(TeacherMode.QUIZ_CREATION)

    def _on_quiz_saved(self, _quiz_id: str) -> None:
        self.quiz_list_panel.refresh()

    def _on_quiz_selected(self, quiz_id: str) -> None:
        if self._mode == TeacherMode.RESULTS:
            self.results_panel.set_quiz(quiz_id)

    def _on_quiz_deleted(self, quiz_id: str) -> None:
        if self.creation_panel.editing_quiz_id == quiz_id:
            self.creation_panel.set_status_message("The quiz being edited was deleted.")

    # --- Spreadsheets ---

    def _handle_import_quiz(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        path = Path(file_path)
        try:
            quiz = self.quiz_manager.import_quiz(path.read_bytes(), path.name)
        except OSError as exc:
            show_error(self, "Import failed", str(exc))
            return
        except QuizGuardError as exc:
            show_error(self, "Quiz rejected", str(exc))
            return

        self.quiz_list_panel.refresh()
        self._set_mode(TeacherMode.QUIZ_LIST)
        show_info(
            self,
            "Quiz imported",
            f'Imported "{quiz.title}" with {len(quiz.questions)} questions.',
        )

    def _handle_export_quiz(self) -> None:
        quiz_id = self.quiz_list_panel.selected_quiz_id() or self.creation_panel.editing_quiz_id
        if quiz_id is None:
            show_warning(self, "No quiz", NO_QUIZ_SELECTED_MESSAGE)
            return
        try:
            quiz = self.quiz_manager.get_quiz(quiz_id)
        except QuizGuardError as exc:
            show_error(self, "Export failed", str(exc))
            return

        default_dir = self._last_export_dir or Path.cwd()
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            EXPORT_DIALOG_TITLE,
            str(default_dir / f"{quiz.title or 'quiz'}.xlsx"),
            EXPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            save_quiz_to_file(Path(file_path), quiz)
        except (OSError, QuizGuardError) as exc:
            show_error(self, "Export failed", str(exc))
            return

        self._last_export_dir = Path(file_path).parent
        show_info(self, "Quiz exported", f"Quiz exported to {file_path}.")

    # --- About / help ---

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}\n\n"
            f"Server: {self.server_url}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event) -> None:
        if self.creation_panel.confirm_leave():
            event.accept()
        else:
            event.ignore()
