"""Qt UI components for the teacher console and the student kiosk."""

from .dialog_helpers import (
    confirm_delete_question,
    confirm_delete_quiz,
    confirm_discard_draft,
    show_error,
    show_info,
    show_warning,
)
from .question_renderer import render_question_with_options, render_result_review
from .student_exam_window import StudentExamWindow
from .teacher_main_window import TeacherMainWindow

__all__ = [
    "StudentExamWindow",
    "TeacherMainWindow",
    "confirm_delete_question",
    "confirm_delete_quiz",
    "confirm_discard_draft",
    "show_error",
    "show_info",
    "show_warning",
    "render_question_with_options",
    "render_result_review",
]
