"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizGuard Teacher Console"
STUDENT_WINDOW_TITLE: str = "QuizGuard"
PLACEHOLDER_QUESTION: str = "Enter your question text (supports Markdown + LaTeX)."
PLACEHOLDER_TITLE: str = "Quiz title"
PLACEHOLDER_INSTRUCTIONS: str = "Instructions shown to students before they start."
TIMER_INTERVAL_MS: int = 1000

MODE_BUTTON_MAKE: str = "New Quiz"
MODE_BUTTON_QUIZZES: str = "My Quizzes"
MODE_BUTTON_IMPORT: str = "Import Spreadsheet"
MODE_BUTTON_EXPORT: str = "Export Spreadsheet"
MODE_BUTTON_RESULTS: str = "Results"

FORM_ADD_QUESTION_BUTTON: str = "Add Question"
FORM_REMOVE_QUESTION_BUTTON: str = "Remove Question"
FORM_ADD_OPTION_BUTTON: str = "Add Option"
FORM_REMOVE_OPTION_BUTTON: str = "Remove Option"
FORM_SAVE_BUTTON: str = "Save Quiz"
FORM_PREV_BUTTON: str = "Previous Question"
FORM_NEXT_BUTTON: str = "Next Question"

LIST_REFRESH_BUTTON: str = "Refresh"
LIST_EDIT_BUTTON: str = "Edit"
LIST_DELETE_BUTTON: str = "Delete"
LIST_SHARE_BUTTON: str = "Copy Share Info"

IMPORT_DIALOG_TITLE: str = "Select quiz spreadsheet"
IMPORT_FILE_FILTER: str = "Spreadsheets (*.xlsx *.csv);;All files (*.*)"
EXPORT_DIALOG_TITLE: str = "Export quiz to spreadsheet"
EXPORT_FILE_FILTER: str = "Excel workbook (*.xlsx)"

STUDENT_START_BUTTON: str = "Start Quiz"
STUDENT_NEXT_BUTTON: str = "Next Question"
STUDENT_FINISH_BUTTON: str = "Finish Quiz"
FULLSCREEN_REQUIRED_MESSAGE: str = "Fullscreen mode is required to start the quiz!"
FULLSCREEN_TERMINATED_MESSAGE: str = "Quiz terminated: Fullscreen mode is required!"
TAB_SWITCH_WARNING_TEMPLATE: str = "Warning: Tab switching detected! ({count}/{limit})"
TAB_SWITCH_TERMINATED_MESSAGE: str = "Quiz terminated due to multiple tab switches!"
SHORTCUT_BLOCKED_MESSAGE: str = "Developer tools are disabled during the quiz!"
SUBMIT_FAILED_MESSAGE: str = "Failed to submit quiz!"

NO_QUIZ_SELECTED_MESSAGE: str = "Select a quiz first."
QUIZ_SAVED_MESSAGE: str = "Quiz saved."
