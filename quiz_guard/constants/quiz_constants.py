"""Quiz-related constants shared across UI, server and core layers."""

SECONDS_PER_QUESTION: int = 60
MAX_TAB_SWITCHES: int = 3
MIN_OPTIONS: int = 2
MAX_OPTIONS: int = 4
TIME_LEFT_WARNING_SECONDS: int = 10

COLUMN_QUIZ_TITLE: str = "Quiz Title"
COLUMN_QUIZ_INSTRUCTIONS: str = "Quiz Instructions"
COLUMN_QUESTION_TEXT: str = "Question Text"
COLUMN_OPTIONS: tuple[str, ...] = ("Option A", "Option B", "Option C", "Option D")
COLUMN_CORRECT_ANSWER: str = "Correct Answer"

IMPORT_COLUMNS: tuple[str, ...] = (
    COLUMN_QUIZ_TITLE,
    COLUMN_QUIZ_INSTRUCTIONS,
    COLUMN_QUESTION_TEXT,
    *COLUMN_OPTIONS,
    COLUMN_CORRECT_ANSWER,
)
