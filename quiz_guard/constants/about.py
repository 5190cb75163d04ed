"""Static metadata describing QuizGuard."""

APP_NAME = "QuizGuard"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizGuard is a classroom quiz tool built with Qt and FastAPI. "
    "Teachers author multiple-choice quizzes by hand or from a spreadsheet, "
    "and students take them in a fullscreen kiosk with a per-question timer."
)

HELP_TEXT = (
    "Create a quiz in the form (2-4 options per question, pick the correct one), "
    "or import a spreadsheet (.xlsx or .csv) with these columns:\n\n"
    "Quiz Title, Quiz Instructions (first row only)\n"
    "Question Text, Option A, Option B, Option C, Option D, Correct Answer\n\n"
    "The Correct Answer cell must repeat the text of one of the options exactly.\n\n"
    "Proctoring (fullscreen, tab-switch strikes, blocked shortcuts) is a deterrent, "
    "not an integrity guarantee: a student who controls their own machine can bypass it."
)
