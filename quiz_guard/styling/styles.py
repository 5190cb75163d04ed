"""Qt stylesheets for the teacher console and the student kiosk."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Builds stylesheets from the palette for a given theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QWidget {{
                background-color: {ColorPalette.BACKGROUND.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.SURFACE.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:checked, QPushButton:default {{
                background-color: {ColorPalette.ACCENT.get(theme)};
                color: {ColorPalette.ACCENT_TEXT.get(theme)};
            }}
            QLineEdit, QPlainTextEdit, QComboBox, QListWidget, QTableWidget {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_kiosk_style(theme: Theme = Theme.DARK) -> str:
        """Large-target styling for the fullscreen student window."""
        return f"""
            QWidget {{
                background-color: {ColorPalette.BACKGROUND.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Inter', 'Segoe UI', sans-serif;
                font-size: 16px;
            }}
            QPushButton {{
                background-color: {ColorPalette.ACCENT.get(theme)};
                color: {ColorPalette.ACCENT_TEXT.get(theme)};
                border: none;
                border-radius: 10px;
                padding: 14px 20px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.ACCENT_HOVER.get(theme)};
            }}
            QPushButton:checked {{
                border: 3px solid {ColorPalette.WARNING.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
        """

    @staticmethod
    def get_timer_label_style(warning: bool, theme: Theme = Theme.DARK) -> str:
        color = ColorPalette.DANGER if warning else ColorPalette.WARNING
        return f"font-size: 18pt; font-weight: bold; color: {color.get(theme)};"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
