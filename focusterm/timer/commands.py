"""Command tokens accepted by the timer engine."""

from enum import Enum


class Command(Enum):
    START = "start"
    RESET = "reset"
    SWITCH_MODE = "switch_mode"
    BEGIN_EDIT_FOCUS = "begin_edit_focus"
    BEGIN_EDIT_BREAK = "begin_edit_break"
    INCREASE_EDITED_DURATION = "increase_edited_duration"
    DECREASE_EDITED_DURATION = "decrease_edited_duration"
    COMMIT_EDIT = "commit_edit"
    CANCEL_EDIT = "cancel_edit"
    QUIT = "quit"
