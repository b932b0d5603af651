"""Interactive category and file picker."""

from broom.picker.controller import FilePicker
from broom.picker.keys import Key
from broom.picker.selection import PickerResult, SelectionState
from broom.picker.session import PickerAborted, run_picker

__all__ = ["FilePicker", "Key", "PickerAborted", "PickerResult", "SelectionState", "run_picker"]
