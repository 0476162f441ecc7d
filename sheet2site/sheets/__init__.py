from .reader import MalformedSheetError, SheetReadError, read_sheet

__all__ = ["MalformedSheetError", "SheetReadError", "read_sheet"]
