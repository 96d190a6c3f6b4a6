# sheetdesk/core/__init__.py
