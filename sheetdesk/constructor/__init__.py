# sheetdesk/constructor/__init__.py
