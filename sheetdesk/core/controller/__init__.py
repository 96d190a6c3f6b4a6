# sheetdesk/core/controller/__init__.py
