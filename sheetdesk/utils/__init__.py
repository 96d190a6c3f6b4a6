# sheetdesk/utils/__init__.py
