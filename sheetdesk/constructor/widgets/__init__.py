# sheetdesk/constructor/widgets/__init__.py
