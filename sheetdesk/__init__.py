# sheetdesk/__init__.py
"""
SheetDesk - настольный CRUD-клиент для таблиц, хранящихся в удалённой
электронной таблице (шлюз автоматизации, например веб-приложение Apps Script).
"""

__version__ = "0.1.0"
