# gui/dialogs/__init__.py
