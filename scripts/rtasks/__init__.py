"""
R-Tasks - a full-screen organizer for folders of tasks.

Architecture:
- model.py: Folder/Task/Status tree and selection cursor
- store.py: JSON persistence (~/.rtasks/tasks.json)
- wizard.py: modal key-input state machine
- snapshot.py: read-only state handed to the renderer
- views/: Textual screen and widget components
- app.py: main application entry point
"""
