"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus)
- task_store.py: JSON-file storage + add/update/mark/delete/list
- errors.py: error types reported by the CLI
"""
