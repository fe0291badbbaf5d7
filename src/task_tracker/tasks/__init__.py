"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) and timestamp helpers
- task_store.py: JSON-file-backed repository (whole-file rewrite per mutation)
"""
