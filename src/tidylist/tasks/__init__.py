"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority) and input normalization
- task_store.py: ordered in-memory list with validated mutations
"""
