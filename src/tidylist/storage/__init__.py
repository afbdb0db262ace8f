"""
Persistence subsystem.

Components:
- codec.py: JSON blob <-> list[Task]
- kv.py: key-value backends (SQLite, one-file-per-slot, in-memory)
- adapter.py: PersistenceAdapter (save/load of the whole list in one slot)
"""
