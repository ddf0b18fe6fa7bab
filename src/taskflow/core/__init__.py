"""
Core subsystem.

Components:
- models.py: entities (Task, Project, Employee, CurrentUser) and enums
- actions.py / reducer.py: action records and the pure reduce() transition
- store.py: TaskStore, owner of state and the write functions
- session.py: login/logout gate and the demo auth strategy
- queries.py: role-filtered reads, search and dashboard stats
- loader.py: cancellable initial data load
"""
