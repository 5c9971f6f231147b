"""
Core state and views.

Components:
- models.py: Task / Project / User entities
- store.py: observable in-memory store (single source of truth)
- navigation.py: sidebar entries, router
- dashboard.py: summary figures
- ports.py: Protocols for external collaborators
"""
