"""
Tracker Module

This module merges partial player state updates into one snapshot and serves it.

Components:
- models/ - Event, snapshot and view schemas
- reducers.py - Per-event merge rules
- state.py - Snapshot store guarded by a reader/writer lock
- views.py - Item name enrichment for the status view
- item_db.py - Item id to name reference table
- baseline.py - Hiscores fetch and combat level calculation
- service.py - FastAPI transport
"""
