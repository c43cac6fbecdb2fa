#!/usr/bin/env python3
"""
Development runner for the player state tracker service.
"""
import uvicorn
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from tracker.config import get_settings, settings_summary

if __name__ == "__main__":
    settings = get_settings()

    print("Starting Player State Tracker")
    for line in settings_summary(settings):
        print(line)
    print("-" * 50)

    uvicorn.run(
        "tracker.service:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level
    )
