"""
Development launcher for the lesson-adapt explainability API.

Serves lesson_adapt.api.main:app with auto-reload on the host and port from
LESSON_ADAPT_API_HOST / LESSON_ADAPT_API_PORT (default 127.0.0.1:8100).
For a non-reloading server use `lesson-adapt serve`.
"""
import sys
from pathlib import Path

# config.py lives at the repository root
sys.path.insert(0, str(Path(__file__).parent))

import uvicorn
from config import get_settings

settings = get_settings()

if __name__ == "__main__":
    uvicorn.run(
        "lesson_adapt.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
