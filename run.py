#!/usr/bin/env python3
"""Run script for smartcalendar."""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "smartcalendar.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
