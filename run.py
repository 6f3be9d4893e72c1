#!/usr/bin/env python3
"""
Simple launcher script for the Timebox API.
Run this from the root directory to start the application.
"""

import uvicorn

if __name__ == "__main__":
    print("🚀 Starting Timebox API with auto-reload...")
    print("📖 API Documentation: http://localhost:8000/docs")
    print("🔍 Health Check: http://localhost:8000/health")
    print("🛑 Press Ctrl+C to stop the server")
    print("-" * 50)

    # Use import string format for reload to work properly
    uvicorn.run(
        "timebox.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=["timebox"],
        log_level="info"
    )
