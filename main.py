"""
notecanvas Server Entry Point

Run with: python main.py
Or with uvicorn: uvicorn app:app --reload
"""

import uvicorn

from notecanvas.config import Config

if __name__ == "__main__":
    config = Config.from_env()

    uvicorn.run(
        "app:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
        log_level=config.logging.level.lower(),
    )
