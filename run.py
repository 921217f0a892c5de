"""
Server startup script.
Run from project root: python run.py

Host, port and reload come from .env (HOST, PORT, RELOAD); defaults bind 0.0.0.0:8080.
"""
import uvicorn

import config

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.RELOAD,
        log_level=config.LOG_LEVEL.lower(),
    )
