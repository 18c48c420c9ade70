"""Entry point for running the FastAPI application."""

import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from src.services.config import configure_logging  # noqa: E402

if __name__ == "__main__":
    configure_logging()

    # PORT=7860 python main.py
    port = int(os.getenv("PORT", "8000"))

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
    )
