"""
Entry point to run the CourtVision backend with one command.

Usage:
    python main.py

Then, in a separate terminal:
    streamlit run ui_app.py
"""

import logging

import uvicorn

from courtvision.config import settings


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("courtvision.backend:create_app", factory=True, host=settings.host, port=settings.port)
