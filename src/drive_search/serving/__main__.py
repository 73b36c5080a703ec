"""Run the API with ``python -m drive_search.serving``."""

import os

import uvicorn

from drive_search.serving.app import app

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
