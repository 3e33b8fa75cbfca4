"""Run the API with uvicorn: `python -m lawnmower_api.main`."""

import os

import uvicorn

from lawnmower_api.api import create_app

app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
