"""
TalentLink - API server entry point.

Usage:
    uv run python main.py
"""

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from talentlink.config import settings


def main():
    """Run the API server."""
    uvicorn.run("talentlink.api.app:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
