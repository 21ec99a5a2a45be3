#!/usr/bin/env python3
"""
Run the EstateHub API server.
"""

import uvicorn

from estatehub.core.config import settings


def main():
    """Start the web server."""
    print(f"Starting EstateHub API on http://{settings.HOST}:{settings.PORT}")
    print("Press Ctrl+C to stop")

    uvicorn.run(
        "estatehub.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
    )


if __name__ == "__main__":
    main()
