"""Main entry point for the practice-time server"""
import logging
import os

logger = logging.getLogger(__name__)

from practice_time.main import app  # noqa: E402

# Expose the app for uvicorn
__all__ = ['app']

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8080))
    logger.info(f"Starting server on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
