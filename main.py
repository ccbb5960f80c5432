"""
Entry point for the Employee Directory Service
"""

import sys
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Import the FastAPI application
from employee_directory.app import app
from employee_directory.config.settings import HOST, PORT

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Employee Directory Service on port {PORT}")
    server = uvicorn.Server(uvicorn.Config(app, host=HOST, port=PORT))
    server.run()
    # Exit status reports whether the database session was released cleanly
    sys.exit(0 if app.state.clean_shutdown else 1)
