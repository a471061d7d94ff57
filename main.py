"""
Entry point for the Restaurant Service
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

# Import the FastAPI application
from app import app

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    port = app.state.settings.port
    logger.info(f"Starting Restaurant Service on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
