#!/usr/bin/env python3
"""
Run the Django development server on the configured PORT.
Usage: python run_server.py
"""
import logging
import os
import sys
from pathlib import Path


# Add the project directory to Python path
BASE_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(BASE_DIR))

# Set Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "bazaarBackend.settings")

import django  # noqa: E402
from django.conf import settings  # noqa: E402
from django.core.management import execute_from_command_line  # noqa: E402


logger = logging.getLogger(__name__)

if __name__ == "__main__":
    django.setup()

    address = f"0.0.0.0:{settings.PORT}"
    logger.info(f"Starting {settings.APP_NAME} API on http://{address}")
    logger.info(f"Database: {settings.DB_PATH}")

    execute_from_command_line([sys.argv[0], "runserver", address, *sys.argv[1:]])
