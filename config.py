# config.py
"""Ingredient Decoder - Flask Application configuration."""

# Python imports
from os import environ, path

# Third-party imports
from dotenv import load_dotenv

# Local imports

# Load environment variables from .env file
basedir = path.abspath(path.dirname(__file__))
load_dotenv(path.join(basedir, ".env"))


class Config:
    """Base config."""

    SECRET_KEY = environ.get("SECRET_KEY")

    # Default persistence location for local dev.
    INGREDIENT_DECODER_FOLDER = environ.get("INGREDIENT_DECODER_FOLDER") or path.join(basedir, "decoder_data")
    INGREDIENT_DECODER_DB_FILE_NAME = environ.get("INGREDIENT_DECODER_DB_FILE_NAME") or "ingredient_decoder.sqlite"
    INGREDIENT_DECODER_LOG_FILE = (
        environ.get("INGREDIENT_DECODER_LOG_FILE")
        or path.join(INGREDIENT_DECODER_FOLDER, "ingredient_decoder.log")
    )

    APP_SERVER_OS = environ.get("APP_SERVER_OS") or "Linux"

    # Analysis policy. Flag counts above the cutoff move a product from
    # "caution" to "warning".
    ANALYSIS_CAUTION_MAX_FLAGS = int(environ.get("ANALYSIS_CAUTION_MAX_FLAGS") or 2)
    # "substring" or "word"
    INGREDIENT_MATCH_MODE = environ.get("INGREDIENT_MATCH_MODE") or "substring"

    HISTORY_PER_PAGE = int(environ.get("HISTORY_PER_PAGE") or 20)


class ProdConfig(Config):
    """Production System Configuration"""

    FLASK_ENV = "production"
    DEBUG = False
    TESTING = False
    LOG_LINES_TO_SHOW = "164"


class DevConfig(Config):
    """Development System Configuration"""

    FLASK_ENV = "development"
    DEBUG = True
    TESTING = True
    LOG_LINES_TO_SHOW = "164"
