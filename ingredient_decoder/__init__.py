# /__init__.py

# Python Imports
import os
import logging
import subprocess
from pathlib import Path
import toml

# Third party imports
from flask import Flask, Response, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from dotenv import load_dotenv

# Local imports

# Define the WSGI application object
app = Flask(__name__)

##################################
### Load Flask Run Mode
### Configuration based
### on environment
### (Production, Development)
##################################
load_dotenv("./.env", verbose=True)
app.config.from_object(os.environ.get("APP_MODE") or "config.ProdConfig")


##################################
### Logging Setup
##################################
os.makedirs(app.config["INGREDIENT_DECODER_FOLDER"], exist_ok=True)
logging.basicConfig(
    filename=app.config["INGREDIENT_DECODER_LOG_FILE"],
    level=logging.INFO,
    format="%(asctime)s %(levelname)s : %(message)s",
)

def log_message(message):
    """Helper function to prefix Log message with the source IP address"""
    source_ip = (
        request.headers.get("X-Forwarded-For", request.remote_addr or "")
        .split(",")[0]
        .strip()
    )
    return f"[IP: {source_ip}] {message}"


@app.route("/get-log")
def get_log():
    """Get the last x lines of the application log file."""
    app.logger.debug(log_message("Processing /get-log route..."))
    log_file_path = app.config["INGREDIENT_DECODER_LOG_FILE"]
    lines_to_show = app.config["LOG_LINES_TO_SHOW"]
    if not os.path.exists(log_file_path):
        return jsonify({"error": "Log file not found"}), 404

    # use subprocess to call the system's tail command
    try:
        if app.config["APP_SERVER_OS"] == "Windows":
            result = subprocess.run(
                ["powershell", "Get-Content", log_file_path, "-Tail", lines_to_show],
                stdout=subprocess.PIPE,
            )
        else:
            result = subprocess.run(
                ["/usr/bin/tail", "-n", lines_to_show, log_file_path], stdout=subprocess.PIPE
            )
        log_content = result.stdout.decode("utf-8")
    except Exception as e:
        app.logger.error(log_message(f"Error reading log file: {e}"))
        return jsonify({"error": "Error reading log file"}), 500

    return Response(log_content, mimetype="text/plain")


##################################
### Database Setup
##################################
app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + os.path.join(
    app.config["INGREDIENT_DECODER_FOLDER"], app.config["INGREDIENT_DECODER_DB_FILE_NAME"]
)
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

app.logger.info(f"Ingredient Decoder Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}")

db = SQLAlchemy(app)

# Initialize schema (idempotent) so local persistence works out of the box.
with app.app_context():
    import ingredient_decoder.models  # noqa: F401

    db.create_all()


##################################
### Routing Blueprint Setup
##################################
from ingredient_decoder.error_pages.handlers import error_pages
from ingredient_decoder.barcodes.views import barcodes
from ingredient_decoder.analysis.views import analysis
from ingredient_decoder.flags.views import flags
from ingredient_decoder.history.views import history


app.register_blueprint(error_pages)
app.register_blueprint(barcodes)
app.register_blueprint(analysis)
app.register_blueprint(flags)
app.register_blueprint(history)


##################################
### Version
##################################
_PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def get_version():
    """Get the version of the application."""
    with open(_PYPROJECT, "r") as f:
        pyproject_data = toml.load(f)
    return pyproject_data["project"]["version"]


@app.route("/version")
def version():
    """Report the running application version."""
    return jsonify({"version": get_version()})
