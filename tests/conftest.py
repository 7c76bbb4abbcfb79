import os
import sys
import tempfile
from pathlib import Path

import pytest


# Ensure the project root (repo folder) is importable when running pytest from a checkout.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Point the application at a throwaway data folder.

    The application is defined as a global in ingredient_decoder/__init__.py and
    reads configuration from environment variables at import time, and test
    modules import it during collection, so this has to run first.
    """
    data_dir = Path(tempfile.mkdtemp(prefix="ingredient_decoder_test_"))

    os.environ["APP_MODE"] = "config.DevConfig"
    os.environ["SECRET_KEY"] = "test-secret-key"
    os.environ["APP_SERVER_OS"] = "Linux"

    # Force temp persistence so tests never touch the developer's real data.
    os.environ["INGREDIENT_DECODER_FOLDER"] = str(data_dir)
    os.environ["INGREDIENT_DECODER_DB_FILE_NAME"] = "test.sqlite"
    os.environ["INGREDIENT_DECODER_LOG_FILE"] = str(data_dir / "test.log")
    os.environ["HISTORY_PER_PAGE"] = "2"


@pytest.fixture(scope="session")
def app():
    import ingredient_decoder  # noqa: E402

    return ingredient_decoder.app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db(app):
    """Database handle with every table emptied before the test runs."""
    import ingredient_decoder  # noqa: E402

    with app.app_context():
        database = ingredient_decoder.db
        for table in reversed(database.metadata.sorted_tables):
            database.session.execute(table.delete())
        database.session.commit()
        yield database
        database.session.remove()


@pytest.fixture()
def flag_factory():
    from ingredient_decoder.analysis.matcher import IngredientFlag

    def make(value, display_name=None, type="allergen", is_active=True, id=None):
        return IngredientFlag(
            id=id or f"{type}:{value}",
            type=type,
            value=value,
            display_name=display_name or value.title(),
            is_active=is_active,
        )

    return make
