import os

from dotenv import load_dotenv

# Load .env so settings are available when running via Streamlit
load_dotenv()

# Path: project_root/data/epilepsy.db
BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.path.join(BASE_DIR, "data")
DEFAULT_DB_PATH = os.path.join(DATA_DIR, "epilepsy.db")

DATABASE_URL = os.getenv("EPILEPSY_DATABASE_URL", f"sqlite:///{DEFAULT_DB_PATH}")

# Single key under which the whole patient collection is stored
STORAGE_KEY = os.getenv("EPILEPSY_STORAGE_KEY", "LZRYEK_EPILEPSY_PATIENTS")

LOG_LEVEL = os.getenv("EPILEPSY_LOG_LEVEL", "INFO")
