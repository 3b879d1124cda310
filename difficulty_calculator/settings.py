import os

from dotenv import load_dotenv


def read_bool(value: str) -> bool:
    return value.lower() == "true"


def read_ruleset_ids(value: str) -> list[int] | None:
    if value.strip().lower() in ("", "all"):
        return None

    return [int(ruleset_id) for ruleset_id in value.split(",")]


load_dotenv()

APP_ENV = os.environ["APP_ENV"]
APP_LOG_LEVEL = int(os.environ["APP_LOG_LEVEL"])

READ_DB_SCHEME = os.environ["READ_DB_SCHEME"]
READ_DB_HOST = os.environ["READ_DB_HOST"]
READ_DB_PORT = int(os.environ["READ_DB_PORT"])
READ_DB_USER = os.environ["READ_DB_USER"]
READ_DB_PASS = os.environ["READ_DB_PASS"]
READ_DB_NAME = os.environ["READ_DB_NAME"]
READ_DB_USE_SSL = read_bool(os.environ["READ_DB_USE_SSL"])
READ_DB_CA_CERTIFICATE_BASE64 = os.environ["READ_DB_CA_CERTIFICATE"]

WRITE_DB_SCHEME = os.environ["WRITE_DB_SCHEME"]
WRITE_DB_HOST = os.environ["WRITE_DB_HOST"]
WRITE_DB_PORT = int(os.environ["WRITE_DB_PORT"])
WRITE_DB_USER = os.environ["WRITE_DB_USER"]
WRITE_DB_PASS = os.environ["WRITE_DB_PASS"]
WRITE_DB_NAME = os.environ["WRITE_DB_NAME"]
WRITE_DB_USE_SSL = read_bool(os.environ["WRITE_DB_USE_SSL"])
WRITE_DB_CA_CERTIFICATE_BASE64 = os.environ["WRITE_DB_CA_CERTIFICATE"]

DB_POOL_MIN_SIZE = int(os.environ["DB_POOL_MIN_SIZE"])
DB_POOL_MAX_SIZE = int(os.environ["DB_POOL_MAX_SIZE"])

# "all" (or empty) processes every registered ruleset
PROCESS_RULESET_IDS = read_ruleset_ids(os.environ["PROCESS_RULESET_IDS"])
PROCESS_CONVERTS = read_bool(os.environ["PROCESS_CONVERTS"])
DRY_RUN = read_bool(os.environ["DRY_RUN"])
SKIP_INSERT_ATTRIBUTES = read_bool(os.environ["SKIP_INSERT_ATTRIBUTES"])
WRITE_BEATMAP_METADATA = read_bool(os.environ["WRITE_BEATMAP_METADATA"])
INSERT_BEATMAPS = read_bool(os.environ["INSERT_BEATMAPS"])
