import os

# `settings` reads these at import time
for key, value in {
    "APP_ENV": "test",
    "APP_LOG_LEVEL": "10",
    "READ_DB_SCHEME": "postgresql",
    "READ_DB_HOST": "localhost",
    "READ_DB_PORT": "5432",
    "READ_DB_USER": "postgres",
    "READ_DB_PASS": "postgres",
    "READ_DB_NAME": "osu",
    "READ_DB_USE_SSL": "false",
    "READ_DB_CA_CERTIFICATE": "",
    "WRITE_DB_SCHEME": "postgresql",
    "WRITE_DB_HOST": "localhost",
    "WRITE_DB_PORT": "5432",
    "WRITE_DB_USER": "postgres",
    "WRITE_DB_PASS": "postgres",
    "WRITE_DB_NAME": "osu",
    "WRITE_DB_USE_SSL": "false",
    "WRITE_DB_CA_CERTIFICATE": "",
    "DB_POOL_MIN_SIZE": "1",
    "DB_POOL_MAX_SIZE": "2",
    "PROCESS_RULESET_IDS": "0,1",
    "PROCESS_CONVERTS": "true",
    "DRY_RUN": "false",
    "SKIP_INSERT_ATTRIBUTES": "false",
    "WRITE_BEATMAP_METADATA": "false",
    "INSERT_BEATMAPS": "false",
}.items():
    os.environ.setdefault(key, value)
