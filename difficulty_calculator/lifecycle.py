import base64
import ssl

from difficulty_calculator import clients
from difficulty_calculator import logger
from difficulty_calculator import rulesets
from difficulty_calculator import settings
from difficulty_calculator.adapters import database
from difficulty_calculator.processor import DifficultyProcessor


def _create_ssl_context(ca_certificate_base64: str) -> ssl.SSLContext:
    return ssl.create_default_context(
        purpose=ssl.Purpose.SERVER_AUTH,
        cadata=base64.b64decode(ca_certificate_base64).decode(),
    )


async def _start_database():
    logger.info("Connecting to database...")
    clients.database = database.Database(
        read_dsn=database.dsn(
            scheme=settings.READ_DB_SCHEME,
            user=settings.READ_DB_USER,
            password=settings.READ_DB_PASS,
            host=settings.READ_DB_HOST,
            port=settings.READ_DB_PORT,
            database=settings.READ_DB_NAME,
        ),
        read_db_ssl=(
            _create_ssl_context(settings.READ_DB_CA_CERTIFICATE_BASE64)
            if settings.READ_DB_USE_SSL
            else False
        ),
        write_dsn=database.dsn(
            scheme=settings.WRITE_DB_SCHEME,
            user=settings.WRITE_DB_USER,
            password=settings.WRITE_DB_PASS,
            host=settings.WRITE_DB_HOST,
            port=settings.WRITE_DB_PORT,
            database=settings.WRITE_DB_NAME,
        ),
        write_db_ssl=(
            _create_ssl_context(settings.WRITE_DB_CA_CERTIFICATE_BASE64)
            if settings.WRITE_DB_USE_SSL
            else False
        ),
        min_pool_size=settings.DB_POOL_MIN_SIZE,
        max_pool_size=settings.DB_POOL_MAX_SIZE,
    )
    await clients.database.connect()
    logger.info("Connected to database(s)")


async def _shutdown_database():
    logger.info("Closing database connection...")
    await clients.database.disconnect()
    del clients.database
    logger.info("Closed database connection")


def _load_rulesets():
    logger.info("Loading rulesets...")
    clients.rulesets = rulesets.load_rulesets()


def _unload_rulesets():
    del clients.rulesets


async def start():
    logger.configure_logging(
        app_env=settings.APP_ENV,
        log_level=settings.APP_LOG_LEVEL,
    )
    # a broken ruleset is fatal, so fail before touching the database
    _load_rulesets()
    await _start_database()


async def shutdown():
    await _shutdown_database()
    _unload_rulesets()


def create_processor() -> DifficultyProcessor:
    # the built-in rulesets can't simulate legacy scores, so
    # run them with `ProcessingMode.DIFFICULTY`
    return DifficultyProcessor(
        database=clients.database,
        rulesets=clients.rulesets,
        ruleset_ids=settings.PROCESS_RULESET_IDS,
        process_converts=settings.PROCESS_CONVERTS,
        dry_run=settings.DRY_RUN,
        skip_insert_attributes=settings.SKIP_INSERT_ATTRIBUTES,
        write_beatmap_metadata=settings.WRITE_BEATMAP_METADATA,
        insert_beatmaps=settings.INSERT_BEATMAPS,
    )
