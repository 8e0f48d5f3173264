from .constants import (
    UNBOUNDED_LOG_SIZE,
    DEFAULT_BACKLOG_STRATEGY,
    LOGGER_NAME,
    LOG_LEVEL,
    API_HOST,
    API_PORT,
)
from .logger import setup_logger, get_logger
from .utility_functions import now, make_message, make_topic_info, make_topic_stats
