# ------------ Config ------------
UNBOUNDED_LOG_SIZE = -1            # max_log_size value that disables eviction
DEFAULT_BACKLOG_STRATEGY = "full"  # replay every retained message on subscribe
LOGGER_NAME = "messagebus"
LOG_LEVEL = "INFO"
API_HOST = "127.0.0.1"             # inspection API bind address
API_PORT = 8000
# --------------------------------
