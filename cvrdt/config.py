import os


class Config:
    """Reads replica configuration from environment variables."""

    def __init__(self):
        self.replica_id = os.getenv("REPLICA_ID", "replica-0")
        self.replica_index = int(os.getenv("REPLICA_INDEX", "0"))
        self.replica_count = max(int(os.getenv("REPLICA_COUNT", "1")), 1)
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
