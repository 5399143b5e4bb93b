import os
import dotenv


dotenv.load_dotenv()


# Defaults
DEBUG = False
VERBOSE = False
LOG_PATH = "rtorrent_rpc.log"
LOG_LEVEL = "DEBUG" if DEBUG else "INFO"
LOG_ROTATION = "1 week"
LOG_RETENTION = "1 month"

RTORRENT_RPC_URL = "http://localhost:9080/RPC2"
RTORRENT_USERNAME = ""
RTORRENT_PASSWORD = ""
RTORRENT_TIMEOUT = 10


class Config:
    DEBUG = os.getenv("DEBUG", str(DEBUG)).lower() == "true"
    VERBOSE = os.getenv("VERBOSE", str(VERBOSE)).lower() == "true"

    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else LOG_LEVEL)
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    # rTorrent connection
    RTORRENT_RPC_URL = os.getenv("RTORRENT_RPC_URL", RTORRENT_RPC_URL)
    RTORRENT_USERNAME = os.getenv("RTORRENT_USERNAME", RTORRENT_USERNAME)
    RTORRENT_PASSWORD = os.getenv("RTORRENT_PASSWORD", RTORRENT_PASSWORD)
    RTORRENT_TIMEOUT = int(os.getenv("RTORRENT_TIMEOUT", RTORRENT_TIMEOUT))
