from rlstats.info import __title__, __version__
from rlstats.client import RlStats, API_URL
from rlstats.client.errors import (
    RLStatsError,
    ConstructionError,
    TransportError,
    RateLimited,
    ServiceError,
    MalformedResponse,
)
from rlstats.client.structures import *
