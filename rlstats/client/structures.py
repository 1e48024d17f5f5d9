from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "PlatformId",
    "StatType",
    "UNRANKED_TIER_ID",
    "Structure",
    "ResponseCode",
    "Platform",
    "Season",
    "Population",
    "Playlist",
    "Tier",
    "Stats",
    "RankedData",
    "Player",
    "SearchResponse",
    "BatchPlayer",
]

UNRANKED_TIER_ID = 0


class PlatformId(IntEnum):
    STEAM = 1
    PS4 = 2
    XBOX_ONE = 3


class StatType(str, Enum):
    WINS = "wins"
    GOALS = "goals"
    MVPS = "mvps"
    SAVES = "saves"
    SHOTS = "shots"
    ASSISTS = "assists"


class Structure(BaseModel):
    """
    Base for every record exchanged with the service.

    Records are frozen, accept both the python field name and the wire alias,
    and ignore keys they do not know about.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ResponseCode(Structure):
    """
    Error envelope returned by the service.

    See http://documentation.rocketleaguestats.com/#response-codes
    """
    code: int
    message: str


class Platform(Structure):
    id: int
    name: str


class Season(Structure):
    season_id: int = Field(alias="seasonId")
    started_on: int = Field(alias="startedOn")  # unix timestamp
    ended_on: Optional[int] = Field(None, alias="endedOn")  # None while the season is running

    @property
    def is_active(self) -> bool:
        return self.ended_on is None


class Population(Structure):
    players: int
    updated_at: int = Field(alias="updatedAt")


class Playlist(Structure):
    id: int
    platform_id: int = Field(alias="platformId")
    name: str
    population: Population


class Tier(Structure):
    id: int = Field(alias="tierId")
    name: str = Field(alias="tierName")

    @property
    def is_unranked(self) -> bool:
        return self.id == UNRANKED_TIER_ID


class Stats(Structure):
    wins: int
    goals: int
    mvps: int
    saves: int
    shots: int
    assists: int


class RankedData(Structure):
    rank_points: Optional[int] = Field(None, alias="rankPoints")
    matches_played: Optional[int] = Field(None, alias="matchesPlayed")
    tier: Optional[int] = None
    division: Optional[int] = None


class Player(Structure):
    """
    A player tracked by the service.

    The service only knows players that have scored at least one goal.
    ``ranked_seasons`` maps a season id to a mapping of playlist id to
    :class:`RankedData`, both keyed by strings as they appear on the wire.
    """
    unique_id: str = Field(alias="uniqueId")  # Steam 64 ID / PSN username / Xbox XUID
    display_name: str = Field(alias="displayName")
    platform: Platform
    avatar: Optional[str] = None
    profile_url: Optional[str] = Field(None, alias="profileUrl")
    signature_url: Optional[str] = Field(None, alias="signatureUrl")
    stats: Stats
    ranked_seasons: dict[str, dict[str, RankedData]] = Field(alias="rankedSeasons")
    last_requested: int = Field(alias="lastRequested")
    created_at: int = Field(alias="createdAt")
    updated_at: int = Field(alias="updatedAt")
    next_update_at: int = Field(alias="nextUpdateAt")

    def ranked_data(self, season_id: int | str, playlist_id: int | str) -> Optional[RankedData]:
        return self.ranked_seasons.get(str(season_id), {}).get(str(playlist_id))


class SearchResponse(Structure):
    page: Optional[int] = None
    results: int
    total_results: int = Field(alias="totalResults")
    max_results_per_page: int = Field(alias="maxResultsPerPage")
    data: list[Player]


class BatchPlayer(Structure):
    """Request item for the batch lookup, never returned by the service."""
    unique_id: str = Field(alias="uniqueId")
    platform_id: int = Field(alias="platformId")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
