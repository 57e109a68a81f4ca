"""Riot API constants and enum definitions."""

from enum import Enum


class Region(str, Enum):
    """Riot API regions for regional routing."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API platforms for platform routing."""

    BR1 = "br1"
    EUN1 = "eun1"
    EUW1 = "euw1"
    JP1 = "jp1"
    KR = "kr"
    LA1 = "la1"
    LA2 = "la2"
    NA1 = "na1"
    OC1 = "oc1"
    PH2 = "ph2"
    RU = "ru"
    SG2 = "sg2"
    TH2 = "th2"
    TR1 = "tr1"
    TW2 = "tw2"
    VN2 = "vn2"


class QueueType(int, Enum):
    """Riot API queue types for match filtering."""

    RANKED_SOLO_5X5 = 420
    RANKED_FLEX_5X5 = 440
    ARAM = 450
    ARENA = 1700


# Match-v5 by-puuid listing never returns more than this many ids per page
MAX_MATCH_PAGE_SIZE = 100

DATA_DRAGON_BASE_URL = "https://ddragon.leagueoflegends.com/cdn"
