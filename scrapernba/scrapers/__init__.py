"""NBA data scrapers organized by data type."""

from .players import (
    getPlayerCareerData, scrapePlayerCareer,
    getPlayerGameLogData, scrapePlayerGameLog,
    getPlayerInfoData,
    getAllPlayersData, scrapeAllPlayers,
    getPlayerEstimatedMetricsData, scrapePlayerEstimatedMetrics,
)
from .teams import (
    getTeamsData, scrapeTeams,
    getRosterData, scrapeRoster,
    getTeamGameLogData, scrapeTeamGameLog,
    getTeamInfoData,
    getTeamHistoryData, scrapeTeamHistory,
)
from .league import (
    getLeadersData, scrapeLeaders,
    getStandingsData, scrapeStandings,
    getLeagueGameLogData, scrapeLeagueGameLog,
    getPlayerStatsData, scrapePlayerStats,
    getGameFinderData, scrapeGameFinder,
)
from .games import (
    getScoreboardData, scrapeScoreboard,
    getBoxScoreData, scrapeBoxScore,
    getPlayByPlayData, scrapePlays,
    getShotChartData, scrapeShotChart,
    getLiveScoreboardData, scrapeLiveScoreboard,
    getLiveOddsData,
)
from .draft import getDraftHistoryData, scrapeDraftHistory

__all__ = [
    # Players
    "getPlayerCareerData", "scrapePlayerCareer",
    "getPlayerGameLogData", "scrapePlayerGameLog",
    "getPlayerInfoData",
    "getAllPlayersData", "scrapeAllPlayers",
    "getPlayerEstimatedMetricsData", "scrapePlayerEstimatedMetrics",
    # Teams
    "getTeamsData", "scrapeTeams",
    "getRosterData", "scrapeRoster",
    "getTeamGameLogData", "scrapeTeamGameLog",
    "getTeamInfoData",
    "getTeamHistoryData", "scrapeTeamHistory",
    # League
    "getLeadersData", "scrapeLeaders",
    "getStandingsData", "scrapeStandings",
    "getLeagueGameLogData", "scrapeLeagueGameLog",
    "getPlayerStatsData", "scrapePlayerStats",
    "getGameFinderData", "scrapeGameFinder",
    # Games & Plays
    "getScoreboardData", "scrapeScoreboard",
    "getBoxScoreData", "scrapeBoxScore",
    "getPlayByPlayData", "scrapePlays",
    "getShotChartData", "scrapeShotChart",
    "getLiveScoreboardData", "scrapeLiveScoreboard",
    "getLiveOddsData",
    # Draft
    "getDraftHistoryData", "scrapeDraftHistory",
]
