"""Automated players and the dealer commentary client."""

from teen_patti.agents.bot_policy import BotDecision, BotPolicy
from teen_patti.agents.commentary import CommentaryService, DealerCommentator

__all__ = ["BotDecision", "BotPolicy", "CommentaryService", "DealerCommentator"]
