"""Phrase refinement clients."""

from .web_search import WebSearchRefiner, clean_result_title, rank_search_results

__all__ = ["WebSearchRefiner", "clean_result_title", "rank_search_results"]
