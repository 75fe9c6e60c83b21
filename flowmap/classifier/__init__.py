"""Classifier package — page typing and global/contextual link split."""

from flowmap.classifier.global_nav import classify_global_navigation
from flowmap.classifier.page_analyzer import analyze_page, identify_page_type

__all__ = ["analyze_page", "classify_global_navigation", "identify_page_type"]
